"""Presentation: pygame input, OpenGL drawing and the board scene."""
