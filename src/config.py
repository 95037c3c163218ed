import os

WIDTH = 1280
HEIGHT = 800
FULLSCREEN = False
RESIZABLE = True
FPS = 60
VSYNC = True
CAPTION = "Thought Holes"
BACKGROUND = (0.0, 0.0, 0.0, 1.0)

# Marble
MARBLE_RADIUS = 12.0
SPAWN_POINT = (100.0, 100.0)
# Offset from the maze's top-left corner where the marble reappears
SPAWN_OFFSET = 40.0

# Physics (per tick, not per second)
ACCELERATION = 0.5
FRICTION = 0.95
MAX_VELOCITY = 8.0
RESTITUTION = 0.8

# Falling / fade-out
FALL_K = 0.65  # higher = easier to fall, lower = harder
FADE_SPEED = 5.0
FADE_MAX = 255.0

# Thought holes
HOLE_MAX_GROWTH = 40.0
HOLE_GROWTH_RATE = 0.15  # marble nearby
HOLE_STRONG_GROWTH_RATE = 0.8  # clicked
HOLE_DECAY_RATE = 0.08  # marble away
HOLE_PROXIMITY_RANGE = 200.0
HOLE_MIN_RADIUS = 30.0
HOLE_RADIUS_JITTER = 20.0
HOLE_SPACING = 60.0
HOLE_PLACEMENT_ATTEMPTS = 50
# Safe margins for hole placement; the top keeps clear of the HUD
HOLE_MARGIN_SIDE = 20.0
HOLE_MARGIN_TOP = 100.0
HOLE_MARGIN_BOTTOM = 20.0
HOLE_LABEL_SIZE = 28

# Maze
MAZE_MARGIN = 10.0
MAZE_CELL_SIZE = 80.0  # smaller = denser walls
MAZE_MIN_COLS = 10
MAZE_MIN_ROWS = 8
MAZE_WALL_THICKNESS = 12.0

# Depth 0 board, before the first maze
STARTING_WALLS = (
    (100.0, 200.0, 200.0, 30.0),
    (500.0, 400.0, 150.0, 40.0),
    (200.0, 550.0, 300.0, 25.0),
)

# Related-word lookup (Datamuse compatible)
WORDS_API_URL = os.getenv("THOUGHT_HOLES_WORDS_URL", "https://api.datamuse.com/words")
WORDS_API_TIMEOUT = float(os.getenv("THOUGHT_HOLES_WORDS_TIMEOUT", "5"))
RELATED_WORD_LIMIT = 3
FALLBACK_SUFFIXES = ("ness", "ing", "ful")
FALLBACK_MAX_LENGTH = 20

# HUD
HUD_FONT_SIZE = 36
INPUT_FONT_SIZE = 28
INPUT_MAX_LENGTH = 40
