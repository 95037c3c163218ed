"""Entry point kept minimal by delegating to Engine.

The board scene, physics and word lookup all live behind `Engine`; this file
only exists so `python src/main.py` and the `thought-holes` script share one
entry.
"""

from core.engine import Engine


def main():  # small wrapper for clarity / debuggers
    Engine().run()


if __name__ == "__main__":
    main()
