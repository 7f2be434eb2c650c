"""
Launcher for Neon Invaders.

Equivalent to ``python main.py``; see ``main.py`` for the options.
"""

import sys

from main import main

if __name__ == "__main__":
    sys.exit(main())
