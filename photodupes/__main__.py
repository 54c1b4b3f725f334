"""
Allow running the package with: python -m photodupes

Examples:
    python -m photodupes scan /path/to/photos
    python -m photodupes serve
    python -m photodupes config --init
"""

import sys

from .cli import main


if __name__ == '__main__':
    sys.exit(main())
