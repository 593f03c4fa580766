"""Module entry point for running scripts.site_index as a package.

Allows: python -m scripts.site_index <command>
"""

from scripts.site_index.cli import main
import sys

if __name__ == '__main__':
    sys.exit(main())
