"""Entry point for duke when run as a module.

This allows the package to be run with: python -m duke
"""

import sys

from duke.cli import main

if __name__ == "__main__":
    sys.exit(main())
