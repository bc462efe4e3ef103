"""Allow ``python -m quiz_toolkit``."""

import sys

from quiz_toolkit.cli import main

if __name__ == "__main__":
    sys.exit(main())
