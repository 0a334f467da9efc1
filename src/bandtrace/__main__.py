"""Allow ``python -m bandtrace``."""

import sys

from bandtrace.cli import main

if __name__ == "__main__":
    sys.exit(main())
