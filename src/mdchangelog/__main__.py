"""Entry point for ``python -m mdchangelog``."""

import sys

from mdchangelog.cli import main

if __name__ == "__main__":
    sys.exit(main())
