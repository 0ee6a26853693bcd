"""Allow ``python -m draftsync``."""

import sys

from draftsync.cli import main

if __name__ == "__main__":
    sys.exit(main())
