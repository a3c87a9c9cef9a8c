"""``python -m wren`` — same as ``wren run``."""

import sys

from wren.cli import main

if __name__ == "__main__":
    argv = sys.argv[1:]
    # Bare flags (``python -m wren --port 9000``) go to ``run``
    if not argv or argv[0].startswith("-") and argv[0] not in ("-h", "--help"):
        argv = ["run", *argv]
    main(argv)
