"""CLI entry point for sellercsv.

Enables invocation via `python -m sellercsv` or the `sellercsv` script.
"""

import sys

from sellercsv.cli.app import app

if __name__ == "__main__":
    exit_code = app()
    sys.exit(exit_code if exit_code is not None else 0)
