"""Entry point functions for the civistrings command line tool."""

import os
import sys

# Add the parent directory to the sys path so that modules can be found
base_path = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.append(base_path)


def civistrings():
    """Entry point for civistrings command."""
    from scripts.strings_common import ExtractStrings

    return ExtractStrings()


if __name__ == "__main__":
    sys.exit(civistrings())
