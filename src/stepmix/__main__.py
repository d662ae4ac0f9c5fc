"""
Entry point for running stepmix as a module

Copyright (c) 2026 stepmix contributors

MIT License
"""

import sys

from stepmix.cli import main

if __name__ == "__main__":
    sys.exit(main())
