"""
Module execution entry point.

Allows running with: python -m mmrproof_cli
"""

import sys
from mmrproof_cli.main import main

if __name__ == "__main__":
    sys.exit(main())
