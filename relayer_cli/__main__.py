"""
Module execution entry point.

Allows running with: python -m relayer_cli
"""

import sys
from relayer_cli.main import main

if __name__ == "__main__":
    sys.exit(main())
