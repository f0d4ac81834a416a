"""Run with ``python -m safecalc`` (REPL) or ``python -m safecalc -e "2+2"``."""

import sys

from safecalc.cli import main

if __name__ == "__main__":
    sys.exit(main())
