from safecalc.cli import repl
from safecalc.config import LOG_LEVEL
from safecalc.logging_config import setup_logging


if __name__ == "__main__":
    setup_logging(LOG_LEVEL)
    repl()
