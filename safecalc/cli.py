import argparse
import json
from typing import Callable, Optional, Sequence

from safecalc.api import Failure, evaluate
from safecalc.config import LOG_LEVEL
from safecalc.logging_config import setup_logging
from safecalc.session import Session

QUIT_COMMANDS = ("quit", "exit")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="safecalc",
        description="Evaluate arithmetic expressions over + - * / and parentheses.",
    )
    parser.add_argument("-e", "--eval", dest="expression", help="evaluate a single expression and exit")
    parser.add_argument(
        "--partial",
        action="store_true",
        help="report a trailing operator or '(' as an incomplete expression",
    )
    parser.add_argument("--json", action="store_true", help="print the outcome as JSON")
    parser.add_argument("--log-level", default=LOG_LEVEL, help="logging level (default: %(default)s)")
    parser.add_argument("--log-file", default=None, help="also write logs to this file")
    return parser


def run_expression(expression: str, allow_partial: bool = False, as_json: bool = False) -> int:
    outcome = evaluate(expression, allow_partial=allow_partial)
    if as_json:
        print(json.dumps(outcome.to_dict()))
    elif isinstance(outcome, Failure):
        print(f"Error: {outcome.reason}")
    else:
        print(outcome.result)
    return 1 if isinstance(outcome, Failure) else 0


def repl(session: Optional[Session] = None, input_fn: Callable[[str], str] = input) -> None:
    """Line-based front end: every line is committed like pressing Enter.

    ':history' lists previous results, ':clear' forgets them.
    """
    if session is None:
        session = Session()

    while True:
        try:
            line = input_fn("> ").strip()
        except EOFError:
            break

        if line in QUIT_COMMANDS:
            break
        elif line == ":history":
            if not session.history:
                print("No history yet")
            for i, entry in enumerate(session.history):
                print(f" {i + 1:> 2}: {entry.expr} = {entry.result}")
            continue
        elif line == ":clear":
            session.clear_history()
            continue
        elif not line:
            continue

        outcome = session.submit(line)
        if isinstance(outcome, Failure):
            print(f"Error: {outcome.reason}")
        elif outcome is not None:
            print(outcome.result)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level, args.log_file)

    if args.expression is not None:
        return run_expression(args.expression, allow_partial=args.partial, as_json=args.json)

    repl()
    return 0
