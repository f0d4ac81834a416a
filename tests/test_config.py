import importlib
import logging
import re
from pathlib import Path
from typing import Callable, Iterator

import pytest

from safecalc import config, formatting, session
from safecalc.cli import main
from safecalc.logging_config import setup_logging

LOG_LINE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}T[\d:.]+ \[(?P<level>[A-Z]+)\] (?P<name>[\w.]+): (?P<message>.*)$")


@pytest.fixture
def reload_config(monkeypatch: pytest.MonkeyPatch) -> Iterator[Callable[[], None]]:
    def reload() -> None:
        for module in (config, formatting, session):
            importlib.reload(module)

    yield reload
    monkeypatch.undo()
    reload()


@pytest.fixture
def reset_logging() -> Iterator[None]:
    yield
    logger = setup_logging()
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()


def test_defaults(reload_config: Callable[[], None]) -> None:
    reload_config()
    assert config.DISPLAY_PRECISION == 12
    assert config.HISTORY_LIMIT == 25
    assert config.LOG_LEVEL == "WARNING"


def test_env_overrides(monkeypatch: pytest.MonkeyPatch, reload_config: Callable[[], None]) -> None:
    monkeypatch.setenv("SAFECALC_DISPLAY_PRECISION", "3")
    monkeypatch.setenv("SAFECALC_HISTORY_LIMIT", "2")
    reload_config()

    assert config.DISPLAY_PRECISION == 3
    assert formatting.format_number(2 / 3) == "0.667"

    calc = session.Session()
    for code in ["1+1", "2+2", "3+3"]:
        calc.submit(code)
    assert [e.result for e in calc.history] == ["6", "4"]


@pytest.mark.parametrize("raw_limit", ["0", "-5"])
def test_history_limit_is_clamped(
    monkeypatch: pytest.MonkeyPatch, reload_config: Callable[[], None], raw_limit: str
) -> None:
    monkeypatch.setenv("SAFECALC_HISTORY_LIMIT", raw_limit)
    reload_config()
    assert config.HISTORY_LIMIT == 1

    calc = session.Session()
    calc.submit("1+1")
    calc.submit("2+2")
    assert [e.result for e in calc.history] == ["4"]


def test_log_file_receives_debug_lines(tmp_path: Path, reset_logging: None) -> None:
    log_file = tmp_path / "log"
    assert main(["-e", "1+", "--log-level", "DEBUG", "--log-file", str(log_file)]) == 1

    lines = log_file.read_text().splitlines()
    assert lines
    match = LOG_LINE_RE.match(lines[0])
    assert match is not None
    assert match.group("level") == "DEBUG"
    assert match.group("name") == "safecalc.api"
    assert "STACK_UNDERFLOW" in match.group("message")


def test_log_level_filters_debug(tmp_path: Path, reset_logging: None) -> None:
    log_file = tmp_path / "log"
    main(["-e", "1+", "--log-level", "WARNING", "--log-file", str(log_file)])
    assert log_file.read_text() == ""


def test_setup_logging_closes_previous_handlers(tmp_path: Path, reset_logging: None) -> None:
    logger = setup_logging("INFO", str(tmp_path / "first"))
    first_file_handler = next(h for h in logger.handlers if isinstance(h, logging.FileHandler))

    setup_logging("INFO", str(tmp_path / "second"))

    assert first_file_handler.stream is None
    assert first_file_handler not in logger.handlers
    assert len(logger.handlers) == 2
