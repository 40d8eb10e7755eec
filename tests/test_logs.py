from __future__ import annotations

from pathlib import Path

import pytest
import structlog

from gsv.logs import configure_logging


def test_console_logging_goes_to_stderr(capsys: pytest.CaptureFixture[str]) -> None:
    assert configure_logging() is None
    structlog.get_logger("gsv.test").warning("Refresh failed")
    structlog.get_logger("gsv.test").info("Generated rows")
    err = capsys.readouterr().err
    assert "Refresh failed" in err
    assert "Generated rows" not in err


def test_without_console_nothing_reaches_the_terminal(capsys: pytest.CaptureFixture[str]) -> None:
    assert configure_logging(debug=True, console=False) is None
    log = structlog.get_logger("gsv.test")
    log.warning("Refresh failed")
    log.error("Render failed")
    captured = capsys.readouterr()
    assert captured.err == ""
    assert captured.out == ""


def test_log_file_is_used_even_without_console(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    log_file = tmp_path / "gsv.log"
    stream = configure_logging(log_file=log_file, console=False)
    assert stream is not None
    structlog.get_logger("gsv.test").info("Opened repository", repo="x")
    stream.close()
    assert "Opened repository" in log_file.read_text(encoding="utf-8")
    assert capsys.readouterr().err == ""
