from __future__ import annotations

import io
import logging
import re

from core.log_setup import LOG_FILENAME, LOGGER_NAME, open_log


def test_writes_timestamped_lines_and_releases_handlers(tmp_path) -> None:
    log_dir = tmp_path / "logs"
    console = io.StringIO()

    with open_log(log_dir, stream=console) as log:
        log.info("first")
        log.getChild("tools").warning("second")

    lines = (log_dir / LOG_FILENAME).read_text(encoding="utf-8").splitlines()
    assert len(lines) == 2
    assert re.match(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}\+00:00 first$", lines[0])
    assert lines[1].endswith(" second")
    assert "[MCP] first" in console.getvalue()
    assert logging.getLogger(LOGGER_NAME).handlers == []


def test_appends_across_sessions(tmp_path) -> None:
    for word in ("one", "two"):
        with open_log(tmp_path, stream=io.StringIO()) as log:
            log.info(word)

    lines = (tmp_path / LOG_FILENAME).read_text(encoding="utf-8").splitlines()
    assert [line.split(" ", 1)[1] for line in lines] == ["one", "two"]


def test_unusable_log_dir_falls_back_to_console(tmp_path) -> None:
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("x")
    console = io.StringIO()

    with open_log(blocker / "logs", stream=console) as log:
        log.info("still logging")

    assert "still logging" in console.getvalue()
