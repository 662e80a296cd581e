"""QueryComposer logging utilities.

Two loggers are used:

- ``log`` (``QueryComposer``): warnings about ignored input and CLI progress.
- ``trace_log`` (``QueryComposer.trace``): one debug line per registered or
  replaced component and per serialization. These lines reach the console
  when ``log.level`` is DEBUG, or on their own when ``log.trace`` is set.

A log file, when enabled, always receives everything at DEBUG.
"""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Final


_LEVEL_ABBREV: Final[dict[int, str]] = {
    logging.DEBUG: "DEBG",
    logging.INFO: "INFO",
    logging.WARNING: "WARN",
    logging.ERROR: "ERRO",
    logging.CRITICAL: "ERRO",
}


class _AbbrevLevelFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:  # noqa: A003 - record is stdlib name
        record.levelabbr = _LEVEL_ABBREV.get(record.levelno, record.levelname[:4])
        return super().format(record)


class _ConsoleFilter(logging.Filter):
    """Pass records at or above ``level``, plus all trace records when tracing."""

    def __init__(self, level: int, trace: bool) -> None:
        super().__init__()
        self.level = level
        self.trace = trace

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: A003 - stdlib name
        if record.levelno >= self.level:
            return True
        return self.trace and record.name.startswith(trace_log.name)


log = logging.getLogger("QueryComposer")
trace_log = log.getChild("trace")


def configure_logging(
    *,
    level: str = "INFO",
    trace: bool = False,
    action: str | None = None,
    log_to_file: bool = False,
    log_dir: str = "log",
) -> None:
    """Configure the QueryComposer loggers.

    Uses format: mm-dd HH:MM:SS [<LVL>] <message>
    where LVL is one of: DEBG/INFO/WARN/ERRO.

    Args:
        level: Console logging level (e.g., INFO, DEBUG).
        trace: Show query construction trace lines regardless of ``level``.
        action: CLI action name used to create the log file path.
        log_to_file: Whether to mirror logs to a file.
        log_dir: Base directory for log files.
    """
    resolved_level = getattr(logging, (level or "INFO").upper(), logging.INFO)
    to_file = bool(log_to_file and action)

    formatter = _AbbrevLevelFormatter(
        fmt="%(asctime)s [%(levelabbr)s] %(message)s",
        datefmt="%m-%d %H:%M:%S",
    )

    # stderr keeps stdout free for rendered parameters
    stream_handler = logging.StreamHandler()
    stream_handler.addFilter(_ConsoleFilter(resolved_level, trace))
    stream_handler.setFormatter(formatter)
    handlers: list[logging.Handler] = [stream_handler]

    if to_file:
        timestamp = datetime.now().strftime("%m%d%H%M%S")
        action_dir = Path(log_dir or "log") / action
        action_dir.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(action_dir / f"{action}_{timestamp}.log", encoding="utf-8")
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    log.handlers.clear()
    for handler in handlers:
        log.addHandler(handler)
    log.setLevel(logging.DEBUG if to_file else resolved_level)
    # trace records propagate to the handlers above
    trace_log.setLevel(logging.DEBUG if trace or to_file else logging.NOTSET)
    log.propagate = False
