"""Logging settings for the CLI and for tracing query construction.

Example::

    log:
      level: INFO      # console threshold
      trace: false     # print component registration and serialization lines
      to_file: false   # mirror everything at DEBUG to <dir>/<action>/
      dir: log

Only ``level`` is required; the rest fall back to the values shown.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from QueryComposer.config.common import (
    expect_bool,
    expect_choice,
    expect_str,
    get_required_value,
    get_section,
)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


@dataclass(frozen=True, slots=True)
class RuntimeConfig:
    """Arguments for ``configure_logging``.

    Attributes:
        level: Console threshold, one of ``LOG_LEVELS``.
        trace: Show query construction lines even above DEBUG.
        to_file: Mirror all records to a per-action log file.
        dir: Root directory for log files.
    """

    level: str
    trace: bool = False
    to_file: bool = False
    dir: str = "log"


def load_runtime(raw: Mapping[str, Any]) -> RuntimeConfig:
    """Read the ``log`` section.

    Raises:
        TypeError: If a value has the wrong type.
        ValueError: If the section or ``log.level`` is missing, or the level is unknown.
    """
    section = get_section(raw, "log", required=True)
    return RuntimeConfig(
        level=expect_choice(get_required_value(section, "level", "log.level"), LOG_LEVELS, "log.level"),
        trace=expect_bool(section.get("trace", False), "log.trace"),
        to_file=expect_bool(section.get("to_file", False), "log.to_file"),
        dir=expect_str(section.get("dir", "log"), "log.dir"),
    )


def check_runtime(config: RuntimeConfig) -> None:
    """A log directory is only needed when writing log files."""
    if config.to_file and not config.dir.strip():
        raise ValueError("log.dir must not be empty when log.to_file is enabled")
