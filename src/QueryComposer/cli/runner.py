"""Command runner for coordinating CLI execution.

Manages logging configuration and error handling for command execution.
"""

from __future__ import annotations

from pathlib import Path

import click

from QueryComposer.cli.commands import RenderCommand
from QueryComposer.config import AppConfig
from QueryComposer.utils.log import configure_logging, log


class CommandRunner:
    """Orchestrates command execution with logging and error handling."""

    def __init__(self, config: AppConfig) -> None:
        """Initialize command runner.

        Args:
            config: Application configuration.
        """
        self.config = config

    def run_render(self, action: str, request_path: Path, output_path: Path | None = None) -> None:
        """Execute render command.

        Args:
            action: The CLI command name (e.g., 'render').
            request_path: YAML request file.
            output_path: Optional JSON output path.

        Raises:
            click.Abort: When building or rendering the query fails.
        """
        configure_logging(
            level=self.config.runtime.level,
            trace=self.config.runtime.trace,
            action=action,
            log_to_file=self.config.runtime.to_file,
            log_dir=self.config.runtime.dir,
        )
        try:
            RenderCommand(config=self.config, request_path=request_path, output_path=output_path).execute()
        except Exception as e:  # noqa: BLE001 - cli boundary
            log.error("Render failed: %s", e)
            raise click.Abort from e
