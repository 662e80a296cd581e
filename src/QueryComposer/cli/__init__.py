"""CLI package for QueryComposer command orchestration."""

from __future__ import annotations

__all__ = ["CommandRunner", "main"]

from dotenv import load_dotenv

from QueryComposer.cli.runner import CommandRunner
from QueryComposer.cli.ui import cli


def main() -> None:
    """Run QueryComposer CLI.

    Entry point referenced by console script in pyproject.toml. Loads
    environment variables from .env first so QUERY_COMPOSER_CONFIG can
    select the config file.
    """
    load_dotenv()
    cli()
