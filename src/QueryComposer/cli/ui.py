"""Click CLI interface definitions.

Defines the command-line interface structure and routes commands
to their respective runners.
"""

from __future__ import annotations

from pathlib import Path

import click

from QueryComposer.cli.runner import CommandRunner
from QueryComposer.config import load_config_with_defaults
from QueryComposer.config.app import DEFAULT_CONFIG_PATH


@click.group(help="QueryComposer: compose search requests into backend parameters.")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=DEFAULT_CONFIG_PATH,
    show_default=True,
    envvar="QUERY_COMPOSER_CONFIG",
    help="Path to YAML config file, merged over the default config.",
)
@click.pass_context
def cli(ctx: click.Context, config_path: Path) -> None:
    """CLI entry group.

    Args:
        ctx: Click context.
        config_path: Path to YAML config file.
    """
    ctx.obj = load_config_with_defaults(config_path)


@cli.command("render")
@click.argument("request_path", type=click.Path(path_type=Path, dir_okay=False, exists=True))
@click.option(
    "--output",
    "output_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Write parameters to this JSON file instead of stdout.",
)
@click.pass_context
def render_cmd(ctx: click.Context, request_path: Path, output_path: Path | None) -> None:
    """Build the query described by REQUEST_PATH and print its parameters.

    Args:
        ctx: Click context.
        request_path: YAML request file.
        output_path: Optional JSON output path.
    """
    runner = CommandRunner(ctx.obj)
    runner.run_render(action=ctx.command.name, request_path=request_path, output_path=output_path)

