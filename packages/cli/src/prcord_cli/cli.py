"""CLI entry point for prcord.

Commands:
  handle   - apply a GitHub pull request webhook delivery to Discord
  linkage  - show the Discord linkage record stored on a pull request
  preview  - render the announcement for a pull request without posting
"""

from __future__ import annotations

import importlib.metadata

import click

from prcord_cli.commands.handle import handle_cmd
from prcord_cli.commands.linkage import linkage_cmd
from prcord_cli.commands.preview import preview_cmd


@click.group()
@click.version_option(
    version=importlib.metadata.version("prcord"),
    prog_name="prcord",
)
@click.option(
    "--config",
    "config_path",
    default=".prcord.yml",
    show_default=True,
    help="Path to the configuration file.",
    envvar="PRCORD_CONFIG",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
@click.pass_context
def main(ctx: click.Context, config_path: str, verbose: bool):
    """Keep a Discord channel and thread in sync with GitHub pull requests."""
    from prcord_cli.auth import resolve_github_token
    from prcord_cli.logs import configure_logging
    from prcord_core.config import load_config
    from prcord_core.errors import ConfigError

    configure_logging(verbose)
    ctx.ensure_object(dict)

    try:
        config = load_config(config_path)
    except ConfigError as e:
        raise click.UsageError(str(e)) from e

    # Resolve token early so all subcommands share the same resolution.
    token = resolve_github_token()
    if token:
        config["github_token"] = token

    ctx.obj["config"] = config


main.add_command(handle_cmd)
main.add_command(linkage_cmd)
main.add_command(preview_cmd)
