"""handle command - apply one GitHub webhook delivery to Discord."""

from __future__ import annotations

import logging

import click
from rich.console import Console

from prcord_cli.auth import require_bot_token, require_github_token
from prcord_cli.context import build_handler_context
from prcord_core.errors import ConfigError, MalformedEventError
from prcord_core.events import load_event_payload, parse_event
from prcord_core.handlers.dispatch import dispatch

console = Console()
logger = logging.getLogger(__name__)


@click.command("handle")
@click.option(
    "--event-name",
    envvar="GITHUB_EVENT_NAME",
    required=True,
    help="Webhook event name (pull_request or pull_request_review).",
)
@click.option(
    "--event-path",
    envvar="GITHUB_EVENT_PATH",
    default="/github/workflow/event.json",
    show_default=True,
    help="Path to the webhook payload JSON.",
)
@click.option("--repo", envvar="GITHUB_REPOSITORY", default=None, help="GitHub repository in owner/name format.")
@click.pass_context
def handle_cmd(ctx, event_name: str, event_path: str, repo: str | None):
    """Sync the Discord message and thread of a pull request with one event.

    \b
    Required environment variables:
      DISCORD_BOT_TOKEN     Discord bot token
      DISCORD_CHANNEL_ID    Channel for new PR announcements (opened events)
      GITHUB_TOKEN          GitHub token (or use gh CLI)
    Optional:
      DISCORD_USER_MAPPING  JSON object of GitHub login -> Discord user id
    """
    config = ctx.obj["config"]
    require_github_token(config)
    require_bot_token(config)

    repo = repo or config.get("repository")
    if not repo:
        raise click.UsageError("No repository given. Pass --repo or set GITHUB_REPOSITORY.")

    try:
        event = parse_event(event_name, load_event_payload(event_path))
    except MalformedEventError as e:
        raise click.ClickException(str(e)) from e

    if event is None:
        console.print(f"[yellow]Nothing to do for {event_name} event.[/yellow]")
        return

    handler_ctx = build_handler_context(config, repo)
    try:
        dispatch(event, handler_ctx)
    except ConfigError as e:
        raise click.UsageError(str(e)) from e
    except Exception as e:
        logger.error("Handler failed: %s", e)
        raise click.ClickException(f"Handler failed: {e}") from e
