"""linkage command - show the Discord linkage record stored on a pull request."""

from __future__ import annotations

import click
from rich.console import Console
from rich.table import Table

from prcord_cli.auth import require_github_token
from prcord_cli.context import build_ticket_client
from prcord_store.comment import CommentLinkageStore

console = Console()


@click.command("linkage")
@click.option("--repo", envvar="GITHUB_REPOSITORY", required=True, help="GitHub repository (owner/name).")
@click.option("--pr", "pr_number", type=int, required=True, help="Pull request number.")
@click.pass_context
def linkage_cmd(ctx, repo: str, pr_number: int):
    """Show which Discord message, thread, and channel a pull request is linked to."""
    config = ctx.obj["config"]
    require_github_token(config)

    store = CommentLinkageStore(build_ticket_client(config, repo))
    record = store.find(pr_number)
    if record is None:
        console.print(f"[yellow]No Discord linkage found for PR #{pr_number}.[/yellow]")
        return

    table = Table(title=f"Discord linkage: {repo}#{pr_number}", show_header=True, header_style="bold cyan")
    table.add_column("Field", style="bold")
    table.add_column("Value")
    table.add_row("channel_id", record.channel_id)
    table.add_row("message_id", record.message_id)
    table.add_row("thread_id", record.thread_id or "[dim]none[/dim]")
    console.print(table)
