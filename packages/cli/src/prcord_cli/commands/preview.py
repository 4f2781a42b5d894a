"""preview command - render the announcement for a pull request without posting it."""

from __future__ import annotations

import click
from rich.console import Console

from prcord_core.errors import MalformedEventError
from prcord_core.events import PULL_REQUEST, load_event_payload, parse_event
from prcord_core.formatting import build_pr_message, thread_name

console = Console()


@click.command("preview")
@click.option("--event-path", envvar="GITHUB_EVENT_PATH", required=True, help="Path to a pull_request payload JSON.")
@click.pass_context
def preview_cmd(ctx, event_path: str):
    """Print the Discord message and thread name an opened event would produce."""
    config = ctx.obj["config"]
    try:
        payload = load_event_payload(event_path)
        event = parse_event(PULL_REQUEST, {**payload, "action": "opened"})
    except MalformedEventError as e:
        raise click.ClickException(str(e)) from e

    pr = event.pull_request
    message = build_pr_message(
        number=pr.number,
        title=pr.title,
        url=pr.url,
        head_branch=pr.head_branch,
        base_branch=pr.base_branch,
        author=pr.author,
        description=pr.body,
        reviewer_logins=list(pr.requested_reviewers),
        is_draft=pr.draft,
        user_mapping=config["user_mapping"],
    )
    console.print(f"[bold]Thread:[/bold] {thread_name(pr.number, pr.title)}", highlight=False)
    console.rule()
    console.print(message, markup=False, highlight=False, emoji=False)
