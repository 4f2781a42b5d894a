"""Handlers for pull requests being closed or merged."""

from __future__ import annotations

import logging
from datetime import timezone

from prcord_core.errors import best_effort
from prcord_core.events import PullRequestClosed, PullRequestMerged
from prcord_core.formatting import patch_status, status_closed, status_merged
from prcord_core.handlers.context import HandlerContext, require_linkage, rewrite_message
from prcord_core.notes import closed_note, merged_note

logger = logging.getLogger(__name__)

MERGED_EMOJI = "🎉"


def recent_closing_comment(ctx: HandlerContext, pr_number: int, closer: str) -> str | None:
    """Return the PR's latest comment if the closer wrote it within the closing window.

    Only the single most recent comment is considered; older comments are
    never used as context.
    """
    comments = ctx.tickets.list_comments(pr_number)
    if not comments:
        return None
    last = comments[-1]
    if last.author != closer or last.created_at is None:
        return None
    created_at = last.created_at
    if created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=timezone.utc)
    age = (ctx.clock() - created_at).total_seconds()
    if age >= ctx.closing_comment_window_seconds:
        return None
    return last.body


def handle_pr_closed(event: PullRequestClosed, ctx: HandlerContext) -> None:
    pr = event.pull_request
    record = require_linkage(ctx, pr.number)
    if record is None:
        return

    closing_comment = best_effort("fetch closing comment", recent_closing_comment, ctx, pr.number, event.closer)
    closer = ctx.mention(event.closer)

    ctx.discord.send_thread_message(record.thread_id, closed_note(pr.number, pr.url, closer, closing_comment))
    best_effort("lock thread", ctx.discord.lock_thread, record.thread_id, True)
    rewrite_message(ctx, record, lambda text: patch_status(text, status_closed(closer)))


def handle_pr_merged(event: PullRequestMerged, ctx: HandlerContext) -> None:
    pr = event.pull_request
    record = require_linkage(ctx, pr.number, need_thread=False)
    if record is None:
        return

    commit_subject = None
    if pr.merge_commit_sha:
        commit_subject = best_effort("fetch merge commit", ctx.tickets.get_commit_subject, pr.merge_commit_sha)

    best_effort(
        f"add {MERGED_EMOJI} reaction",
        ctx.discord.add_reaction,
        record.channel_id,
        record.message_id,
        MERGED_EMOJI,
    )

    if record.thread_id:
        note = merged_note(ctx.mention(pr.author), pr.number, pr.url, pr.base_branch, commit_subject)
        ctx.discord.send_thread_message(record.thread_id, note)
        best_effort("archive thread", ctx.discord.archive_thread, record.thread_id)

    merger = ctx.mention(event.merger)
    rewrite_message(ctx, record, lambda text: patch_status(text, status_merged(merger)))
