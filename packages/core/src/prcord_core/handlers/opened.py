"""Handlers for pull requests being opened and marked ready for review."""

from __future__ import annotations

import logging

from prcord_core.errors import ConfigError, best_effort
from prcord_core.events import PullRequestOpened, PullRequestReadyForReview
from prcord_core.formatting import STATUS_READY, build_pr_message, patch_status, thread_name
from prcord_core.handlers.context import HandlerContext, require_linkage, rewrite_message
from prcord_core.notes import ORIENTATION_NOTE, READY_NOTE
from prcord_store.models import LinkageRecord

logger = logging.getLogger(__name__)


def handle_pr_opened(event: PullRequestOpened, ctx: HandlerContext) -> None:
    """Announce a new PR: primary message, thread, orientation note, linkage record."""
    pr = event.pull_request
    if not ctx.channel_id:
        raise ConfigError("DISCORD_CHANNEL_ID must be set to announce opened pull requests.")

    # Redelivered "opened" events must not create a second message.
    if ctx.store.find(pr.number) is not None:
        logger.warning("PR #%d already has a Discord linkage record. Skipping.", pr.number)
        return

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
        user_mapping=ctx.user_mapping,
    )
    message_id = ctx.discord.send_message(ctx.channel_id, message)
    logger.info("Posted Discord message %s for PR #%d.", message_id, pr.number)

    thread_id = best_effort(
        "create Discord thread",
        ctx.discord.create_thread,
        ctx.channel_id,
        message_id,
        thread_name(pr.number, pr.title),
    )
    if thread_id:
        best_effort("post orientation note", ctx.discord.send_thread_message, thread_id, ORIENTATION_NOTE)

    ctx.store.create(pr.number, LinkageRecord(message_id=message_id, channel_id=ctx.channel_id, thread_id=thread_id))


def handle_pr_ready_for_review(event: PullRequestReadyForReview, ctx: HandlerContext) -> None:
    pr = event.pull_request
    record = require_linkage(ctx, pr.number, need_thread=False)
    if record is None:
        return

    rewrite_message(ctx, record, lambda text: patch_status(text, STATUS_READY))
    if record.thread_id:
        ctx.discord.send_thread_message(record.thread_id, READY_NOTE)
