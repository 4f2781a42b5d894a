"""Handlers for reviewers being requested or un-requested."""

from __future__ import annotations

import logging

from prcord_core.errors import best_effort
from prcord_core.events import ReviewRequested, ReviewRequestRemoved
from prcord_core.formatting import patch_reviewers
from prcord_core.handlers.context import HandlerContext, require_linkage, rewrite_message
from prcord_core.notes import reviewer_removed_note, reviewer_requested_note

logger = logging.getLogger(__name__)


def _sync_reviewer_section(ctx: HandlerContext, record, reviewer_logins: list[str]) -> None:
    # Always the full reviewer list from the payload, never a delta.
    rewrite_message(ctx, record, lambda text: patch_reviewers(text, reviewer_logins, ctx.user_mapping))


def handle_reviewer_added(event: ReviewRequested, ctx: HandlerContext) -> None:
    pr = event.pull_request
    record = require_linkage(ctx, pr.number)
    if record is None:
        return

    if event.requested_reviewer:
        ctx.discord.send_thread_message(
            record.thread_id,
            reviewer_requested_note(ctx.mention(event.requested_reviewer), pr.number, pr.url),
        )

    _sync_reviewer_section(ctx, record, list(pr.requested_reviewers))


def handle_reviewer_removed(event: ReviewRequestRemoved, ctx: HandlerContext) -> None:
    pr = event.pull_request
    record = require_linkage(ctx, pr.number)
    if record is None:
        return

    removed = event.requested_reviewer
    if removed:
        ctx.discord.send_thread_message(record.thread_id, reviewer_removed_note(ctx.mention(removed)))
        discord_user_id = ctx.user_mapping.get(removed)
        if discord_user_id:
            best_effort(
                f"remove {removed} from Discord thread",
                ctx.discord.remove_thread_member,
                record.thread_id,
                discord_user_id,
            )

    _sync_reviewer_section(ctx, record, list(pr.requested_reviewers))
