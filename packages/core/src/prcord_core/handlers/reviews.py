"""Handlers for submitted and dismissed reviews."""

from __future__ import annotations

import logging

from prcord_core.errors import best_effort
from prcord_core.events import REVIEW_APPROVED, REVIEW_CHANGES_REQUESTED, ReviewDismissed, ReviewSubmitted
from prcord_core.formatting import STATUS_READY, patch_status, status_approved, status_changes_requested
from prcord_core.handlers.context import HandlerContext, require_linkage, rewrite_message
from prcord_core.notes import approved_note, changes_addressed_note, changes_requested_note

logger = logging.getLogger(__name__)

APPROVED_EMOJI = "✅"
CHANGES_REQUESTED_EMOJI = "❌"

# state -> (reaction to add, reaction to remove)
_REACTIONS = {
    REVIEW_APPROVED: (APPROVED_EMOJI, CHANGES_REQUESTED_EMOJI),
    REVIEW_CHANGES_REQUESTED: (CHANGES_REQUESTED_EMOJI, APPROVED_EMOJI),
}


def handle_review_submitted(event: ReviewSubmitted, ctx: HandlerContext) -> None:
    pr, review = event.pull_request, event.review
    if review.state not in _REACTIONS:
        logger.info("Review on PR #%d is %r, skipping.", pr.number, review.state)
        return

    record = require_linkage(ctx, pr.number, need_thread=False)
    if record is None:
        return

    body = review.body
    if not body.strip():
        body = best_effort("fetch review details", ctx.tickets.get_review_body, pr.number, review.id) or ""

    add, remove = _REACTIONS[review.state]
    best_effort(
        f"remove {remove} reaction",
        ctx.discord.remove_reaction,
        record.channel_id,
        record.message_id,
        remove,
    )
    best_effort(f"add {add} reaction", ctx.discord.add_reaction, record.channel_id, record.message_id, add)

    reviewer = ctx.mention(review.reviewer)
    author = ctx.mention(pr.author)
    if review.state == REVIEW_APPROVED:
        note = approved_note(author, reviewer, body)
        new_status = status_approved(reviewer)
    else:
        note = changes_requested_note(author, reviewer, body)
        new_status = status_changes_requested(reviewer)

    if record.thread_id:
        ctx.discord.send_thread_message(record.thread_id, note)
        if review.state == REVIEW_APPROVED:
            best_effort("lock thread", ctx.discord.lock_thread, record.thread_id, True)

    rewrite_message(ctx, record, lambda text: patch_status(text, new_status))


def handle_review_dismissed(event: ReviewDismissed, ctx: HandlerContext) -> None:
    pr, review = event.pull_request, event.review
    if review.state != REVIEW_CHANGES_REQUESTED:
        logger.info("Dismissed review on PR #%d was not changes_requested, skipping.", pr.number)
        return

    record = require_linkage(ctx, pr.number)
    if record is None:
        return

    ctx.discord.send_thread_message(record.thread_id, changes_addressed_note(ctx.mention(review.reviewer)))
    rewrite_message(ctx, record, lambda text: patch_status(text, STATUS_READY))
