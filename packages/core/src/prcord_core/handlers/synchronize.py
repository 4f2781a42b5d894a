"""Handler for new commits pushed to a pull request."""

from __future__ import annotations

import logging

from prcord_core.errors import best_effort
from prcord_core.events import PullRequestSynchronized
from prcord_core.formatting import STATUS_READY, is_approved, patch_status
from prcord_core.handlers.context import HandlerContext, require_linkage
from prcord_core.notes import new_commits_note

logger = logging.getLogger(__name__)


def handle_pr_synchronize(event: PullRequestSynchronized, ctx: HandlerContext) -> None:
    """Reopen review on an approved PR that received new commits.

    Only acts when the primary message's status says Approved; any other
    state is left as it is.
    """
    pr = event.pull_request
    record = require_linkage(ctx, pr.number)
    if record is None:
        return

    content = ctx.discord.get_message(record.channel_id, record.message_id)
    if not is_approved(content):
        logger.info("PR #%d was not approved; nothing to reopen.", pr.number)
        return

    reviewers = list(pr.requested_reviewers)

    best_effort("unlock thread", ctx.discord.lock_thread, record.thread_id, False)
    ctx.discord.edit_message(record.channel_id, record.message_id, patch_status(content, STATUS_READY))
    ctx.discord.send_thread_message(record.thread_id, new_commits_note([ctx.mention(r) for r in reviewers]))

    if reviewers:
        best_effort("re-request reviews", ctx.tickets.request_reviewers, pr.number, reviewers)
