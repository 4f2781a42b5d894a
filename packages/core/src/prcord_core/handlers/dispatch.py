"""Route a typed event to its handler."""

from __future__ import annotations

import logging

from prcord_core.events import (
    PullRequestClosed,
    PullRequestEvent,
    PullRequestMerged,
    PullRequestOpened,
    PullRequestReadyForReview,
    PullRequestSynchronized,
    ReviewDismissed,
    ReviewRequested,
    ReviewRequestRemoved,
    ReviewSubmitted,
)
from prcord_core.handlers.closed import handle_pr_closed, handle_pr_merged
from prcord_core.handlers.context import HandlerContext
from prcord_core.handlers.opened import handle_pr_opened, handle_pr_ready_for_review
from prcord_core.handlers.reviewers import handle_reviewer_added, handle_reviewer_removed
from prcord_core.handlers.reviews import handle_review_dismissed, handle_review_submitted
from prcord_core.handlers.synchronize import handle_pr_synchronize

logger = logging.getLogger(__name__)

HANDLERS = {
    PullRequestOpened: handle_pr_opened,
    PullRequestReadyForReview: handle_pr_ready_for_review,
    ReviewRequested: handle_reviewer_added,
    ReviewRequestRemoved: handle_reviewer_removed,
    ReviewSubmitted: handle_review_submitted,
    ReviewDismissed: handle_review_dismissed,
    PullRequestSynchronized: handle_pr_synchronize,
    PullRequestClosed: handle_pr_closed,
    PullRequestMerged: handle_pr_merged,
}


def dispatch(event: PullRequestEvent, ctx: HandlerContext) -> None:
    handler = HANDLERS[type(event)]
    logger.info("Handling %s for PR #%d.", type(event).__name__, event.pull_request.number)
    handler(event, ctx)
