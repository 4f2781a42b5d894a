"""Exception types and the best-effort call wrapper shared by every handler."""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


class PrcordError(Exception):
    """Base class for errors raised by prcord itself."""


class ConfigError(PrcordError):
    """A credential or setting required for the current path is missing or invalid."""


class MalformedEventError(PrcordError):
    """The webhook payload is missing a field the event kind requires."""


class DiscordAPIError(PrcordError):
    """Discord answered a request with a non-success status."""

    def __init__(self, status: int, message: str):
        super().__init__(f"Discord API error {status}: {message}")
        self.status = status
        self.message = message


def best_effort(description: str, fn, *args, **kwargs):
    """Call fn and downgrade any failure to a warning.

    Used for side effects the handlers can live without (reactions, thread
    lock/archive, membership changes, optional context lookups). Returns the
    call's result, or None when it failed.
    """
    try:
        return fn(*args, **kwargs)
    except Exception as e:
        logger.warning("Failed to %s: %s", description, e)
        return None
