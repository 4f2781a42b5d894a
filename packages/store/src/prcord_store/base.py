"""Abstract linkage store interface.

Handlers depend on BaseLinkageStore, not on a concrete backend, so tests
and alternative backends can stand in for the PR-comment store.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from prcord_store.models import LinkageRecord


class BaseLinkageStore(ABC):
    """Durable linkage between a pull request and its Discord representation."""

    @abstractmethod
    def find(self, pr_number: int) -> LinkageRecord | None:
        """Return the linkage record of a pull request, or None when there is none.

        Failures to read the backend propagate; unreadable records are skipped.
        """

    @abstractmethod
    def create(self, pr_number: int, record: LinkageRecord) -> None:
        """Persist the linkage record of a pull request. Called once, when it opens."""

    def close(self) -> None:
        """Release any resources held by the store.

        Default is a no-op so callers can always call close() safely.
        """
