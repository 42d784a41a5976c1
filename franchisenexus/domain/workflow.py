"""
Application lifecycle.

Applications start as "Pending". Afterwards the status is whatever string a
franchisor or admin sets: there is no transition graph. An allow-list can be
configured (APPLICATION_STATUS_ALLOWLIST) to restrict the accepted values.
"""

from datetime import datetime, timezone
from typing import Iterable, Optional

from .errors import InvalidStatusError

PENDING = "Pending"

# Fields an applicant may revise. Status is never among them.
APPLICANT_EDITABLE_FIELDS = ("cover_letter", "resume", "financial_statement")


def initial_status() -> str:
    return PENDING


def submission_timestamp() -> datetime:
    """Server-assigned submission time (naive UTC, as stored)."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class ApplicationStatusPolicy:
    """
    Decides whether a new status string is accepted.

    With no allow-list every string passes. With one, "Pending" is always
    part of it so reverting to the initial state stays possible.
    """

    def __init__(self, allowed_statuses: Optional[Iterable[str]] = None):
        allowed = [s for s in (allowed_statuses or []) if s]
        if allowed and PENDING not in allowed:
            allowed.insert(0, PENDING)
        self._allowed = tuple(allowed)

    @property
    def is_open(self) -> bool:
        return not self._allowed

    @property
    def allowed_statuses(self) -> tuple:
        return self._allowed

    def check(self, status: str) -> str:
        """
        Validate a status against the policy.

        Returns:
            The status unchanged

        Raises:
            InvalidStatusError: If an allow-list is configured and excludes it
        """
        if self._allowed and status not in self._allowed:
            raise InvalidStatusError(status, self._allowed)
        return status
