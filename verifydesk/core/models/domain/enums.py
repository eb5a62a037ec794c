"""Domain enums for verification requests and reports."""

from __future__ import annotations

from enum import Enum


class ReportType(str, Enum):
    """Kind of check a report performs. Each type has its own detail table."""

    character = "character"
    education = "education"
    employment = "employment"


class ReportStatus(str, Enum):
    """Lifecycle status of a single report."""

    pending = "pending"  # Not started yet.
    in_progress = "in_progress"
    on_hold = "on_hold"  # Blocked, e.g. waiting on a reference to call back.
    completed = "completed"
    cancelled = "cancelled"


class RequestStatus(str, Enum):
    """
    Lifecycle status of a verification request.

    Derived from the statuses of the request's reports, except ``cancelled``
    which is only reached by cancelling the request.
    """

    pending = "pending"
    in_progress = "in_progress"
    on_hold = "on_hold"
    completed = "completed"
    cancelled = "cancelled"


class RequestPriority(str, Enum):
    """Priority of a request in the pending queue."""

    low = "low"
    normal = "normal"
    high = "high"
    rush = "rush"


class ReportAction(str, Enum):
    """Transitions a verifier can apply to a report."""

    start = "start"
    hold = "hold"
    release = "release"
    complete = "complete"
    reopen = "reopen"


# Queue ordering: lower rank is served first.
PRIORITY_RANK = {
    RequestPriority.rush: 0,
    RequestPriority.high: 1,
    RequestPriority.normal: 2,
    RequestPriority.low: 3,
}

FINISHED_REQUEST_STATUSES = (RequestStatus.completed, RequestStatus.cancelled)
FINISHED_REPORT_STATUSES = (ReportStatus.completed, ReportStatus.cancelled)
