from .enums import (
    FINISHED_REPORT_STATUSES,
    FINISHED_REQUEST_STATUSES,
    PRIORITY_RANK,
    ReportAction,
    ReportStatus,
    ReportType,
    RequestPriority,
    RequestStatus,
)

__all__ = [
    "FINISHED_REPORT_STATUSES",
    "FINISHED_REQUEST_STATUSES",
    "PRIORITY_RANK",
    "ReportAction",
    "ReportStatus",
    "ReportType",
    "RequestPriority",
    "RequestStatus",
]
