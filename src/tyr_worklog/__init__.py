"""Tyr Worklog - 為本月工作日批次建立 worklog"""

__version__ = "1.0.0"

from .config import Config
from .errors import (
    TyrWorklogError, ConfigurationError, ValidationError, TransportError, RemoteError,
)
from .graphql_api import WorklogClient, WorklogInput, MutationResult
from .submitter import WorklogPayload, Submission, SubmissionState, BatchReport, submit_batch
from .workdays import WeekGroup, get_work_days_in_month, group_work_days_by_week

__all__ = [
    "Config",
    "TyrWorklogError",
    "ConfigurationError",
    "ValidationError",
    "TransportError",
    "RemoteError",
    "WorklogClient",
    "WorklogInput",
    "MutationResult",
    "WorklogPayload",
    "Submission",
    "SubmissionState",
    "BatchReport",
    "submit_batch",
    "WeekGroup",
    "get_work_days_in_month",
    "group_work_days_by_week",
]
