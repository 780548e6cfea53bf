"""
批次建立 worklog

每個工作日一次 mutation，依日期由小到大逐一送出。
單日失敗只記錄在該日，不影響後續日期；不重試、不回滾。
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Callable, Optional

from .errors import RemoteError, TransportError, ValidationError
from .graphql_api import WorklogClient, WorklogInput
from .workdays import format_date_for_summary, format_started

logger = logging.getLogger(__name__)


class SubmissionState(str, Enum):
    PENDING = "pending"
    SENT = "sent"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


# 允許的狀態轉移，SUCCEEDED / FAILED 為終止狀態
ALLOWED_TRANSITIONS = {
    SubmissionState.PENDING: {SubmissionState.SENT},
    SubmissionState.SENT: {SubmissionState.SUCCEEDED, SubmissionState.FAILED},
    SubmissionState.SUCCEEDED: set(),
    SubmissionState.FAILED: set(),
}


@dataclass(frozen=True)
class WorklogPayload:
    """批次中所有日期共用的欄位"""
    comment: str
    time_spent: str = "8h"
    project: str = ""
    ticket: str = ""

    def validate(self):
        if not self.comment or not self.comment.strip():
            raise ValidationError("Comment is required")

    def to_input(self, day: date) -> WorklogInput:
        return WorklogInput(
            started=format_started(day),
            comment=self.comment,
            time_spent_string=self.time_spent,
            project=self.project,
            ticket=self.ticket,
        )


@dataclass
class Submission:
    """單日的送出狀態"""
    day: date
    worklog_input: WorklogInput
    state: SubmissionState = SubmissionState.PENDING
    worklog_id: Optional[str] = None
    error: Optional[str] = None

    def mark_sent(self):
        self._transition(SubmissionState.SENT)

    def mark_succeeded(self, worklog_id: str):
        self._transition(SubmissionState.SUCCEEDED)
        self.worklog_id = worklog_id

    def mark_failed(self, error: str):
        self._transition(SubmissionState.FAILED)
        self.error = error

    def _transition(self, state: SubmissionState):
        if state not in ALLOWED_TRANSITIONS[self.state]:
            raise RuntimeError(
                f"Submission for {self.day} cannot go from {self.state.value} to {state.value}"
            )
        self.state = state


@dataclass
class BatchReport:
    """批次結果"""
    submissions: list[Submission] = field(default_factory=list)

    @property
    def succeeded(self) -> list[Submission]:
        return [s for s in self.submissions if s.state == SubmissionState.SUCCEEDED]

    @property
    def failed(self) -> list[Submission]:
        return [s for s in self.submissions if s.state == SubmissionState.FAILED]

    @property
    def success_count(self) -> int:
        return len(self.succeeded)

    @property
    def failure_count(self) -> int:
        return len(self.failed)

    @property
    def all_succeeded(self) -> bool:
        return self.failure_count == 0


def build_worklog_inputs(days: list[date], payload: WorklogPayload) -> list[WorklogInput]:
    return [payload.to_input(day) for day in sorted(days)]


def submit_batch(
    client: WorklogClient,
    days: list[date],
    payload: WorklogPayload,
    on_start: Optional[Callable[[Submission], None]] = None,
    on_result: Optional[Callable[[Submission], None]] = None,
) -> BatchReport:
    """
    依序為每一天建立 worklog

    Args:
        client: GraphQL 客戶端
        days: 選定的工作日
        payload: 共用欄位
        on_start: 每筆送出前呼叫
        on_result: 每筆完成 (成功或失敗) 後呼叫

    Returns:
        BatchReport，每一天一筆 Submission

    Raises:
        ValidationError: comment 為空，此時不會送出任何請求
    """
    payload.validate()

    ordered = sorted(days)
    report = BatchReport(submissions=[
        Submission(day=day, worklog_input=worklog_input)
        for day, worklog_input in zip(ordered, build_worklog_inputs(ordered, payload))
    ])

    for submission in report.submissions:
        if on_start:
            on_start(submission)

        submission.mark_sent()
        try:
            result = client.create_worklog(submission.worklog_input)
        except (TransportError, RemoteError) as e:
            logger.warning("Worklog for %s failed: %s", submission.day.isoformat(), e)
            submission.mark_failed(str(e))
        else:
            logger.info("Worklog created for %s (ID: %s)",
                        format_date_for_summary(submission.day), result.id)
            submission.mark_succeeded(result.id)

        if on_result:
            on_result(submission)

    return report
