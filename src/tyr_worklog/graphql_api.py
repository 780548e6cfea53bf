"""
GraphQL API 整合模組

以 Bearer token 呼叫 WorklogCreate mutation
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

import requests

from .config import DEFAULT_TIMEOUT
from .errors import RemoteError, TransportError

logger = logging.getLogger(__name__)

OPERATION_NAME = "WorklogCreate"

WORKLOG_CREATE_MUTATION = """mutation WorklogCreate($input: WorklogCreateInput!) {
  result: createWorklog(input: $input) {
    id
    __typename
  }
}"""


@dataclass(frozen=True)
class WorklogInput:
    """WorklogCreateInput 的內容，每個工作日一筆"""
    started: str            # e.g., "2025-07-14T09:00:00.000+02:00"
    comment: str
    time_spent_string: str  # e.g., "8h"
    project: str
    ticket: str

    def to_variables(self) -> dict:
        return {
            "started": self.started,
            "comment": self.comment,
            "timeSpentString": self.time_spent_string,
            "project": self.project,
            "ticket": self.ticket,
        }


@dataclass
class MutationResult:
    """mutation 回應：成功時有 id，失敗時有 errors，兩者不會同時存在"""
    id: Optional[str] = None
    typename: Optional[str] = None
    errors: list = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    @classmethod
    def from_response(cls, body: dict) -> "MutationResult":
        """
        解析 GraphQL 回應

        有 errors 時不讀取 data.result
        """
        if not isinstance(body, dict):
            raise RemoteError([f"Unexpected response: {body!r}"])

        errors = body.get('errors')
        if errors:
            if not isinstance(errors, list):
                errors = [errors]
            return cls(errors=list(errors))

        data = body.get('data')
        result = data.get('result') if isinstance(data, dict) else None
        if not isinstance(result, dict) or result.get('id') is None:
            raise RemoteError([f"Response has no data.result: {body!r}"])

        return cls(id=str(result['id']), typename=result.get('__typename'))


def build_operation(worklog_input: dict) -> dict:
    """組出完整的 GraphQL request body"""
    return {
        "query": WORKLOG_CREATE_MUTATION,
        "operationName": OPERATION_NAME,
        "variables": {"input": worklog_input},
    }


class WorklogClient:
    """GraphQL API 客戶端"""

    def __init__(self, graphql_url: str, token: str, timeout: float = DEFAULT_TIMEOUT):
        """
        初始化客戶端

        Args:
            graphql_url: GraphQL endpoint URL
            token: JWT (Bearer)
            timeout: 每次請求的 timeout（秒）
        """
        self.graphql_url = graphql_url
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers.update({
            "Authorization": f"Bearer {token}",
            "Content-Type": "application/json",
            "Accept": "application/json"
        })

    def execute(self, payload: dict) -> dict:
        """送出 GraphQL request，回傳 JSON body"""
        logger.debug("POST %s (%s)", self.graphql_url, payload.get('operationName'))
        try:
            resp = self.session.post(self.graphql_url, json=payload, timeout=self.timeout)
        except requests.exceptions.Timeout as e:
            raise TransportError(f"Request timed out after {self.timeout}s") from e
        except requests.exceptions.RequestException as e:
            raise TransportError(f"Request failed: {e}") from e

        if not resp.ok:
            raise TransportError(f"HTTP error! status: {resp.status_code}", status_code=resp.status_code)

        try:
            return resp.json()
        except ValueError as e:
            raise TransportError("Response is not valid JSON", status_code=resp.status_code) from e

    def create_worklog(self, worklog_input: WorklogInput) -> MutationResult:
        """
        創建 worklog

        Raises:
            TransportError: 網路錯誤或非 2xx 回應
            RemoteError: 回應帶有 errors
        """
        body = self.execute(build_operation(worklog_input.to_variables()))
        result = MutationResult.from_response(body)
        if not result.ok:
            raise RemoteError(result.errors)
        return result
