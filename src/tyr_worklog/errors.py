"""
錯誤類型

ConfigurationError / ValidationError 會在送出任何請求前終止流程；
TransportError / RemoteError 只影響單一天，批次會繼續處理下一天。
"""

from typing import Optional


class TyrWorklogError(Exception):
    """所有 tyr_worklog 錯誤的基底類別"""


class ConfigurationError(TyrWorklogError):
    """缺少必要配置 (JWT / GRAPHQL_URL)"""

    def __init__(self, missing: list[str]):
        self.missing = missing
        super().__init__(f"Missing required configuration: {', '.join(missing)}")


class ValidationError(TyrWorklogError):
    """使用者輸入不合法"""


class TransportError(TyrWorklogError):
    """網路錯誤、逾時或非 2xx 回應"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


class RemoteError(TyrWorklogError):
    """GraphQL 回應帶有 errors 列表"""

    def __init__(self, errors: list):
        self.errors = errors
        super().__init__(f"Remote error: {describe_errors(errors)}")


def describe_errors(errors: list) -> str:
    """將 GraphQL errors 轉成單行文字"""
    messages = []
    for err in errors:
        if isinstance(err, dict):
            messages.append(str(err.get('message', err)))
        else:
            messages.append(str(err))
    return "; ".join(messages) or "unknown error"
