"""
配置管理模組

從環境變數與 .env 檔案讀取設定
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .errors import ConfigurationError


# 網路請求預設 timeout（秒）
DEFAULT_TIMEOUT = 30
DEFAULT_TIME_SPENT = "8h"

# 欄位 -> 環境變數
ENV_VARS = {
    "jwt": "JWT",
    "graphql_url": "GRAPHQL_URL",
    "project_id": "PROJECT_ID",
    "ticket_id": "TICKET_ID",
    "time_spent": "TIME_SPENT",
    "request_timeout": "REQUEST_TIMEOUT",
}

REQUIRED_FIELDS = ("jwt", "graphql_url")


@dataclass
class Config:
    """應用程式配置"""
    jwt: str = ""                         # Bearer token (必要)
    graphql_url: str = ""                 # GraphQL endpoint (必要)
    project_id: str = ""                  # 預設 Project ID
    ticket_id: str = ""                   # 預設 Ticket ID
    time_spent: str = DEFAULT_TIME_SPENT  # 預設每日工時字串
    request_timeout: float = DEFAULT_TIMEOUT

    @classmethod
    def load(cls, env_file: Optional[Path] = None) -> "Config":
        """載入配置 (.env 不會覆蓋既有的環境變數)"""
        if env_file:
            load_dotenv(env_file)
        else:
            load_dotenv()

        return cls(
            jwt=os.environ.get("JWT", "").strip(),
            graphql_url=os.environ.get("GRAPHQL_URL", "").strip(),
            project_id=os.environ.get("PROJECT_ID", "").strip(),
            ticket_id=os.environ.get("TICKET_ID", "").strip(),
            time_spent=os.environ.get("TIME_SPENT", "").strip() or DEFAULT_TIME_SPENT,
            request_timeout=_parse_timeout(os.environ.get("REQUEST_TIMEOUT")),
        )

    def missing_fields(self) -> list[str]:
        """列出缺少的必要環境變數名稱"""
        return [ENV_VARS[name] for name in REQUIRED_FIELDS if not getattr(self, name)]

    def is_configured(self) -> bool:
        """檢查是否已配置必要項目"""
        return not self.missing_fields()

    def validate(self):
        """必要項目缺少時拋出 ConfigurationError"""
        missing = self.missing_fields()
        if missing:
            raise ConfigurationError(missing)

    def masked_token(self) -> str:
        """遮蔽後的 token，用於顯示"""
        if not self.jwt:
            return ""
        if len(self.jwt) <= 8:
            return "*" * len(self.jwt)
        return f"{self.jwt[:4]}...{self.jwt[-4:]}"


def _parse_timeout(value: Optional[str]) -> float:
    if not value:
        return DEFAULT_TIMEOUT
    try:
        timeout = float(value)
    except ValueError:
        return DEFAULT_TIMEOUT
    return timeout if timeout > 0 else DEFAULT_TIMEOUT
