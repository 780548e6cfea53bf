"""Pytest configuration and fixtures."""

import pytest
from datetime import date
from unittest.mock import MagicMock, patch


ENV_NAMES = ["JWT", "GRAPHQL_URL", "PROJECT_ID", "TICKET_ID", "TIME_SPENT", "REQUEST_TIMEOUT"]


@pytest.fixture
def clean_env(monkeypatch):
    """Remove all config variables and disable .env loading."""
    for name in ENV_NAMES:
        monkeypatch.delenv(name, raising=False)
    with patch("tyr_worklog.config.load_dotenv") as mock_load:
        yield mock_load


@pytest.fixture
def sample_env(clean_env, monkeypatch):
    """A fully configured environment."""
    values = {
        "JWT": "test-jwt-token-12345",
        "GRAPHQL_URL": "https://tyr.example.com/graphql",
        "PROJECT_ID": "PRJ-1",
        "TICKET_ID": "TCK-42",
    }
    for name, value in values.items():
        monkeypatch.setenv(name, value)
    return values


@pytest.fixture
def july_2025_days():
    """Work days of July 2025 up to Wednesday 2025-07-16."""
    return [
        date(2025, 7, d) for d in (1, 2, 3, 4, 7, 8, 9, 10, 11, 14, 15, 16)
    ]


@pytest.fixture
def sample_payload():
    """Shared worklog fields."""
    from tyr_worklog.submitter import WorklogPayload
    return WorklogPayload(
        comment="Backend development",
        time_spent="8h",
        project="PRJ-1",
        ticket="TCK-42",
    )


@pytest.fixture
def success_body():
    """GraphQL success response."""
    return {"data": {"result": {"id": "wl-1001", "__typename": "Worklog"}}}


@pytest.fixture
def error_body():
    """GraphQL error response."""
    return {"errors": [{"message": "Ticket not found", "path": ["createWorklog"]}]}


@pytest.fixture
def mock_requests_session():
    """Mock requests session for API testing."""
    with patch("requests.Session") as mock_session:
        mock_instance = MagicMock()
        mock_session.return_value = mock_instance
        yield mock_instance
