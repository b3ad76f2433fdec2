"""
Pytest Configuration and Shared Fixtures
Version: 1.1.0
Purpose: Provide reusable test fixtures and configuration for all tests
"""

import json
import pytest
from pathlib import Path
from typing import Any, Optional
from unittest.mock import MagicMock
import sys

import requests

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from documentwise_engine.api_client import ChatClient, DocumentWiseClient
from documentwise_engine.config import ApiConfig
from documentwise_engine.utils import apply_log_level
from documentwise_engine.version_config import DOCUMENTWISE_VERSION

# Smallest byte string the upload validation accepts as a one-page PDF.
MINIMAL_PDF = b"%PDF-1.4\n1 0 obj << /Type /Page >> endobj\n%%EOF"


class FakeClock:
    """Manually advanced replacement for time.monotonic."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def make_response(
    status_code: int = 200,
    json_body: Any = None,
    text: Optional[str] = None,
    content: Optional[bytes] = None,
    content_type: Optional[str] = None,
    reason: Optional[str] = None,
) -> requests.Response:
    """Build a real requests.Response without touching the network."""
    response = requests.Response()
    response.status_code = status_code
    response.reason = reason
    if json_body is not None:
        response._content = json.dumps(json_body).encode("utf-8")
        response.headers["Content-Type"] = content_type or "application/json"
    elif text is not None:
        response._content = text.encode("utf-8")
        response.headers["Content-Type"] = content_type or "text/html; charset=utf-8"
    else:
        response._content = content or b""
        if content_type:
            response.headers["Content-Type"] = content_type
    response._content_consumed = True
    response.encoding = "utf-8"
    return response


# ============================================================================
# Session-scoped fixtures (run once per test session)
# ============================================================================

@pytest.fixture(scope="session")
def project_root_path() -> Path:
    """Return the project root directory path."""
    return Path(__file__).parent.parent


@pytest.fixture(scope="session")
def documentwise_version() -> str:
    """Return the current DocumentWise version."""
    return DOCUMENTWISE_VERSION


# ============================================================================
# Function-scoped fixtures (run for each test)
# ============================================================================

@pytest.fixture
def api_config() -> ApiConfig:
    return ApiConfig(
        api_base_url="http://api.test",
        chat_api_base_url="http://chat.test",
        request_timeout=5,
    )


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def minimal_pdf() -> bytes:
    return MINIMAL_PDF


@pytest.fixture
def response_factory():
    """Expose make_response to tests without importing conftest."""
    return make_response


# ============================================================================
# Mock fixtures for external services
# ============================================================================

@pytest.fixture
def mock_session():
    """requests.Session stand-in; set mock_session.request.return_value per test."""
    session = MagicMock(spec=requests.Session)
    session.headers = {}
    session.request.return_value = make_response(200, json_body={})
    return session


@pytest.fixture
def client(api_config, mock_session) -> DocumentWiseClient:
    return DocumentWiseClient(api_config, session=mock_session)


@pytest.fixture
def chat_client(api_config, mock_session) -> ChatClient:
    return ChatClient(api_config, session=mock_session)


# ============================================================================
# Test environment setup
# ============================================================================

@pytest.fixture(autouse=True)
def reset_environment():
    """Reset environment variables before each test."""
    import os
    original_env = os.environ.copy()
    yield
    # Restore original environment
    os.environ.clear()
    os.environ.update(original_env)
    # read_config applies its log level to every package logger.
    apply_log_level(None)


# ============================================================================
# Pytest hooks for custom behavior
# ============================================================================

def pytest_configure(config):
    """Configure pytest with custom settings."""
    config.addinivalue_line(
        "markers", "smoke: Quick smoke tests to verify basic functionality"
    )
    config.addinivalue_line(
        "markers", "unit: Fast tests of a single module"
    )
    config.addinivalue_line(
        "markers", "integration: Tests that wire several components together"
    )


def pytest_collection_modifyitems(config, items):
    """Modify test collection to add markers automatically."""
    for item in items:
        # Auto-mark tests in integration directory
        if "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)

        # Auto-mark tests in unit directory
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)


def pytest_report_header(config):
    """Add custom header to test report."""
    return [
        f"DocumentWise Test Suite v{DOCUMENTWISE_VERSION}",
        f"Project root: {project_root}",
    ]
