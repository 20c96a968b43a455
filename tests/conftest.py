"""
Shared test fixtures for Ilios API client tests.

Provides configuration, transport mocks and access tokens.
"""

import time
from unittest.mock import MagicMock

import jwt
import pytest

from ilios_api_client.client import IliosClient
from ilios_api_client.config import IliosClientConfig, RetryConfig, TelemetryConfig

ILIOS_BASE_URL = "http://localhost"
TOKEN_KEY = "doesnotmatterhere"


def create_access_token(exp_offset: int = 10 * 86400, **claims) -> str:
    """Create a signed JWT that expires ``exp_offset`` seconds from now."""
    payload = {"exp": int(time.time()) + exp_offset, **claims}
    return jwt.encode(payload, TOKEN_KEY, algorithm="HS256")


@pytest.fixture
def base_config() -> IliosClientConfig:
    """Provide a basic client configuration for testing."""
    return IliosClientConfig(base_url=ILIOS_BASE_URL)


@pytest.fixture
def retry_config() -> RetryConfig:
    """Provide retry configuration without real delays."""
    return RetryConfig(
        max_retries=2,
        initial_delay=0.001,
        max_delay=0.01,
        jitter=0.0,
    )


@pytest.fixture
def telemetry_config() -> TelemetryConfig:
    """Provide telemetry configuration for testing."""
    return TelemetryConfig(enabled=False, service_name="test-client")


@pytest.fixture
def mock_transport() -> MagicMock:
    """Provide a mock transport."""
    transport = MagicMock()
    transport.reset_header = MagicMock()
    transport.set_header = MagicMock()
    transport.get = MagicMock()
    return transport


@pytest.fixture
def client(base_config: IliosClientConfig, mock_transport: MagicMock) -> IliosClient:
    """Provide a client wired to the mock transport."""
    return IliosClient(base_config, transport=mock_transport)


@pytest.fixture
def token_factory():
    """Provide the access token factory."""
    return create_access_token


@pytest.fixture
def access_token() -> str:
    """Provide an unexpired access token."""
    return create_access_token()


@pytest.fixture
def expired_token() -> str:
    """Provide an access token that expired two days ago."""
    return create_access_token(exp_offset=-2 * 86400)
