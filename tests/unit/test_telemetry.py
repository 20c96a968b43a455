"""Unit tests for logging and tracing helpers."""

from __future__ import annotations

import pytest
from opentelemetry import trace

from ilios_api_client import telemetry
from ilios_api_client.config import TelemetryConfig
from ilios_api_client.errors import EmptyResponseError


@pytest.fixture(autouse=True)
def reset_telemetry(monkeypatch: pytest.MonkeyPatch) -> None:
    """Isolate module-level tracer and logger between tests."""
    monkeypatch.setattr(telemetry, "_tracer", None)
    monkeypatch.setattr(telemetry, "_logger", None)


class TestTelemetry:
    """Tests for telemetry accessors and tracing."""

    def test_get_logger_is_cached(self) -> None:
        assert telemetry.get_logger() is telemetry.get_logger()

    def test_disabled_telemetry_uses_noop_tracer(self, telemetry_config: TelemetryConfig) -> None:
        telemetry.configure_telemetry(telemetry_config)

        assert isinstance(telemetry.get_tracer(), trace.NoOpTracer)

    def test_trace_operation_reraises(self) -> None:
        """Exceptions inside a traced operation should propagate unchanged."""
        error = EmptyResponseError()

        with pytest.raises(EmptyResponseError) as exc_info:
            with telemetry.trace_operation("op", attributes={"ilios.object_type": "courses"}):
                raise error

        assert exc_info.value is error

