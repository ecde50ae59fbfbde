"""Tests for the tracing decorator and telemetry configuration."""

import pytest

from collab_sync.shared.telemetry import TelemetryConfig, get_telemetry, set_telemetry, traced


@traced("test.async_op")
async def _async_op(value: int, user_id: str | None = None) -> int:
    return value * 2


@traced()
def _sync_op(value: int) -> int:
    if value < 0:
        raise ValueError("negative")
    return value + 1


async def test_traced_async_function_returns_result() -> None:
    assert await _async_op(2, user_id="u1") == 4
    assert _async_op.__name__ == "_async_op"


def test_traced_sync_function_propagates_errors() -> None:
    assert _sync_op(1) == 2
    with pytest.raises(ValueError, match="negative"):
        _sync_op(-1)


def test_disabled_telemetry_sets_no_provider() -> None:
    config = TelemetryConfig("collab-sync", "1.0.0", enabled=False)
    assert config.setup_telemetry(exporter_type="console") is None
    assert config.tracer_provider is None
    config.shutdown()


def test_global_telemetry_can_be_set_and_cleared() -> None:
    config = TelemetryConfig("collab-sync", "1.0.0", enabled=False)
    set_telemetry(config)
    try:
        assert get_telemetry() is config
    finally:
        set_telemetry(None)
    assert get_telemetry() is None
