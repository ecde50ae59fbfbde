"""Shared telemetry: logging setup, OpenTelemetry config, and tracing helpers."""

from collab_sync.shared.telemetry.logging import setup_logging
from collab_sync.shared.telemetry.telemetry import (
    TelemetryConfig,
    get_telemetry,
    set_telemetry,
)
from collab_sync.shared.telemetry.tracing import (
    add_span_attributes,
    traced,
)

__all__ = [
    "setup_logging",
    "TelemetryConfig",
    "get_telemetry",
    "set_telemetry",
    "traced",
    "add_span_attributes",
]
