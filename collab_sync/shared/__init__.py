"""Cross-cutting helpers shared by all layers (telemetry, utils)."""
