"""Domain layer: status enums and exceptions (no I/O)."""
