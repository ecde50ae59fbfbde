"""Core: configuration, constants, process lifecycle and exception handlers."""
