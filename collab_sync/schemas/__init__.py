"""Wire schemas (pydantic) for the trigger endpoint and health checks."""
