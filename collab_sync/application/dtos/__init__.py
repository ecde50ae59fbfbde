"""Application DTOs: document read-models, write records and trigger events."""
