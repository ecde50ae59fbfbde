"""Adapters for external services other than the document store."""
