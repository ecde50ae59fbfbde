"""Application layer: trigger handlers (use cases), DTOs and ports."""
