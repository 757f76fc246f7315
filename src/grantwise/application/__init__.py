"""Application layer - use cases, DTOs and ports."""
