"""Application layer - state container, use cases, and DTOs."""
