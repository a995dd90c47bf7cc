"""Infrastructure layer - adapters for the core interfaces."""
