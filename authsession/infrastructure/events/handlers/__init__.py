"""Domain event handlers."""
