"""Core layer: configuration, result type, error base classes, composition root."""
