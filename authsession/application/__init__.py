"""Application layer: services orchestrating the domain through ports."""
