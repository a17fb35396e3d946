"""Domain layer: entities, enums, errors, events and protocols (ports).

Nothing in this package imports from infrastructure or application.
"""
