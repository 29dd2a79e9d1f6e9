"""Service Layer: command registry, dispatch, command groups and event subscribers."""
