"""Domain layer: value objects, protocols and exceptions."""
