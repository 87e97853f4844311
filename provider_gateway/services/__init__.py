"""Service layer: backend calls and response shaping."""
