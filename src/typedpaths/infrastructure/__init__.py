"""Infrastructure layer: concrete backends."""
