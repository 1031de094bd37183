"""Infrastructure adapters of the identity core."""
