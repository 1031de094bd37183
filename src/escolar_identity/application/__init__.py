"""Application layer of the identity core."""
