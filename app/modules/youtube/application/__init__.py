"""YouTube application layer."""
