"""Review application layer."""
