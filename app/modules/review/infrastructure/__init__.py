"""Review infrastructure layer."""
