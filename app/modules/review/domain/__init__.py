"""Review domain layer."""
