"""Payment domain layer."""
