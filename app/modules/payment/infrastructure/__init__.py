"""Payment infrastructure layer."""
