"""Payment REST API."""
