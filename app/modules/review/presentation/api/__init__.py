"""Review REST API."""
