"""Payment presentation layer (REST API)."""
