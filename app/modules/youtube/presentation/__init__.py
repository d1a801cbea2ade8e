"""YouTube metadata presentation layer (REST API)."""
