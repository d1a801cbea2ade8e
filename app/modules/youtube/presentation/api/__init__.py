"""YouTube metadata REST API."""
