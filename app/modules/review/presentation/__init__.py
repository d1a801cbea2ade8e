"""Review presentation layer (REST API)."""
