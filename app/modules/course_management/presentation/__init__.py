"""Course management presentation layer (REST API)."""
