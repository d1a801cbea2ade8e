"""Course management REST API."""
