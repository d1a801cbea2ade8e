"""YouTube domain services: duration parsing and the metadata API contract."""
