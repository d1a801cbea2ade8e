"""YouTube domain: URL parsing, duration parsing and metadata models."""
