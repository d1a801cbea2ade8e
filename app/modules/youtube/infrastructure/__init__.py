"""YouTube infrastructure: Data API v3 client."""
