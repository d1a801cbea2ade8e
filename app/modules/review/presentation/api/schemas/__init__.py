"""Request/response schemas for review endpoints."""
