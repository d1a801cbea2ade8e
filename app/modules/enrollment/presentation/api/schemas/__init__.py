"""Request/response schemas for enrollment endpoints."""
