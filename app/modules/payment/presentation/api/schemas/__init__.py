"""Request/response schemas for payment endpoints."""
