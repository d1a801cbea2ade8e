"""Request/response schemas for youtube metadata endpoints."""
