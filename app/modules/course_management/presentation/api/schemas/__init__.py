"""Request/response schemas for course management endpoints."""
