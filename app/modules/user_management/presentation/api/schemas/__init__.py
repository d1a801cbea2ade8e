"""Request/response schemas for user management endpoints."""
