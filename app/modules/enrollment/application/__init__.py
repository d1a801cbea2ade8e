"""Enrollment application layer: commands, queries, DTOs and the use-case service."""
