"""Enrollment domain layer: enrollment and lesson progress state machines."""
