"""Bounded modules of the LMS modular monolith."""
