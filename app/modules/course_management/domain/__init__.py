"""Course catalog domain layer: courses, lessons and categories."""
