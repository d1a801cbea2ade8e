"""Course catalog infrastructure layer."""
