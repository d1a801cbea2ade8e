"""Course management application layer: catalog use cases, commands and queries."""
