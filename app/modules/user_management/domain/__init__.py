"""User management domain layer: users, sessions and their repositories."""
