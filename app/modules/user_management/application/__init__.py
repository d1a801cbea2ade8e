"""User management application layer: use-case services, commands and DTOs."""
