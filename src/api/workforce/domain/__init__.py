"""Domain layer for the Workforce bounded context."""
