"""Infrastructure adapters for the Workforce bounded context."""
