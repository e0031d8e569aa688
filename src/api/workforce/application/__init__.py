"""Application layer for the Workforce bounded context."""
