"""Employee onboarding and offboarding routes."""

from workforce.presentation.employees.routes import admin_router, router

__all__ = ["admin_router", "router"]
