"""Restaurant (tenant) teardown routes."""

from workforce.presentation.restaurants.routes import router

__all__ = ["router"]
