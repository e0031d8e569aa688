"""Workforce presentation layer - aggregate-based organization.

Each aggregate package (employees, restaurants) contains its own routes
and models. Error translation is shared.
"""

from __future__ import annotations

from fastapi import APIRouter

from workforce.presentation import employees, restaurants

router = APIRouter(tags=["workforce"])

router.include_router(employees.router)
router.include_router(employees.admin_router)
router.include_router(restaurants.router)

__all__ = ["router"]
