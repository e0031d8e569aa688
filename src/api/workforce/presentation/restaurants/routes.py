"""HTTP routes for restaurant teardown."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from workforce.application.services import LifecycleCoordinator
from workforce.dependencies import get_lifecycle_coordinator
from workforce.domain.exceptions import LifecycleError
from workforce.presentation.errors import to_http_exception
from workforce.presentation.restaurants.models import (
    DeleteRestaurantRequest,
    DeleteRestaurantResponse,
    TeardownSummaryResponse,
)

router = APIRouter(
    prefix="/restaurants",
    tags=["restaurants"],
)


@router.post("/delete")
async def delete_restaurant(
    request: DeleteRestaurantRequest,
    coordinator: Annotated[LifecycleCoordinator, Depends(get_lifecycle_coordinator)],
) -> DeleteRestaurantResponse:
    """Delete a restaurant with its employees, their accounts and all schedule data.

    Only the owner may do this. Account deletions that fail do not stop the
    teardown; they are reported afterwards with a 500 listing the affected
    principal IDs.

    Raises:
        HTTPException: 400 if the restaurant ID or owner email is missing
        HTTPException: 403 if the requester is not the owner
        HTTPException: 404 if the restaurant does not exist
        HTTPException: 502 if restaurant data could not be deleted
        HTTPException: 500 if some employee accounts could not be deleted
    """
    try:
        summary = await coordinator.teardown_tenant(
            request.restaurant_id or "",
            request.owner_email or "",
        )
    except LifecycleError as e:
        raise to_http_exception(e) from e
    return DeleteRestaurantResponse(
        summary=TeardownSummaryResponse.from_summary(summary)
    )
