"""HTTP routes for employee onboarding and offboarding."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, status

from workforce.application.services import LifecycleCoordinator
from workforce.dependencies import get_lifecycle_coordinator, require_admin_key
from workforce.domain.exceptions import LifecycleError
from workforce.domain.value_objects import OffboardingMode
from workforce.presentation.employees.models import (
    CreateEmployeeRequest,
    CreateEmployeeResponse,
    DeleteEmployeeRequest,
    DeleteEmployeeResponse,
)
from workforce.presentation.errors import to_http_exception

router = APIRouter(
    prefix="/employees",
    tags=["employees"],
)

admin_router = APIRouter(
    prefix="/admin/employees",
    tags=["admin"],
    dependencies=[Depends(require_admin_key)],
)


@router.post("", status_code=status.HTTP_200_OK)
async def create_employee(
    request: CreateEmployeeRequest,
    coordinator: Annotated[LifecycleCoordinator, Depends(get_lifecycle_coordinator)],
) -> CreateEmployeeResponse:
    """Onboard an employee.

    Creates the identity principal, inserts the employee row linked to it
    and sends a welcome notification to staff members. If the employee row
    cannot be inserted the principal is deleted again.

    Raises:
        HTTPException: 400 if required fields are missing or malformed
        HTTPException: 502 if the identity provider or database rejects the call
        HTTPException: 500 if the rollback itself failed (orphaned principal)
    """
    try:
        result = await coordinator.onboard(request.to_onboarding_request())
    except LifecycleError as e:
        raise to_http_exception(e) from e
    return CreateEmployeeResponse.from_result(result)


@router.post("/delete")
async def delete_employee(
    request: DeleteEmployeeRequest,
    coordinator: Annotated[LifecycleCoordinator, Depends(get_lifecycle_coordinator)],
) -> DeleteEmployeeResponse:
    """Offboard an employee on their own request.

    The business owner cannot delete their own account this way; they must
    transfer ownership or delete the business first.

    Raises:
        HTTPException: 400 if the employee ID is missing
        HTTPException: 403 if the employee owns the business
        HTTPException: 404 if the employee does not exist
        HTTPException: 502 if the principal could not be deleted
    """
    try:
        await coordinator.offboard(
            request.employee_id or "",
            principal_id=request.user_id,
            mode=OffboardingMode.SELF_SERVICE,
        )
    except LifecycleError as e:
        raise to_http_exception(e) from e
    return DeleteEmployeeResponse()


@admin_router.delete("/{employee_id}")
async def admin_delete_employee(
    employee_id: str,
    coordinator: Annotated[LifecycleCoordinator, Depends(get_lifecycle_coordinator)],
    user_id: str | None = None,
) -> DeleteEmployeeResponse:
    """Offboard any employee, including the business owner.

    Requires the X-Admin-Key header.

    Args:
        employee_id: Employee to remove
        coordinator: Lifecycle coordinator
        user_id: Optional principal ID overriding the employee's linked one
    """
    try:
        await coordinator.offboard(
            employee_id,
            principal_id=user_id,
            mode=OffboardingMode.PRIVILEGED,
        )
    except LifecycleError as e:
        raise to_http_exception(e) from e
    return DeleteEmployeeResponse()
