"""Pydantic models for employee API requests and responses.

Request bodies accept the camelCase keys used by the web client as well
as snake_case field names. Required onboarding fields are optional here so
that missing input is reported by the lifecycle coordinator with a 400 and
the list of missing fields.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from workforce.application.value_objects import OnboardingRequest, OnboardingResult


class CreateEmployeeRequest(BaseModel):
    """Request model for onboarding an employee."""

    model_config = ConfigDict(populate_by_name=True)

    email: str | None = Field(default=None, description="Login email")
    password: str | None = Field(default=None, description="Initial password")
    first_name: str | None = Field(default=None, alias="firstName")
    last_name: str | None = Field(default=None, alias="lastName")
    phone: str | None = Field(default=None)
    role: str | None = Field(default=None, description="manager or staff")
    position: str | None = Field(default=None)
    hourly_rate: float | str | None = Field(default=None, alias="hourlyRate")
    hire_date: str | None = Field(
        default=None, alias="hireDate", description="ISO date (YYYY-MM-DD)"
    )
    restaurant_id: str | None = Field(default=None, alias="restaurantId")

    def to_onboarding_request(self) -> OnboardingRequest:
        """Convert to the application-level onboarding request."""
        return OnboardingRequest(
            email=self.email,
            password=self.password,
            first_name=self.first_name,
            last_name=self.last_name,
            role=self.role,
            hire_date=self.hire_date,
            tenant_id=self.restaurant_id,
            phone=self.phone,
            position=self.position,
            hourly_rate=self.hourly_rate,
        )


class CreateEmployeeResponse(BaseModel):
    """Response model for a successful onboarding."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    user_id: str = Field(..., alias="userId", description="Identity principal ID")
    email: str

    @classmethod
    def from_result(cls, result: OnboardingResult) -> CreateEmployeeResponse:
        return cls(user_id=result.principal_id, email=result.email)


class DeleteEmployeeRequest(BaseModel):
    """Request model for self-service offboarding."""

    model_config = ConfigDict(populate_by_name=True)

    employee_id: str | None = Field(default=None, alias="employeeId")
    user_id: str | None = Field(
        default=None,
        alias="userId",
        description="Principal ID; defaults to the employee's linked principal",
    )


class DeleteEmployeeResponse(BaseModel):
    """Response model for a successful offboarding."""

    success: bool = True
    message: str = "Employee and auth user deleted successfully"
