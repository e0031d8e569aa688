"""Pydantic models for restaurant teardown requests and responses."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from workforce.application.value_objects import TeardownSummary


class DeleteRestaurantRequest(BaseModel):
    """Request model for tearing down a restaurant and all of its data."""

    model_config = ConfigDict(populate_by_name=True)

    restaurant_id: str | None = Field(default=None, alias="restaurantId")
    owner_email: str | None = Field(
        default=None,
        alias="ownerEmail",
        description="Email of the requesting user; must match the owner",
    )


class TeardownSummaryResponse(BaseModel):
    """What a teardown removed."""

    model_config = ConfigDict(populate_by_name=True)

    restaurant_id: str = Field(..., alias="restaurantId")
    principals_deleted: int = Field(..., alias="principalsDeleted")
    rows_deleted: dict[str, int] = Field(..., alias="rowsDeleted")

    @classmethod
    def from_summary(cls, summary: TeardownSummary) -> TeardownSummaryResponse:
        return cls(
            restaurant_id=summary.tenant_id,
            principals_deleted=summary.principals_deleted,
            rows_deleted=dict(summary.rows_deleted),
        )


class DeleteRestaurantResponse(BaseModel):
    """Response model for a successful teardown."""

    success: bool = True
    message: str = "Restaurant and all associated data deleted successfully"
    summary: TeardownSummaryResponse
