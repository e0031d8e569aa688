"""Unit tests for LifecycleCoordinator.teardown_tenant()."""

import asyncio

import pytest

from workforce.application.services import LifecycleCoordinator
from workforce.domain.exceptions import (
    AuthorizationError,
    NotFoundError,
    PartialFailureError,
    UpstreamError,
    ValidationError,
)
from workforce.domain.value_objects import TENANT_SCOPED_TABLES
from workforce.ports.exceptions import IdentityStoreError, RelationalStoreError

DEPENDENT_TABLES = [
    "shift_swap_requests",
    "time_off_requests",
    "shifts",
    "shift_templates",
    "blocked_dates",
    "staffing_requirements",
    "business_hours",
    "notifications",
]


@pytest.fixture
def populated_tenant(relational_store, seed_employee):
    """Tenant T1 with two employees and a row in every dependent table.

    A second tenant's rows are seeded too and must survive teardown.
    """
    employees = [seed_employee("owner@x.tt", role="manager"), seed_employee("s@x.tt")]
    for table in DEPENDENT_TABLES:
        relational_store.seed(table, restaurant_id="T1")
        relational_store.seed(table, restaurant_id="T2")
    return employees


def _tenant_rows(store, table, tenant_id="T1"):
    return [row for row in store.rows(table) if row.get("restaurant_id") == tenant_id]


class TestTeardownSuccess:
    @pytest.mark.asyncio
    async def test_removes_everything_scoped_to_the_tenant(
        self, coordinator, populated_tenant, relational_store, identity_store
    ):
        summary = await coordinator.teardown_tenant("T1", "owner@x.tt")

        for table in [*DEPENDENT_TABLES, "employees"]:
            assert _tenant_rows(relational_store, table) == []
        assert relational_store.rows("restaurants") == []
        assert identity_store.principals == {}
        assert summary.tenant_id == "T1"
        assert summary.principals_deleted == 2
        assert summary.rows_deleted["employees"] == 2
        assert summary.rows_deleted["restaurants"] == 1

    @pytest.mark.asyncio
    async def test_other_tenants_are_untouched(
        self, coordinator, populated_tenant, relational_store
    ):
        await coordinator.teardown_tenant("T1", "owner@x.tt")

        for table in DEPENDENT_TABLES:
            assert len(_tenant_rows(relational_store, table, "T2")) == 1

    @pytest.mark.asyncio
    async def test_tenant_row_deleted_last(
        self, coordinator, populated_tenant, relational_store
    ):
        await coordinator.teardown_tenant("T1", "owner@x.tt")

        deletes = [table for op, table in relational_store.calls if op == "delete"]
        assert deletes == [*(t.value for t in TENANT_SCOPED_TABLES), "restaurants"]
        assert deletes.index("employees") > deletes.index("shifts")

    @pytest.mark.asyncio
    async def test_principals_deleted_before_any_row(
        self, coordinator, populated_tenant, relational_store, identity_store
    ):
        order = []
        original_delete = identity_store.delete_principal
        original_delete_where = relational_store.delete_where

        async def record_principal(principal_id):
            order.append("principal")
            await original_delete(principal_id)

        async def record_rows(table, filters):
            order.append("rows")
            return await original_delete_where(table, filters)

        identity_store.delete_principal = record_principal
        relational_store.delete_where = record_rows

        await coordinator.teardown_tenant("T1", "owner@x.tt")

        assert order[:2] == ["principal", "principal"]
        assert "principal" not in order[2:]

    @pytest.mark.asyncio
    async def test_owner_email_match_ignores_case(self, coordinator, populated_tenant):
        summary = await coordinator.teardown_tenant("T1", "  OWNER@x.tt ")

        assert summary.rows_deleted["restaurants"] == 1

    @pytest.mark.asyncio
    async def test_tenant_without_employees(self, coordinator, identity_store):
        summary = await coordinator.teardown_tenant("T1", "owner@x.tt")

        assert summary.principals_deleted == 0
        assert identity_store.calls == []

    @pytest.mark.asyncio
    async def test_shared_principal_deleted_once(
        self, coordinator, relational_store, identity_store, seed_employee
    ):
        first = seed_employee("dup@x.tt")
        relational_store.seed(
            "employees",
            restaurant_id="T1",
            user_id=first["user_id"],
            email="dup2@x.tt",
            role="staff",
        )

        await coordinator.teardown_tenant("T1", "owner@x.tt")

        assert identity_store.calls == [("delete_principal", first["user_id"])]


class TestTeardownIdempotency:
    @pytest.mark.asyncio
    async def test_second_teardown_reports_not_found(
        self, coordinator, populated_tenant, relational_store
    ):
        await coordinator.teardown_tenant("T1", "owner@x.tt")

        with pytest.raises(NotFoundError, match="Restaurant not found"):
            await coordinator.teardown_tenant("T1", "owner@x.tt")

        assert _tenant_rows(relational_store, "employees") == []
        for table in DEPENDENT_TABLES:
            assert _tenant_rows(relational_store, table) == []

    @pytest.mark.asyncio
    async def test_rerun_finishes_interrupted_teardown(
        self, coordinator, populated_tenant, relational_store, identity_store
    ):
        relational_store.fail[("delete", "shifts")] = RelationalStoreError("timeout")

        with pytest.raises(UpstreamError):
            await coordinator.teardown_tenant("T1", "owner@x.tt")

        del relational_store.fail[("delete", "shifts")]
        summary = await coordinator.teardown_tenant("T1", "owner@x.tt")

        assert summary.rows_deleted["shifts"] == 1
        assert relational_store.rows("restaurants") == []
        assert identity_store.principals == {}


class TestTeardownFailures:
    @pytest.mark.asyncio
    async def test_wrong_owner_deletes_nothing(
        self, coordinator, populated_tenant, relational_store, identity_store
    ):
        with pytest.raises(AuthorizationError):
            await coordinator.teardown_tenant("T1", "intruder@x.tt")

        assert relational_store.mutations() == []
        assert identity_store.calls == []
        assert len(relational_store.rows("restaurants")) == 1

    @pytest.mark.asyncio
    async def test_unknown_tenant_is_not_found(self, coordinator, identity_store):
        with pytest.raises(NotFoundError):
            await coordinator.teardown_tenant("nope", "owner@x.tt")

        assert identity_store.calls == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("tenant_id", "email"), [("", "owner@x.tt"), ("T1", ""), (" ", " ")]
    )
    async def test_blank_arguments_are_rejected(
        self, coordinator, relational_store, tenant_id, email
    ):
        with pytest.raises(ValidationError):
            await coordinator.teardown_tenant(tenant_id, email)

        assert relational_store.calls == []

    @pytest.mark.asyncio
    async def test_principal_failures_do_not_stop_teardown(
        self, coordinator, populated_tenant, relational_store, identity_store
    ):
        """Failed principal deletions are collected and reported after the flow."""
        owner, staff = populated_tenant
        identity_store.delete_errors[staff["user_id"]] = IdentityStoreError("timeout")

        with pytest.raises(PartialFailureError) as exc_info:
            await coordinator.teardown_tenant("T1", "owner@x.tt")

        assert exc_info.value.step == "delete_principal"
        assert exc_info.value.principal_ids == (staff["user_id"],)
        assert relational_store.rows("restaurants") == []
        assert _tenant_rows(relational_store, "employees") == []
        assert owner["user_id"] not in identity_store.principals

    @pytest.mark.asyncio
    async def test_principal_failures_recorded_by_probe(
        self, coordinator, populated_tenant, identity_store, mock_probe
    ):
        _, staff = populated_tenant
        identity_store.delete_errors[staff["user_id"]] = IdentityStoreError("timeout")

        with pytest.raises(PartialFailureError):
            await coordinator.teardown_tenant("T1", "owner@x.tt")

        mock_probe.principal_deletion_failed.assert_called_once()
        mock_probe.tenant_torn_down.assert_called_once_with(
            tenant_id="T1", principals_deleted=1, principals_failed=1
        )

    @pytest.mark.asyncio
    async def test_tenant_row_failure_leaves_dependents_empty(
        self, coordinator, populated_tenant, relational_store
    ):
        relational_store.fail[("delete", "restaurants")] = RelationalStoreError(
            "violates foreign key constraint"
        )

        with pytest.raises(UpstreamError) as exc_info:
            await coordinator.teardown_tenant("T1", "owner@x.tt")

        assert exc_info.value.step == "delete_tenant"
        for table in [*DEPENDENT_TABLES, "employees"]:
            assert _tenant_rows(relational_store, table) == []
        assert len(relational_store.rows("restaurants")) == 1

    @pytest.mark.asyncio
    async def test_dependent_failure_keeps_tenant_row(
        self, coordinator, populated_tenant, relational_store
    ):
        relational_store.fail[("delete", "business_hours")] = RelationalStoreError(
            "timeout"
        )

        with pytest.raises(UpstreamError) as exc_info:
            await coordinator.teardown_tenant("T1", "owner@x.tt")

        assert exc_info.value.step == "delete_business_hours"
        assert len(relational_store.rows("restaurants")) == 1
        assert ("delete", "restaurants") not in relational_store.calls

    @pytest.mark.asyncio
    async def test_employee_listing_failure_is_upstream(
        self, coordinator, relational_store, identity_store
    ):
        relational_store.fail[("find", "employees")] = RelationalStoreError("down")

        with pytest.raises(UpstreamError):
            await coordinator.teardown_tenant("T1", "owner@x.tt")

        assert identity_store.calls == []
        assert relational_store.mutations() == []

    @pytest.mark.asyncio
    async def test_concurrent_removal_of_tenant_row_is_not_found(
        self, coordinator, relational_store
    ):
        original_delete_where = relational_store.delete_where

        async def tenant_already_gone(table, filters):
            if table == "restaurants":
                return 0
            return await original_delete_where(table, filters)

        relational_store.delete_where = tenant_already_gone

        with pytest.raises(NotFoundError):
            await coordinator.teardown_tenant("T1", "owner@x.tt")


class TestPrincipalDeletionConcurrency:
    @pytest.mark.asyncio
    async def test_in_flight_deletions_are_bounded(
        self, identity_store, relational_store, notifications, seed_employee
    ):
        for n in range(6):
            seed_employee(f"e{n}@x.tt")

        in_flight = 0
        peak = 0
        original_delete = identity_store.delete_principal

        async def slow_delete(principal_id):
            nonlocal in_flight, peak
            in_flight += 1
            peak = max(peak, in_flight)
            await asyncio.sleep(0.01)
            in_flight -= 1
            await original_delete(principal_id)

        identity_store.delete_principal = slow_delete
        coordinator = LifecycleCoordinator(
            identity_store=identity_store,
            relational_store=relational_store,
            notifications=notifications,
            principal_deletion_concurrency=2,
        )

        summary = await coordinator.teardown_tenant("T1", "owner@x.tt")

        assert summary.principals_deleted == 6
        assert peak == 2
