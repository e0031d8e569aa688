"""Unit tests for Workforce dependency providers."""

from unittest.mock import Mock, patch

import pytest
from fastapi import HTTPException
from pydantic import SecretStr

from workforce import dependencies
from workforce.application.observability import DefaultLifecycleProbe
from workforce.application.services import LifecycleCoordinator
from workforce.infrastructure.supabase_identity_store import SupabaseIdentityStore


def _settings(admin_api_key: str | None) -> Mock:
    settings = Mock()
    settings.admin_api_key = SecretStr(admin_api_key) if admin_api_key else None
    return settings


class TestRequireAdminKey:
    def test_matching_key_passes(self):
        with patch.object(dependencies, "get_settings", return_value=_settings("k")):
            assert dependencies.require_admin_key(x_admin_key="k") is None

    @pytest.mark.parametrize("supplied", [None, "", "K", "k "])
    def test_other_keys_are_forbidden(self, supplied):
        with patch.object(dependencies, "get_settings", return_value=_settings("k")):
            with pytest.raises(HTTPException) as exc_info:
                dependencies.require_admin_key(x_admin_key=supplied)

        assert exc_info.value.status_code == 403

    def test_unset_key_disables_privileged_routes(self):
        with patch.object(dependencies, "get_settings", return_value=_settings(None)):
            with pytest.raises(HTTPException) as exc_info:
                dependencies.require_admin_key(x_admin_key="anything")

        assert exc_info.value.detail == "Privileged operations are disabled"


class TestLifecycleProbe:
    def test_binds_request_id(self):
        probe = dependencies.get_lifecycle_probe(x_request_id="req-1")

        assert isinstance(probe, DefaultLifecycleProbe)
        assert probe._get_context_kwargs() == {"request_id": "req-1"}

    def test_without_request_id(self):
        probe = dependencies.get_lifecycle_probe(x_request_id=None)

        assert probe._get_context_kwargs() == {}


class TestIdentityStore:
    @pytest.mark.asyncio
    async def test_singleton_until_closed(self):
        first = dependencies.get_identity_store()

        assert isinstance(first, SupabaseIdentityStore)
        assert dependencies.get_identity_store() is first

        await dependencies.close_identity_store()

        assert dependencies.get_identity_store() is not first
        await dependencies.close_identity_store()


class TestLifecycleCoordinator:
    def test_uses_configured_concurrency(self):
        lifecycle_settings = Mock(principal_deletion_concurrency=7)

        with patch.object(
            dependencies, "get_lifecycle_settings", return_value=lifecycle_settings
        ):
            coordinator = dependencies.get_lifecycle_coordinator(
                identity_store=Mock(),
                relational_store=Mock(),
                notifications=Mock(),
                probe=Mock(),
            )

        assert isinstance(coordinator, LifecycleCoordinator)
        assert coordinator._principal_deletion_concurrency == 7
