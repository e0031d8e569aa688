"""Unit tests for RelationalNotificationEmitter."""

from unittest.mock import AsyncMock, Mock

import pytest

from workforce.infrastructure.notification_emitter import RelationalNotificationEmitter
from workforce.ports.stores import RelationalStore


@pytest.fixture
def mock_store():
    store = Mock(spec=RelationalStore)
    store.insert = AsyncMock(return_value={})
    return store


class TestRelationalNotificationEmitter:
    @pytest.mark.asyncio
    async def test_welcome_notification_is_rendered_and_stored(self, mock_store):
        emitter = RelationalNotificationEmitter(relational_store=mock_store)

        await emitter.emit(
            principal_id="p-1",
            tenant_id="T1",
            kind="welcome",
            fields={"tenant_name": "Doubles Corner", "first_name": "Ana"},
        )

        mock_store.insert.assert_awaited_once_with(
            "notifications",
            {
                "user_id": "p-1",
                "restaurant_id": "T1",
                "type": "welcome",
                "title": "Welcome to Doubles Corner!",
                "message": (
                    "Hi Ana, welcome to the team! You can view your shifts and "
                    "schedule from the dashboard."
                ),
                "link": "/dashboard/my-shifts",
                "is_read": False,
            },
        )

    @pytest.mark.asyncio
    async def test_unknown_kind_is_rejected(self, mock_store):
        emitter = RelationalNotificationEmitter(relational_store=mock_store)

        with pytest.raises(ValueError, match="No notification template"):
            await emitter.emit("p-1", "T1", "shift_reminder", {})

        mock_store.insert.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_missing_field_is_rejected(self, mock_store):
        emitter = RelationalNotificationEmitter(relational_store=mock_store)

        with pytest.raises(ValueError, match="tenant_name"):
            await emitter.emit("p-1", "T1", "welcome", {"first_name": "Ana"})
