"""Notification emitter writing in-app notifications to the database."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from workforce.domain.value_objects import (
    TENANT_FOREIGN_KEY,
    NotificationKind,
    Table,
)
from workforce.ports.stores import RelationalStore

# title, message and link per notification kind; formatted with emit() fields
TEMPLATES: dict[str, tuple[str, str, str | None]] = {
    NotificationKind.WELCOME: (
        "Welcome to {tenant_name}!",
        "Hi {first_name}, welcome to the team! You can view your shifts and "
        "schedule from the dashboard.",
        "/dashboard/my-shifts",
    ),
}


class RelationalNotificationEmitter:
    """NotificationEmitter that inserts rows into the notifications table."""

    def __init__(self, relational_store: RelationalStore):
        self._relational = relational_store

    async def emit(
        self,
        principal_id: str,
        tenant_id: str,
        kind: str,
        fields: Mapping[str, Any],
    ) -> None:
        """Render the template for ``kind`` and store the notification.

        Raises:
            ValueError: If ``kind`` has no template or a field is missing
            RelationalStoreError: If the insert fails
        """
        try:
            title, message, link = TEMPLATES[kind]
        except KeyError:
            raise ValueError(f"No notification template for kind: {kind}") from None

        try:
            rendered_title = title.format(**fields)
            rendered_message = message.format(**fields)
        except KeyError as e:
            raise ValueError(f"Missing notification field: {e.args[0]}") from e

        await self._relational.insert(
            Table.NOTIFICATIONS,
            {
                "user_id": principal_id,
                TENANT_FOREIGN_KEY: tenant_id,
                "type": str(kind),
                "title": rendered_title,
                "message": rendered_message,
                "link": link,
                "is_read": False,
            },
        )
