"""Identity store implementation for the Supabase Auth admin API.

Talks to GoTrue's admin endpoints with the project's service role key:

- ``POST /auth/v1/admin/users`` creates a principal
- ``DELETE /auth/v1/admin/users/{id}`` deletes a principal

A 404 on delete means the principal is already gone and counts as success.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import httpx

from workforce.infrastructure.observability import (
    DefaultIdentityStoreProbe,
    IdentityStoreProbe,
)
from workforce.ports.exceptions import IdentityStoreError

ADMIN_USERS_PATH = "/auth/v1/admin/users"


class SupabaseIdentityStore:
    """IdentityStore backed by Supabase Auth (GoTrue)."""

    def __init__(
        self,
        base_url: str,
        service_role_key: str,
        timeout_seconds: float = 10.0,
        client: httpx.AsyncClient | None = None,
        probe: IdentityStoreProbe | None = None,
    ):
        """Initialize the identity store.

        Args:
            base_url: Supabase project URL (e.g., "https://xyz.supabase.co")
            service_role_key: Service role key; grants admin access
            timeout_seconds: Timeout applied to every request
            client: Optional preconfigured client (tests inject a mock transport)
            probe: Optional domain probe for observability
        """
        self._probe = probe or DefaultIdentityStoreProbe()
        self._client = client or httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            timeout=timeout_seconds,
        )
        self._headers = {
            "apikey": service_role_key,
            "Authorization": f"Bearer {service_role_key}",
        }

    async def create_principal(
        self,
        email: str,
        password: str,
        metadata: Mapping[str, Any],
    ) -> str:
        payload = {
            "email": email,
            "password": password,
            "email_confirm": True,
            "user_metadata": dict(metadata),
        }
        response = await self._request(
            "create_principal", "POST", ADMIN_USERS_PATH, json=payload
        )
        if response.is_error:
            raise self._error("create_principal", response)

        principal_id = _principal_id(response)
        if not principal_id:
            self._probe.request_failed(
                "create_principal", response.status_code, "response without user id"
            )
            raise IdentityStoreError(
                "Failed to create user", status_code=response.status_code
            )

        self._probe.principal_created(principal_id=principal_id)
        return principal_id

    async def delete_principal(self, principal_id: str) -> None:
        response = await self._request(
            "delete_principal", "DELETE", f"{ADMIN_USERS_PATH}/{principal_id}"
        )
        if response.status_code == httpx.codes.NOT_FOUND:
            self._probe.principal_already_absent(principal_id=principal_id)
            return
        if response.is_error:
            raise self._error("delete_principal", response)

        self._probe.principal_deleted(principal_id=principal_id)

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

    async def _request(
        self, operation: str, method: str, path: str, **kwargs: Any
    ) -> httpx.Response:
        try:
            return await self._client.request(
                method, path, headers=self._headers, **kwargs
            )
        except httpx.HTTPError as e:
            self._probe.request_failed(operation, None, str(e))
            raise IdentityStoreError(
                f"Identity provider unreachable: {e}"
            ) from e

    def _error(self, operation: str, response: httpx.Response) -> IdentityStoreError:
        message = _error_message(response)
        self._probe.request_failed(operation, response.status_code, message)
        return IdentityStoreError(message, status_code=response.status_code)


def _principal_id(response: httpx.Response) -> str | None:
    """Extract the user id; GoTrue returns the user object, older builds wrap it."""
    try:
        body = response.json()
    except ValueError:
        return None
    if not isinstance(body, dict):
        return None
    user = body.get("user") if isinstance(body.get("user"), dict) else body
    principal_id = user.get("id")
    return str(principal_id) if principal_id else None


def _error_message(response: httpx.Response) -> str:
    """Pick the provider's human-readable error message from a response."""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        for key in ("msg", "message", "error_description", "error"):
            value = body.get(key)
            if isinstance(value, str) and value:
                return value
    return response.text or f"Identity provider returned HTTP {response.status_code}"
