"""Unit tests for infrastructure and store probes.

Tests that probes correctly capture events following the Domain Oriented
Observability pattern.
"""

from unittest.mock import MagicMock

import structlog

from infrastructure.observability import ObservationContext
from infrastructure.observability.probes import DefaultConnectionProbe
from workforce.infrastructure.observability import (
    DefaultIdentityStoreProbe,
    DefaultRelationalStoreProbe,
)


class TestConnectionProbe:
    """Tests for ConnectionProbe protocol and implementation."""

    def test_default_probe_accepts_custom_logger(self):
        mock_logger = MagicMock(spec=structlog.stdlib.BoundLogger)
        probe = DefaultConnectionProbe(logger=mock_logger)
        assert probe._logger is mock_logger

    def test_engine_created_logs_info(self):
        mock_logger = MagicMock(spec=structlog.stdlib.BoundLogger)
        probe = DefaultConnectionProbe(logger=mock_logger)

        probe.engine_created(
            connection_string="postgresql://u@localhost:5432/db", pool_size=10
        )

        mock_logger.info.assert_called_once_with(
            "database_engine_created",
            connection_string="postgresql://u@localhost:5432/db",
            pool_size=10,
        )

    def test_pool_closed_logs_info(self):
        mock_logger = MagicMock(spec=structlog.stdlib.BoundLogger)
        probe = DefaultConnectionProbe(logger=mock_logger)

        probe.pool_closed()

        mock_logger.info.assert_called_once_with("connection_pool_closed")


class TestIdentityStoreProbe:
    def test_request_failed_logs_warning(self):
        mock_logger = MagicMock(spec=structlog.stdlib.BoundLogger)
        probe = DefaultIdentityStoreProbe(logger=mock_logger)

        probe.request_failed("delete_principal", 500, "boom")

        mock_logger.warning.assert_called_once_with(
            "identity_request_failed",
            operation="delete_principal",
            status_code=500,
            message="boom",
        )

    def test_with_context_binds_request_id(self):
        mock_logger = MagicMock(spec=structlog.stdlib.BoundLogger)
        probe = DefaultIdentityStoreProbe(logger=mock_logger).with_context(
            ObservationContext(request_id="req-7")
        )

        probe.principal_already_absent(principal_id="p-1")

        mock_logger.info.assert_called_once_with(
            "identity_principal_already_absent",
            principal_id="p-1",
            request_id="req-7",
        )


class TestRelationalStoreProbe:
    def test_operation_failed_logs_error(self):
        mock_logger = MagicMock(spec=structlog.stdlib.BoundLogger)
        probe = DefaultRelationalStoreProbe(logger=mock_logger)

        probe.operation_failed("delete", "shifts", OSError("reset"))

        mock_logger.error.assert_called_once_with(
            "relational_operation_failed",
            operation="delete",
            table="shifts",
            error="reset",
            error_type="OSError",
        )
