"""Relational store implementation using SQLAlchemy Core.

Implements the RelationalStore port on top of an AsyncEngine. Every call
runs in its own transaction, so the lifecycle coordinator never holds a
transaction open across a call to the identity provider.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from sqlalchemy import Table as SqlTable
from sqlalchemy import and_, delete, insert, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine
from sqlalchemy.sql.elements import ColumnElement

from infrastructure.database.models import Base
from workforce.infrastructure import models as _models  # noqa: F401
from workforce.infrastructure.observability import (
    DefaultRelationalStoreProbe,
    RelationalStoreProbe,
)
from workforce.ports.exceptions import RelationalStoreError, UniqueViolationError
from workforce.ports.stores import Filters, Record

# PostgreSQL SQLSTATE for unique_violation
UNIQUE_VIOLATION_SQLSTATE = "23505"


class SqlRelationalStore:
    """RelationalStore backed by the Workforce ORM tables."""

    def __init__(
        self,
        engine: AsyncEngine,
        probe: RelationalStoreProbe | None = None,
    ):
        """Initialize the store.

        Args:
            engine: Async engine for the application database
            probe: Optional domain probe for observability
        """
        self._engine = engine
        self._probe = probe or DefaultRelationalStoreProbe()

    async def insert(self, table: str, row: Mapping[str, Any]) -> Record:
        sql_table = self._table(table)
        statement = insert(sql_table).values(**row).returning(*sql_table.c)
        try:
            async with self._engine.begin() as conn:
                result = await conn.execute(statement)
                inserted = result.mappings().one()
        except IntegrityError as e:
            if _is_unique_violation(e):
                self._probe.unique_violation(table=sql_table.name)
                raise UniqueViolationError(
                    f"duplicate key value violates unique constraint on {sql_table.name}"
                ) from e
            self._probe.operation_failed("insert", sql_table.name, e)
            raise RelationalStoreError(_describe(e)) from e
        except (SQLAlchemyError, OSError) as e:
            self._probe.operation_failed("insert", sql_table.name, e)
            raise RelationalStoreError(_describe(e)) from e
        return dict(inserted)

    async def delete_where(self, table: str, filters: Filters) -> int:
        """Delete matching rows.

        An empty filter is rejected rather than deleting the whole table.
        """
        sql_table = self._table(table)
        if not filters:
            raise RelationalStoreError(
                f"Refusing to delete from {sql_table.name} without a filter"
            )
        statement = delete(sql_table).where(self._where(sql_table, filters))
        try:
            async with self._engine.begin() as conn:
                result = await conn.execute(statement)
        except (SQLAlchemyError, OSError) as e:
            self._probe.operation_failed("delete", sql_table.name, e)
            raise RelationalStoreError(_describe(e)) from e

        count = result.rowcount or 0
        self._probe.rows_deleted(table=sql_table.name, count=count)
        return count

    async def find_one(self, table: str, filters: Filters) -> Record | None:
        rows = await self._select(table, filters, limit=1)
        return rows[0] if rows else None

    async def find_all(self, table: str, filters: Filters) -> list[Record]:
        return await self._select(table, filters)

    async def _select(
        self, table: str, filters: Filters, limit: int | None = None
    ) -> list[Record]:
        sql_table = self._table(table)
        statement = select(sql_table)
        if filters:
            statement = statement.where(self._where(sql_table, filters))
        if limit is not None:
            statement = statement.limit(limit)
        try:
            async with self._engine.connect() as conn:
                result = await conn.execute(statement)
                rows = result.mappings().all()
        except (SQLAlchemyError, OSError) as e:
            self._probe.operation_failed("select", sql_table.name, e)
            raise RelationalStoreError(_describe(e)) from e
        return [dict(row) for row in rows]

    @staticmethod
    def _table(name: str) -> SqlTable:
        try:
            return Base.metadata.tables[str(name)]
        except KeyError:
            raise RelationalStoreError(f"Unknown table: {name}") from None

    @staticmethod
    def _where(sql_table: SqlTable, filters: Filters) -> ColumnElement[bool]:
        conditions = []
        for column, value in filters.items():
            if column not in sql_table.c:
                raise RelationalStoreError(
                    f"Unknown column {column} on table {sql_table.name}"
                )
            conditions.append(sql_table.c[column] == value)
        return and_(*conditions)


def _is_unique_violation(error: IntegrityError) -> bool:
    """Check whether an IntegrityError is a unique constraint violation."""
    orig = error.orig
    sqlstate = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if sqlstate is not None:
        return sqlstate == UNIQUE_VIOLATION_SQLSTATE
    return "unique" in str(orig).lower()


def _describe(error: Exception) -> str:
    """Short, driver-level message for an exception."""
    orig = getattr(error, "orig", None)
    message = str(orig if orig is not None else error).strip()
    return message.splitlines()[0] if message else type(error).__name__
