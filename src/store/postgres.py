"""
PostgreSQL pet store backed by a psycopg async connection pool.

SQL is composed with `psycopg.sql` so column names are always quoted
identifiers and every filter value is bound as a parameter. Rows come back as
dicts (the pool is created with `dict_row`) and are validated into `Pet`.

Intent:
- Each public read uses its own pooled connection, so the list query can run
  its count/count/fetch concurrently.
- Database errors propagate unchanged to the caller.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from psycopg import sql
from psycopg_pool import AsyncConnectionPool

from src.domain.models import Pet, PetCreate, PetUpdate
from src.query.filters import FILTERABLE_FIELDS, TEXT_FIELDS, FilterQuery, value_matches_field
from src.query.sorting import SORTABLE_FIELDS, SortSpec
from src.utils.logging import get_logger

log = get_logger(__name__)

_TABLE = sql.Identifier("public", "pets")
_ID = sql.Identifier("id")
_COLUMN_NAMES = ("id", "type", "name", "age", "cost", "created_at", "updated_at")
_COLUMNS = sql.SQL(", ").join(sql.Identifier(name) for name in _COLUMN_NAMES)


def build_where(query: Optional[FilterQuery]) -> Tuple[sql.Composable, List[Any]]:
    """
    Render a FilterQuery as a WHERE clause plus its bound parameters.

    Comparisons whose value type cannot apply to the column render as FALSE.
    """
    if not query:
        return sql.SQL(""), []

    clauses: List[sql.Composable] = []
    params: List[Any] = []
    for field, predicate in query.items():
        if field not in FILTERABLE_FIELDS:
            raise ValueError(f"Field '{field}' is not filterable")
        for operator, value in predicate.items():
            if not value_matches_field(field, value):
                clauses.append(sql.SQL("FALSE"))
                continue
            clauses.append(
                sql.SQL("{} {} %s").format(sql.Identifier(field), sql.SQL(operator.sql))
            )
            params.append(value.value)
    return sql.SQL(" WHERE ") + sql.SQL(" AND ").join(clauses), params


def build_order_by(sort: Optional[SortSpec]) -> sql.Composable:
    """
    Render the ORDER BY clause for a page.

    Always ends with `id` so OFFSET/LIMIT pages are disjoint across
    statements. Text columns sort under the "C" collation, i.e. by code point,
    like the in-memory store.
    """
    if sort is None:
        return sql.SQL(" ORDER BY {}").format(_ID)
    if sort.field not in SORTABLE_FIELDS:
        raise ValueError(f"Field '{sort.field}' is not sortable")
    column: sql.Composable = sql.Identifier(sort.field)
    if sort.field in TEXT_FIELDS:
        column = sql.SQL("{} COLLATE \"C\"").format(column)
    direction = sql.SQL("DESC") if sort.descending else sql.SQL("ASC")
    return sql.SQL(" ORDER BY {} {}, {}").format(column, direction, _ID)


class PostgresPetStore:
    """
    PetStore over the `public.pets` table.

    Parameters
    ----------
    pool : AsyncConnectionPool
        An opened pool whose connections use `dict_row`.
    """

    def __init__(self, pool: AsyncConnectionPool) -> None:
        self._pool = pool

    async def _fetch_all(self, query: sql.Composable, params: List[Any]) -> List[Dict[str, Any]]:
        async with self._pool.connection() as conn:
            async with conn.cursor() as cur:
                await cur.execute(query, params)
                return await cur.fetchall()

    async def _fetch_one(self, query: sql.Composable, params: List[Any]) -> Optional[Dict[str, Any]]:
        async with self._pool.connection() as conn:
            async with conn.cursor() as cur:
                await cur.execute(query, params)
                return await cur.fetchone()

    async def count(self, query: Optional[FilterQuery] = None) -> int:
        where, params = build_where(query)
        stmt = sql.SQL("SELECT count(*) AS n FROM {}{}").format(_TABLE, where)
        row = await self._fetch_one(stmt, params)
        return int(row["n"]) if row else 0

    async def find(
        self,
        query: FilterQuery,
        offset: int,
        limit: int,
        sort: Optional[SortSpec] = None,
    ) -> List[Dict[str, Any]]:
        where, params = build_where(query)
        stmt = sql.SQL("SELECT {} FROM {}{}{} OFFSET %s LIMIT %s").format(
            _COLUMNS, _TABLE, where, build_order_by(sort)
        )
        rows = await self._fetch_all(stmt, [*params, offset, limit])
        log.debug("Fetched pets", extra={"rows": len(rows), "offset": offset, "limit": limit})
        return rows

    def to_dto(self, entity: Dict[str, Any]) -> Pet:
        return Pet.model_validate(entity)

    async def get(self, pet_id: str) -> Optional[Pet]:
        stmt = sql.SQL("SELECT {} FROM {} WHERE id = %s").format(_COLUMNS, _TABLE)
        row = await self._fetch_one(stmt, [pet_id])
        return self.to_dto(row) if row else None

    async def create(self, payload: PetCreate) -> Pet:
        values = payload.model_dump(mode="json")
        names = list(values)
        stmt = sql.SQL("INSERT INTO {} ({}) VALUES ({}) RETURNING {}").format(
            _TABLE,
            sql.SQL(", ").join(sql.Identifier(name) for name in names),
            sql.SQL(", ").join(sql.Placeholder() for _ in names),
            _COLUMNS,
        )
        row = await self._fetch_one(stmt, [values[name] for name in names])
        return self.to_dto(row)

    async def update(self, pet_id: str, payload: PetUpdate) -> Optional[Pet]:
        changes = payload.model_dump(mode="json", exclude_unset=True, exclude_none=True)
        assignments = [
            sql.SQL("{} = %s").format(sql.Identifier(name)) for name in changes
        ]
        # updated_at never decreases.
        assignments.append(sql.SQL("updated_at = GREATEST(now(), updated_at)"))
        stmt = sql.SQL("UPDATE {} SET {} WHERE id = %s RETURNING {}").format(
            _TABLE, sql.SQL(", ").join(assignments), _COLUMNS
        )
        row = await self._fetch_one(stmt, [*changes.values(), pet_id])
        return self.to_dto(row) if row else None

    async def delete(self, pet_id: str) -> Optional[Pet]:
        stmt = sql.SQL("DELETE FROM {} WHERE id = %s RETURNING {}").format(_TABLE, _COLUMNS)
        row = await self._fetch_one(stmt, [pet_id])
        return self.to_dto(row) if row else None


__all__ = ["PostgresPetStore", "build_order_by", "build_where"]
