"""Record store abstraction over profile tables.

``RecordStore`` is the only surface the validation and search engines
touch.  ``SupabaseRecordStore`` pushes predicates down to PostgREST;
``InMemoryRecordStore`` evaluates them in Python and backs local runs and
tests.  Store failures surface as ``StoreError``, never as empty results.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any, Protocol
from uuid import UUID, uuid4

import httpx
from postgrest.exceptions import APIError
from pydantic_core import to_jsonable_python

from telemed.core.config import settings
from telemed.core.errors import InvalidRecordId, StoreError
from telemed.db.supabase import get_supabase
from telemed.models.predicates import (
    AllOf,
    AnyOf,
    FieldContainsAll,
    FieldEquals,
    FieldIn,
    FieldRange,
    Predicate,
)

logger = logging.getLogger(__name__)


def parse_record_id(record_id: Any) -> str:
    """Return the canonical string form of a UUID record id.

    Raises ``InvalidRecordId`` for anything that is not a UUID.
    """
    if isinstance(record_id, UUID):
        return str(record_id)
    try:
        return str(UUID(str(record_id)))
    except ValueError as exc:
        raise InvalidRecordId(record_id) from exc


class RecordStore(Protocol):
    """Read/write access to one table of attribute mappings."""

    name: str

    def find_by_predicate(self, predicate: Predicate) -> list[dict[str, Any]]: ...

    def exists_with_value(
        self, field: str, value: Any, exclude_id: str | None = None
    ) -> bool: ...

    def find_taken(
        self, values: Mapping[str, Any], exclude_id: str | None = None
    ) -> set[str]: ...

    def get(self, record_id: str) -> dict[str, Any] | None: ...

    def insert(self, data: Mapping[str, Any]) -> dict[str, Any]: ...

    def update(self, record_id: str, data: Mapping[str, Any]) -> dict[str, Any] | None: ...

    def count(self, field: str, value: Any) -> int: ...


# ---------------------------------------------------------------------------
# Supabase
# ---------------------------------------------------------------------------

class SupabaseRecordStore:
    """``RecordStore`` backed by a Supabase (PostgREST) table."""

    def __init__(self, table: str, client: Any | None = None) -> None:
        self.name = table
        self._client = client

    @property
    def client(self) -> Any:
        if self._client is None:
            self._client = get_supabase()
        return self._client

    def _query(self) -> Any:
        return self.client.table(self.name).select("*")

    def _execute(self, query: Any, operation: str) -> list[dict[str, Any]]:
        try:
            result = query.execute()
        except (APIError, httpx.HTTPError) as exc:
            logger.error(
                "store_query_failed",
                extra={
                    "table": self.name,
                    "operation": operation,
                    "error_message": str(exc),
                },
            )
            raise StoreError(f"{operation} on {self.name} failed: {exc}") from exc
        return result.data or []

    def _apply(self, query: Any, predicate: Predicate) -> Any:
        """Chain builder calls for ``predicate`` onto ``query``.

        A top-level conjunction is flattened into chained filters (which
        PostgREST ANDs); each disjunction becomes one ``or_()`` call.
        """
        if isinstance(predicate, AllOf):
            for child in predicate.children:
                query = self._apply(query, child)
            return query
        if isinstance(predicate, AnyOf):
            return query.or_(predicate.to_postgrest_group())
        if isinstance(predicate, FieldEquals):
            return query.eq(predicate.field, predicate.value)
        if isinstance(predicate, FieldIn):
            return query.in_(predicate.field, predicate.values)
        if isinstance(predicate, FieldContainsAll):
            return query.contains(predicate.field, predicate.values)
        if isinstance(predicate, FieldRange):
            query = query.gte(predicate.field, predicate.minimum)
            if predicate.maximum is not None:
                query = query.lt(predicate.field, predicate.maximum)
            return query
        raise TypeError(f"Unsupported predicate: {predicate!r}")

    def find_by_predicate(self, predicate: Predicate) -> list[dict[str, Any]]:
        query = self._apply(self._query(), predicate)
        return self._execute(query, "find_by_predicate")

    def exists_with_value(
        self, field: str, value: Any, exclude_id: str | None = None
    ) -> bool:
        return field in self.find_taken({field: value}, exclude_id)

    def find_taken(
        self, values: Mapping[str, Any], exclude_id: str | None = None
    ) -> set[str]:
        """Return the subset of ``values`` keys already used by another record.

        Issues a single ``or`` query for all fields.
        """
        if not values:
            return set()
        group = AnyOf(
            children=[FieldEquals(field=f, value=v) for f, v in values.items()]
        )
        columns = ",".join(["id", *values.keys()])
        query = self.client.table(self.name).select(columns).or_(
            group.to_postgrest_group()
        )
        if exclude_id is not None:
            query = query.neq("id", exclude_id)
        rows = self._execute(query, "find_taken")
        return {f for f, v in values.items() if any(row.get(f) == v for row in rows)}

    def get(self, record_id: str) -> dict[str, Any] | None:
        query = self._query().eq("id", record_id).limit(1)
        rows = self._execute(query, "get")
        return rows[0] if rows else None

    def insert(self, data: Mapping[str, Any]) -> dict[str, Any]:
        query = self.client.table(self.name).insert(to_jsonable_python(dict(data)))
        rows = self._execute(query, "insert")
        if not rows:
            raise StoreError(f"insert on {self.name} returned no row")
        return rows[0]

    def update(self, record_id: str, data: Mapping[str, Any]) -> dict[str, Any] | None:
        query = self.client.table(self.name).update(to_jsonable_python(dict(data))).eq("id", record_id)
        rows = self._execute(query, "update")
        return rows[0] if rows else None

    def count(self, field: str, value: Any) -> int:
        query = self.client.table(self.name).select("id").eq(field, value)
        return len(self._execute(query, "count"))


# ---------------------------------------------------------------------------
# In-memory
# ---------------------------------------------------------------------------

class InMemoryRecordStore:
    """``RecordStore`` holding records in a list, in insertion order."""

    def __init__(self, name: str, records: Iterable[Mapping[str, Any]] = ()) -> None:
        self.name = name
        self._records: list[dict[str, Any]] = []
        for record in records:
            self.insert(record)

    def find_by_predicate(self, predicate: Predicate) -> list[dict[str, Any]]:
        return [dict(r) for r in self._records if predicate.matches(r)]

    def exists_with_value(
        self, field: str, value: Any, exclude_id: str | None = None
    ) -> bool:
        return field in self.find_taken({field: value}, exclude_id)

    def find_taken(
        self, values: Mapping[str, Any], exclude_id: str | None = None
    ) -> set[str]:
        taken: set[str] = set()
        for record in self._records:
            if exclude_id is not None and record.get("id") == exclude_id:
                continue
            taken.update(f for f, v in values.items() if f in record and record[f] == v)
        return taken

    def get(self, record_id: str) -> dict[str, Any] | None:
        for record in self._records:
            if record.get("id") == record_id:
                return dict(record)
        return None

    def insert(self, data: Mapping[str, Any]) -> dict[str, Any]:
        record = dict(data)
        record.setdefault("id", str(uuid4()))
        self._records.append(record)
        return dict(record)

    def update(self, record_id: str, data: Mapping[str, Any]) -> dict[str, Any] | None:
        for record in self._records:
            if record.get("id") == record_id:
                record.update({k: v for k, v in data.items() if k != "id"})
                return dict(record)
        return None

    def count(self, field: str, value: Any) -> int:
        return sum(1 for r in self._records if r.get(field) == value)


def get_user_store() -> RecordStore:
    return SupabaseRecordStore(settings.USERS_TABLE)


def get_doctor_store() -> RecordStore:
    return SupabaseRecordStore(settings.DOCTORS_TABLE)


def get_become_doctor_store() -> RecordStore:
    return SupabaseRecordStore(settings.BECOME_DOCTOR_TABLE)
