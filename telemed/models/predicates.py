"""Predicate expression tree evaluated by a record store.

Leaves constrain a single record field; ``AllOf`` / ``AnyOf`` combine
children with AND / OR.  ``matches`` evaluates a node against a record in
memory; ``to_postgrest`` renders it in PostgREST logical-filter syntax so
the Supabase store can push it down inside ``or=(...)``.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Field

Record = Mapping[str, Any]


def _literal(value: Any) -> str:
    """Render a scalar as a PostgREST filter literal."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return repr(value)
    # Double-quote strings so commas, dots and parentheses survive.
    return json.dumps(str(value), ensure_ascii=False)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class FieldEquals(BaseModel):
    """``record[field] == value``."""
    kind: Literal["eq"] = "eq"
    field: str
    value: Any

    def matches(self, record: Record) -> bool:
        return self.field in record and record[self.field] == self.value

    def to_postgrest(self) -> str:
        return f"{self.field}.eq.{_literal(self.value)}"


class FieldIn(BaseModel):
    """``record[field]`` is one of ``values``."""
    kind: Literal["in"] = "in"
    field: str
    values: list[Any]

    def matches(self, record: Record) -> bool:
        return record.get(self.field) in self.values

    def to_postgrest(self) -> str:
        joined = ",".join(_literal(v) for v in self.values)
        return f"{self.field}.in.({joined})"


class FieldContainsAll(BaseModel):
    """Array field ``record[field]`` contains every one of ``values``."""
    kind: Literal["contains"] = "contains"
    field: str
    values: list[Any]

    def matches(self, record: Record) -> bool:
        present = record.get(self.field)
        if not isinstance(present, (list, tuple, set, frozenset)):
            return False
        return all(v in present for v in self.values)

    def to_postgrest(self) -> str:
        joined = ",".join(_literal(v) for v in self.values)
        return f"{self.field}.cs.{{{joined}}}"


class FieldRange(BaseModel):
    """``minimum <= record[field] < maximum``; no upper bound when ``maximum`` is None."""
    kind: Literal["range"] = "range"
    field: str
    minimum: int | float
    maximum: int | float | None = None

    def matches(self, record: Record) -> bool:
        value = record.get(self.field)
        if not _is_number(value):
            return False
        if value < self.minimum:
            return False
        return self.maximum is None or value < self.maximum

    def to_postgrest(self) -> str:
        lower = f"{self.field}.gte.{_literal(self.minimum)}"
        if self.maximum is None:
            return lower
        return f"and({lower},{self.field}.lt.{_literal(self.maximum)})"


class AllOf(BaseModel):
    """Conjunction.  An empty conjunction matches every record."""
    kind: Literal["and"] = "and"
    children: list[Predicate] = []

    def matches(self, record: Record) -> bool:
        return all(child.matches(record) for child in self.children)

    def to_postgrest(self) -> str:
        return "and(" + ",".join(c.to_postgrest() for c in self.children) + ")"


class AnyOf(BaseModel):
    """Disjunction.  An empty disjunction matches nothing."""
    kind: Literal["or"] = "or"
    children: list[Predicate] = []

    def matches(self, record: Record) -> bool:
        return any(child.matches(record) for child in self.children)

    def to_postgrest(self) -> str:
        return "or(" + ",".join(c.to_postgrest() for c in self.children) + ")"

    def to_postgrest_group(self) -> str:
        """Children joined for the top-level ``or_()`` builder call."""
        return ",".join(c.to_postgrest() for c in self.children)


Predicate = Annotated[
    Union[FieldEquals, FieldIn, FieldContainsAll, FieldRange, AllOf, AnyOf],
    Field(discriminator="kind"),
]

AllOf.model_rebuild()
AnyOf.model_rebuild()
