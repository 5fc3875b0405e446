"""Order-independent, multi-token full-name matching."""

from collections.abc import Mapping
from typing import Any


def tokenize(query: str) -> set[str]:
    """Split on any Unicode whitespace into a set of non-empty tokens."""
    return set(query.split())


def matches(full_name: str, query: str) -> bool:
    """True iff every query token is a substring of ``full_name``.

    Case-sensitive.  Token order does not matter, so "Ivanov Ivan" and
    "Ivan Ivanov" match the same name.
    """
    return all(token in full_name for token in tokenize(query))


def record_full_name(record: Mapping[str, Any]) -> str:
    """The record's ``fullName``, or its name parts joined when absent."""
    full_name = record.get("fullName")
    if isinstance(full_name, str) and full_name:
        return full_name
    parts = (record.get(k) for k in ("name", "surname", "patronymic"))
    return " ".join(p for p in parts if isinstance(p, str) and p)
