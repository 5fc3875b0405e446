"""Range buckets and enum membership checks used by the search filters."""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum
from typing import Any

from telemed.core.constants import EXPERIENCE_BUCKETS, RATING_STEP
from telemed.models.enums import ExperienceBucket
from telemed.models.predicates import FieldRange


def resolve_bucket(bucket: ExperienceBucket | str) -> tuple[int, int | None]:
    """Return the half-open ``(min_days, max_days)`` interval of a bucket.

    ``max_days`` is ``None`` for the open-ended top bucket.  Raises
    ``ValueError`` for an unknown bucket key.
    """
    return EXPERIENCE_BUCKETS[ExperienceBucket(bucket)]


def bucket_ranges(field: str, buckets: Iterable[ExperienceBucket | str]) -> list[FieldRange]:
    """One range sub-predicate on ``field`` per requested bucket."""
    ranges: list[FieldRange] = []
    for bucket in buckets:
        minimum, maximum = resolve_bucket(bucket)
        ranges.append(FieldRange(field=field, minimum=minimum, maximum=maximum))
    return ranges


def rating_ranges(field: str, ratings: Iterable[float]) -> list[FieldRange]:
    """One ``[r, r + 1)`` sub-predicate on ``field`` per requested rating."""
    return [
        FieldRange(field=field, minimum=r, maximum=r + RATING_STEP)
        for r in ratings
    ]


def is_member(value: Any, enum_cls: type[Enum]) -> bool:
    """True if ``value`` is one of the values of ``enum_cls``."""
    if not isinstance(value, (str, int)) or isinstance(value, bool):
        return False
    try:
        enum_cls(value)
    except ValueError:
        return False
    return True


def check_all(values: Any, enum_cls: type[Enum]) -> bool:
    """True iff ``values`` is a list and every element belongs to ``enum_cls``.

    All-or-nothing: one unknown element fails the whole list.  An empty
    list passes; callers decide whether empty is meaningful.
    """
    if not isinstance(values, list):
        return False
    return all(is_member(v, enum_cls) for v in values)
