"""Filter-to-query translation and execution for doctor search.

``translate`` turns a ``FilterConfig`` into a ``Predicate`` the record
store can evaluate; ``execute`` runs it and applies the parts the store
does not handle: full-name matching, rating order and paging.
"""

from __future__ import annotations

import logging
from typing import Any

from telemed.core.config import settings
from telemed.db.store import RecordStore
from telemed.models.filters import FilterConfig
from telemed.models.predicates import (
    AllOf,
    AnyOf,
    FieldContainsAll,
    FieldEquals,
    FieldIn,
    FieldRange,
    Predicate,
)
from telemed.services import name_matcher
from telemed.services.buckets import bucket_ranges, rating_ranges

logger = logging.getLogger(__name__)


def _values(items: list[Any]) -> list[Any]:
    return [getattr(item, "value", item) for item in items]


def _range_groups(config: FilterConfig) -> list[list[FieldRange]]:
    """Range sub-predicates per category, in a fixed category order."""
    groups: list[list[FieldRange]] = []
    if config.experience:
        groups.append(bucket_ranges("experience", config.experience))
    if config.service_experience:
        groups.append(bucket_ranges("serviceExperience", config.service_experience))
    if config.rating:
        groups.append(rating_ranges("rating", config.rating))
    return groups


def translate(config: FilterConfig, strict_range_groups: bool | None = None) -> AllOf:
    """Build the store predicate for ``config``.

    Categories are ANDed.  Experience, service-experience and rating
    ranges are ORed together into one shared group, unless
    ``strict_range_groups`` (default: ``settings.STRICT_RANGE_GROUPS``)
    is set, in which case each category gets its own OR group.

    ``fullName`` and ``isDownward`` are not part of the predicate; see
    ``execute``.
    """
    if strict_range_groups is None:
        strict_range_groups = settings.STRICT_RANGE_GROUPS

    children: list[Predicate] = []

    if config.speciality:
        children.append(
            FieldContainsAll(field="speciality", values=_values(config.speciality))
        )

    groups = _range_groups(config)
    if strict_range_groups:
        children.extend(AnyOf(children=list(group)) for group in groups)
    elif groups:
        children.append(AnyOf(children=[r for group in groups for r in group]))

    if config.sex is not None:
        children.append(FieldEquals(field="sex", value=config.sex))
    if config.city:
        children.append(FieldIn(field="city", values=list(config.city)))
    if config.work_plan:
        children.append(FieldIn(field="workPlan", values=_values(config.work_plan)))
    if config.qualification:
        children.append(
            FieldIn(field="qualification", values=_values(config.qualification))
        )
    if config.is_child is not None:
        children.append(FieldEquals(field="isChild", value=config.is_child))
    if config.is_adult is not None:
        children.append(FieldEquals(field="isAdult", value=config.is_adult))

    return AllOf(children=children)


def _rating_key(record: dict[str, Any]) -> float:
    rating = record.get("rating")
    if isinstance(rating, (int, float)) and not isinstance(rating, bool):
        return float(rating)
    return 0.0


def execute(
    config: FilterConfig,
    store: RecordStore,
    amount: int | None = None,
    from_: int = 0,
    predicate: Predicate | None = None,
) -> list[dict[str, Any]]:
    """Run a search and return the ordered page of matching records.

    Steps: store query -> full-name match -> sort by rating (only when
    ``isDownward`` is set) -> ``[from_, from_ + amount)`` page.  Store
    failures propagate as ``StoreError``.
    """
    if amount is None:
        amount = settings.SEARCH_DEFAULT_AMOUNT
    amount = max(amount, 0)
    from_ = max(from_, 0)

    if predicate is None:
        predicate = translate(config)

    records = store.find_by_predicate(predicate)

    if config.full_name is not None:
        query = config.full_name
        records = [
            r for r in records
            if name_matcher.matches(name_matcher.record_full_name(r), query)
        ]

    if config.is_downward is not None:
        records = sorted(records, key=_rating_key, reverse=config.is_downward)

    page = records[from_:from_ + amount]

    logger.info(
        "doctor_search_completed",
        extra={
            "table": store.name,
            "matched": len(records),
            "returned": len(page),
            "from": from_,
            "amount": amount,
        },
    )
    return page
