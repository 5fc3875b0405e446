"""Doctor search filter normalization.

Turns a raw, untyped client filter into a ``FilterConfig``.  Never
raises: a malformed entry degrades to "no constraint" for that key only.
Keys are evaluated independently of each other.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any

from telemed.core.constants import RATING_MAX, RATING_MIN
from telemed.models.enums import ExperienceBucket, Qualification, Speciality, WorkPlan
from telemed.models.filters import FilterConfig
from telemed.services.buckets import check_all

logger = logging.getLogger(__name__)

# raw key -> enum every element must belong to
_ENUM_LIST_KEYS: dict[str, type[Enum]] = {
    "speciality": Speciality,
    "experience": ExperienceBucket,
    "serviceExperience": ExperienceBucket,
    "workPlan": WorkPlan,
    "qualification": Qualification,
}

_BOOLEAN_KEYS: tuple[str, ...] = ("sex", "isChild", "isAdult", "isDownward")


def _enum_list(raw: Any, enum_cls: type[Enum]) -> list[Any] | None:
    """Whole list if non-empty and every element is a member, else None."""
    if isinstance(raw, list) and raw and check_all(raw, enum_cls):
        return list(raw)
    return None


def _ratings(raw: Any) -> list[float] | None:
    """Keep only numeric ratings inside the scale; None if nothing is left."""
    if not isinstance(raw, list):
        return None
    kept = [
        r for r in raw
        if isinstance(r, (int, float))
        and not isinstance(r, bool)
        and RATING_MIN <= r <= RATING_MAX
    ]
    return kept or None


def _cities(raw: Any) -> list[str] | None:
    if isinstance(raw, list) and raw and all(isinstance(c, str) for c in raw):
        return list(raw)
    return None


def normalize_filter(raw: Any) -> FilterConfig:
    """Sanitize a raw filter mapping into a ``FilterConfig``.

    Per key:

    * enum lists (``speciality``, ``experience``, ``serviceExperience``,
      ``workPlan``, ``qualification``): kept only when non-empty and every
      element is known; one unknown element drops the key.
    * ``rating``: out-of-range or non-numeric elements are dropped one by
      one; the key is dropped if none survive.
    * ``city``: non-empty list of strings, else dropped.
    * ``sex`` / ``isChild`` / ``isAdult`` / ``isDownward``: strict booleans.
    * ``fullName``: any non-empty string, passed through unmodified.

    Unknown keys are ignored.
    """
    if not isinstance(raw, dict):
        return FilterConfig()

    config: dict[str, Any] = {}

    for key, enum_cls in _ENUM_LIST_KEYS.items():
        if key in raw:
            values = _enum_list(raw[key], enum_cls)
            if values is not None:
                config[key] = values

    if "rating" in raw:
        ratings = _ratings(raw["rating"])
        if ratings is not None:
            config["rating"] = ratings

    if "city" in raw:
        cities = _cities(raw["city"])
        if cities is not None:
            config["city"] = cities

    for key in _BOOLEAN_KEYS:
        if isinstance(raw.get(key), bool):
            config[key] = raw[key]

    full_name = raw.get("fullName")
    if isinstance(full_name, str) and full_name:
        config["fullName"] = full_name

    dropped = sorted(str(k) for k in set(raw) - set(config))
    if dropped:
        logger.debug("filter_keys_dropped", extra={"keys": dropped})

    return FilterConfig.model_validate(config)
