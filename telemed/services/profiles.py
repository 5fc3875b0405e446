"""Shared create / update / get flow for profile tables."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any

from telemed.core.constants import HIDDEN_FIELDS
from telemed.core.errors import RecordNotFound
from telemed.db.store import RecordStore, parse_record_id
from telemed.models.validation import ValidationResult

logger = logging.getLogger(__name__)

Validator = Callable[..., ValidationResult]


class ProfileNotValid(Exception):
    """Raised by create / update when the candidate fails validation."""

    def __init__(self, result: ValidationResult) -> None:
        super().__init__("Profile is not validated")
        self.errors = result.errors or {}


def public_view(record: Mapping[str, Any]) -> dict[str, Any]:
    """Copy of ``record`` without hidden fields such as the password."""
    return {k: v for k, v in record.items() if k not in HIDDEN_FIELDS}


def create_profile(
    data: Mapping[str, Any], store: RecordStore, validate: Validator
) -> dict[str, Any]:
    """Validate with uniqueness and insert.  Returns the stored record."""
    result = validate(data, True, store)
    if not result.success:
        logger.warning(
            "profile_not_validated",
            extra={"table": store.name, "fields": sorted(result.errors or {})},
        )
        raise ProfileNotValid(result)

    payload = {k: v for k, v in data.items() if k != "id"}
    created = store.insert(payload)
    logger.info(
        "profile_created",
        extra={"table": store.name, "record_id": created.get("id")},
    )
    return public_view(created)


def update_profile(
    record_id: Any,
    data: Mapping[str, Any],
    store: RecordStore,
    validate: Validator,
) -> dict[str, Any]:
    """Validate without uniqueness and update the record in place."""
    rid = parse_record_id(record_id)
    result = validate(data, False, store)
    if not result.success:
        logger.warning(
            "profile_not_validated",
            extra={"table": store.name, "fields": sorted(result.errors or {})},
        )
        raise ProfileNotValid(result)

    updated = store.update(rid, {k: v for k, v in data.items() if k != "id"})
    if updated is None:
        logger.warning(
            "profile_update_missing",
            extra={"table": store.name, "record_id": rid},
        )
        raise RecordNotFound(store.name, rid)

    logger.info("profile_updated", extra={"table": store.name, "record_id": rid})
    return public_view(updated)


def get_profile(record_id: Any, store: RecordStore) -> dict[str, Any]:
    rid = parse_record_id(record_id)
    record = store.get(rid)
    if record is None:
        raise RecordNotFound(store.name, rid)
    return public_view(record)
