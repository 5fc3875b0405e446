"""User profile service."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from telemed.db.store import RecordStore, get_user_store
from telemed.services.profiles import create_profile, get_profile, update_profile
from telemed.services.validation import validate_user


def create_user(data: Mapping[str, Any], store: RecordStore | None = None) -> dict[str, Any]:
    return create_profile(data, store or get_user_store(), validate_user)


def update_user(
    user_id: Any, data: Mapping[str, Any], store: RecordStore | None = None
) -> dict[str, Any]:
    return update_profile(user_id, data, store or get_user_store(), validate_user)


def get_user(user_id: Any, store: RecordStore | None = None) -> dict[str, Any]:
    return get_profile(user_id, store or get_user_store())
