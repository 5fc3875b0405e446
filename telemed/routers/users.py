"""User profile endpoints."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Body, Query

from telemed.core.errors import StoreError
from telemed.models.validation import ValidationResult
from telemed.routers.errors import SERVICE_ERRORS, to_http_exception
from telemed.services.users import create_user, get_user, update_user
from telemed.services.validation import validate_user

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/validate", response_model=ValidationResult, response_model_exclude_none=True)
async def users_validate(
    candidate: Any = Body(default=None),
    unique: bool = Query(default=True, description="Check email uniqueness"),
) -> ValidationResult:
    """Validate a user candidate and return every invalid field."""
    try:
        return validate_user(candidate, unique)
    except StoreError as exc:
        raise to_http_exception(exc) from exc


@router.post("", status_code=201)
async def users_create(data: dict[str, Any] = Body(...)) -> dict[str, Any]:
    """Create a user after full validation."""
    try:
        return create_user(data)
    except SERVICE_ERRORS as exc:
        raise to_http_exception(exc) from exc


@router.put("/{user_id}")
async def users_update(user_id: str, data: dict[str, Any] = Body(...)) -> dict[str, Any]:
    """Update a user; uniqueness is not re-checked."""
    try:
        return update_user(user_id, data)
    except SERVICE_ERRORS as exc:
        raise to_http_exception(exc) from exc


@router.get("/{user_id}")
async def users_get(user_id: str) -> dict[str, Any]:
    """Return one user without the password."""
    try:
        return get_user(user_id)
    except SERVICE_ERRORS as exc:
        raise to_http_exception(exc) from exc
