"""Doctor profile and search endpoints."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Body, Query

from telemed.core.config import settings
from telemed.core.errors import StoreError
from telemed.models.doctor import BecomeDoctorRequest
from telemed.models.filters import DoctorSearchResponse, FilterConfig
from telemed.models.validation import ValidationResult
from telemed.routers.errors import SERVICE_ERRORS, to_http_exception
from telemed.services.doctors import (
    create_doctor,
    get_doctor,
    save_become_doctor_request,
    search_doctors,
    update_doctor,
)
from telemed.services.filters import normalize_filter
from telemed.services.validation import validate_doctor

logger = logging.getLogger(__name__)

router = APIRouter()


# ---------------------------------------------------------------------------
# Search
# ---------------------------------------------------------------------------

@router.post("/search", response_model=DoctorSearchResponse)
async def doctors_search(
    raw_filter: Any = Body(default=None),
    amount: int = Query(
        default=settings.SEARCH_DEFAULT_AMOUNT,
        ge=0,
        le=settings.SEARCH_MAX_AMOUNT,
        description="Page size",
    ),
    offset: int = Query(default=0, ge=0, alias="from", description="Page offset"),
) -> DoctorSearchResponse:
    """Return doctors matching the filter body.

    Unknown or malformed filter keys are ignored rather than rejected.
    """
    try:
        doctors = search_doctors(raw_filter, amount, offset)
    except StoreError as exc:
        raise to_http_exception(exc) from exc
    return DoctorSearchResponse(doctors=doctors, amount=amount, offset=offset)


@router.post("/filter/normalize")
async def doctors_filter_normalize(raw_filter: Any = Body(default=None)) -> dict[str, Any]:
    """Return the sanitized form of a raw filter (what search will apply)."""
    config: FilterConfig = normalize_filter(raw_filter)
    return config.to_raw()


# ---------------------------------------------------------------------------
# Profiles
# ---------------------------------------------------------------------------

@router.post("/validate", response_model=ValidationResult, response_model_exclude_none=True)
async def doctors_validate(
    candidate: Any = Body(default=None),
    unique: bool = Query(default=True, description="Check email uniqueness"),
) -> ValidationResult:
    """Validate a doctor candidate and return every invalid field."""
    try:
        return validate_doctor(candidate, unique)
    except StoreError as exc:
        raise to_http_exception(exc) from exc


@router.post("/become", status_code=202)
async def doctors_become(request: BecomeDoctorRequest) -> dict[str, bool]:
    """Submit an application to become a doctor."""
    try:
        saved = save_become_doctor_request(request)
    except SERVICE_ERRORS as exc:
        raise to_http_exception(exc) from exc
    return {"success": True, "saved": saved}


@router.post("", status_code=201)
async def doctors_create(data: dict[str, Any] = Body(...)) -> dict[str, Any]:
    """Create a doctor after full validation."""
    try:
        return create_doctor(data)
    except SERVICE_ERRORS as exc:
        raise to_http_exception(exc) from exc


@router.put("/{doctor_id}")
async def doctors_update(doctor_id: str, data: dict[str, Any] = Body(...)) -> dict[str, Any]:
    """Update a doctor; uniqueness is not re-checked."""
    try:
        return update_doctor(doctor_id, data)
    except SERVICE_ERRORS as exc:
        raise to_http_exception(exc) from exc


@router.get("/{doctor_id}")
async def doctors_get(doctor_id: str) -> dict[str, Any]:
    """Return one doctor without the password."""
    try:
        return get_doctor(doctor_id)
    except SERVICE_ERRORS as exc:
        raise to_http_exception(exc) from exc
