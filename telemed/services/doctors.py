"""Doctor profile service.

CRUD over the doctors table, doctor search (normalize -> translate ->
execute) and become-doctor applications.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from telemed.core.config import settings
from telemed.core.errors import RequestLimitError
from telemed.db.store import RecordStore, get_become_doctor_store, get_doctor_store
from telemed.models.doctor import BecomeDoctorRequest
from telemed.services import query
from telemed.services.filters import normalize_filter
from telemed.services.profiles import (
    create_profile,
    get_profile,
    public_view,
    update_profile,
)
from telemed.services.validation import validate_doctor

logger = logging.getLogger(__name__)


def create_doctor(data: Mapping[str, Any], store: RecordStore | None = None) -> dict[str, Any]:
    return create_profile(data, store or get_doctor_store(), validate_doctor)


def update_doctor(
    doctor_id: Any, data: Mapping[str, Any], store: RecordStore | None = None
) -> dict[str, Any]:
    return update_profile(doctor_id, data, store or get_doctor_store(), validate_doctor)


def get_doctor(doctor_id: Any, store: RecordStore | None = None) -> dict[str, Any]:
    return get_profile(doctor_id, store or get_doctor_store())


def search_doctors(
    raw_filter: Any,
    amount: int | None = None,
    from_: int = 0,
    store: RecordStore | None = None,
) -> list[dict[str, Any]]:
    """Find doctors matching a raw client filter.

    Malformed filter entries are ignored.  Returns at most ``amount``
    records (default ``settings.SEARCH_DEFAULT_AMOUNT``) starting at
    ``from_``, without passwords.
    """
    config = normalize_filter(raw_filter)
    records = query.execute(config, store or get_doctor_store(), amount, from_)
    return [public_view(r) for r in records]


def save_become_doctor_request(
    request: BecomeDoctorRequest, store: RecordStore | None = None
) -> bool:
    """Store an application to become a doctor.

    Applications without an email are ignored.  Returns True when the
    application was stored.  Raises ``RequestLimitError`` once an email
    has ``settings.BECOME_DOCTOR_REQUEST_LIMIT`` applications.
    """
    if not request.email:
        logger.info("become_doctor_request_ignored", extra={"reason": "no_email"})
        return False

    store = store or get_become_doctor_store()
    limit = settings.BECOME_DOCTOR_REQUEST_LIMIT
    if store.count("email", request.email) >= limit:
        logger.info(
            "become_doctor_request_limit",
            extra={"email": request.email, "limit": limit},
        )
        raise RequestLimitError(request.email, limit)

    store.insert(request.model_dump())
    logger.info("become_doctor_request_saved", extra={"email": request.email})
    return True
