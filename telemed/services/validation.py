"""Profile validation engine.

Validates raw user / doctor candidates against declarative field-rule
tables.  Every field is checked independently and the first failing
check per field (required -> type -> format/range -> uniqueness) is
recorded, so a single call reports every invalid field at once.

Uniqueness is the only check that touches the record store: all unique
fields that passed their local checks are looked up in one batched
query.  Store failures propagate as ``StoreError`` and are never
reported as validation errors.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from datetime import date, datetime
from enum import Enum
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, model_validator

from telemed.core.constants import (
    EMAIL_PATTERN,
    PASSWORD_MIN_LENGTH,
    PHONE_DIVISOR,
    PHONE_LEADING_DIGIT,
    PHONE_NOT_SET,
    RATING_MAX,
    RATING_MIN,
)
from telemed.db.store import RecordStore, get_doctor_store, get_user_store
from telemed.models.enums import (
    Qualification,
    Speciality,
    ValidationErrorType,
    WorkPlan,
)
from telemed.models.validation import ValidationErrorMap, ValidationResult
from telemed.services.buckets import check_all, is_member

logger = logging.getLogger(__name__)

ErrorType = ValidationErrorType


# ---------------------------------------------------------------------------
# Field rules
# ---------------------------------------------------------------------------

class FieldKind(str, Enum):
    """Declared type of a profile field; selects the check routine."""
    string = "string"
    email = "email"
    password = "password"
    phone = "phone"
    boolean = "boolean"
    number = "number"
    date = "date"
    array = "array"
    enum = "enum"
    enum_array = "enum_array"
    id_array = "id_array"


class FieldRule(BaseModel):
    """How one profile field is validated."""
    model_config = ConfigDict(frozen=True)

    name: str
    kind: FieldKind
    required: bool = True
    unique: bool = False
    minimum: float | None = None
    maximum: float | None = None
    choices: type[Enum] | None = None

    @model_validator(mode="after")
    def _enum_kinds_need_choices(self) -> FieldRule:
        if self.kind in (FieldKind.enum, FieldKind.enum_array) and self.choices is None:
            raise ValueError(f"{self.name}: {self.kind.value} rule needs choices")
        return self


def _is_missing(value: Any) -> bool:
    return value is None


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_date(value: Any) -> bool:
    if isinstance(value, (datetime, date)):
        return True
    if isinstance(value, str) and value:
        try:
            datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return False
        return True
    return False


def _is_uuid(value: Any) -> bool:
    if isinstance(value, UUID):
        return True
    if not isinstance(value, str):
        return False
    try:
        UUID(value)
    except ValueError:
        return False
    return True


def _check_string(rule: FieldRule, value: Any) -> ErrorType | None:
    if not isinstance(value, str):
        return ErrorType.TypeError
    return None


def _check_email(rule: FieldRule, value: Any) -> ErrorType | None:
    if not isinstance(value, str):
        return ErrorType.TypeError
    if not EMAIL_PATTERN.match(value):
        return ErrorType.EmailFormatError
    return None


def _check_password(rule: FieldRule, value: Any) -> ErrorType | None:
    if not isinstance(value, str):
        return ErrorType.TypeError
    if len(value) < PASSWORD_MIN_LENGTH:
        return ErrorType.LengthError
    return None


def _check_phone(rule: FieldRule, value: Any) -> ErrorType | None:
    if not isinstance(value, int) or isinstance(value, bool):
        return ErrorType.TypeError
    if value == PHONE_NOT_SET:
        return None
    if value // PHONE_DIVISOR != PHONE_LEADING_DIGIT:
        return ErrorType.PhoneFormatError
    return None


def _check_boolean(rule: FieldRule, value: Any) -> ErrorType | None:
    if not isinstance(value, bool):
        return ErrorType.TypeError
    return None


def _check_number(rule: FieldRule, value: Any) -> ErrorType | None:
    # Out-of-bound numbers are reported as type errors.
    if not _is_number(value):
        return ErrorType.TypeError
    if rule.minimum is not None and value < rule.minimum:
        return ErrorType.TypeError
    if rule.maximum is not None and value > rule.maximum:
        return ErrorType.TypeError
    return None


def _check_date(rule: FieldRule, value: Any) -> ErrorType | None:
    if not _is_date(value):
        return ErrorType.TypeError
    return None


def _check_array(rule: FieldRule, value: Any) -> ErrorType | None:
    if not isinstance(value, list):
        return ErrorType.TypeError
    return None


def _check_enum(rule: FieldRule, value: Any) -> ErrorType | None:
    if not is_member(value, rule.choices):
        return ErrorType.TypeError
    return None


def _check_enum_array(rule: FieldRule, value: Any) -> ErrorType | None:
    if not check_all(value, rule.choices):
        return ErrorType.TypeError
    return None


def _check_id_array(rule: FieldRule, value: Any) -> ErrorType | None:
    if not isinstance(value, list) or not all(_is_uuid(v) for v in value):
        return ErrorType.TypeError
    return None


_CHECKS: dict[FieldKind, Callable[[FieldRule, Any], ErrorType | None]] = {
    FieldKind.string: _check_string,
    FieldKind.email: _check_email,
    FieldKind.password: _check_password,
    FieldKind.phone: _check_phone,
    FieldKind.boolean: _check_boolean,
    FieldKind.number: _check_number,
    FieldKind.date: _check_date,
    FieldKind.array: _check_array,
    FieldKind.enum: _check_enum,
    FieldKind.enum_array: _check_enum_array,
    FieldKind.id_array: _check_id_array,
}


def check_field(rule: FieldRule, candidate: Mapping[str, Any]) -> ErrorType | None:
    """Run the local (store-free) checks of one field.

    Returns the first failing check's error type, or ``None``.
    """
    value = candidate.get(rule.name)

    if _is_missing(value) or (rule.required and value == ""):
        return ErrorType.RequiredError if rule.required else None

    return _CHECKS[rule.kind](rule, value)


# ---------------------------------------------------------------------------
# Rule tables
# ---------------------------------------------------------------------------

def _rule(name: str, kind: FieldKind, **kwargs: Any) -> FieldRule:
    return FieldRule(name=name, kind=kind, **kwargs)


USER_RULES: tuple[FieldRule, ...] = (
    _rule("name", FieldKind.string),
    _rule("surname", FieldKind.string),
    _rule("patronymic", FieldKind.string, required=False),
    _rule("photoUrl", FieldKind.string, required=False),
    _rule("city", FieldKind.string, required=False),
    _rule("country", FieldKind.string, required=False),
    _rule("phone", FieldKind.phone, required=False),
    _rule("email", FieldKind.email, unique=True),
    _rule("notificationEmail", FieldKind.email, unique=True),
    _rule("password", FieldKind.password),
    _rule("sex", FieldKind.boolean),
    _rule("sendNotificationToEmail", FieldKind.boolean),
    _rule("sendMailingsToEmail", FieldKind.boolean),
    _rule("consultations", FieldKind.array),
    _rule("reviews", FieldKind.array),
    _rule("favourites", FieldKind.array, required=False),
    _rule("activeConsultations", FieldKind.array, required=False),
    _rule("consultationRequests", FieldKind.array, required=False),
    _rule("createdAt", FieldKind.date),
    _rule("lastActiveAt", FieldKind.date),
    _rule("birthday", FieldKind.date, required=False),
    _rule("age", FieldKind.number, required=False, minimum=0),
    _rule("balance", FieldKind.number, required=False, minimum=0),
)

DOCTOR_RULES: tuple[FieldRule, ...] = (
    _rule("education", FieldKind.string),
    _rule("yearEducation", FieldKind.string),
    _rule("blankSeries", FieldKind.string),
    _rule("blankNumber", FieldKind.string),
    _rule("issueDate", FieldKind.string),
    _rule("speciality", FieldKind.enum_array, choices=Speciality),
    _rule("beginDoctorDate", FieldKind.date),
    _rule("experience", FieldKind.number, minimum=0),
    _rule("serviceExperience", FieldKind.number, required=False, minimum=0),
    _rule("rating", FieldKind.number, minimum=RATING_MIN, maximum=RATING_MAX),
    _rule("price", FieldKind.number, required=False, minimum=0),
    _rule("whosFavourite", FieldKind.id_array),
    _rule("clientsReviews", FieldKind.array),
    _rule("clientsConsultations", FieldKind.array),
    _rule("schedule", FieldKind.array),
    _rule("workPlan", FieldKind.enum, required=False, choices=WorkPlan),
    _rule("qualification", FieldKind.enum, required=False, choices=Qualification),
    _rule("isChild", FieldKind.boolean, required=False),
    _rule("isAdult", FieldKind.boolean, required=False),
)


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------

def collect_errors(
    candidate: Mapping[str, Any],
    rules: Sequence[FieldRule],
    stores: Sequence[RecordStore],
    need_unique: bool,
    exclude_id: str | None = None,
) -> ValidationErrorMap:
    """Check every rule against ``candidate`` and return the error map.

    Never short-circuits: a failing field does not stop the others.
    Uniqueness runs only for unique fields whose local checks passed,
    as one batched lookup per store; a value taken in any of ``stores``
    is a unique error.
    """
    errors: ValidationErrorMap = {}
    for rule in rules:
        error = check_field(rule, candidate)
        if error is not None:
            errors[rule.name] = error

    if need_unique and stores:
        pending = {
            rule.name: candidate[rule.name]
            for rule in rules
            if rule.unique and rule.name not in errors and candidate.get(rule.name) is not None
        }
        taken: set[str] = set()
        for store in stores:
            if pending:
                taken |= store.find_taken(pending, exclude_id)
        for field in sorted(taken):
            errors[field] = ErrorType.UniqueError

    return errors


def _result(errors: ValidationErrorMap) -> ValidationResult:
    if errors:
        return ValidationResult(success=False, errors=errors)
    return ValidationResult(success=True)


def validate_user(
    candidate: Any,
    need_unique: bool = True,
    store: RecordStore | None = None,
    exclude_id: str | None = None,
) -> ValidationResult:
    """Validate a user profile candidate.

    ``need_unique`` is True on create and False on update, so a record
    can keep its own email.  ``store`` defaults to the users table.
    """
    if candidate is None:
        return ValidationResult(success=False, errors={})
    if not isinstance(candidate, Mapping):
        logger.warning(
            "validation_failed",
            extra={"entity": "user", "reason": "candidate_not_a_mapping"},
        )
        return ValidationResult(success=False, errors={})

    stores: list[RecordStore] = []
    if need_unique:
        stores.append(store if store is not None else get_user_store())

    errors = collect_errors(candidate, USER_RULES, stores, need_unique, exclude_id)
    if errors:
        logger.info(
            "validation_failed",
            extra={"entity": "user", "fields": sorted(errors)},
        )
    return _result(errors)


def validate_doctor(
    candidate: Any,
    need_unique: bool = True,
    store: RecordStore | None = None,
    exclude_id: str | None = None,
    user_store: RecordStore | None = None,
) -> ValidationResult:
    """Validate a doctor profile candidate.

    A doctor is a user with extra fields: user rules run first and their
    errors merge with the doctor-level errors into one map.  Emails must
    be free in both the doctors table (``store``) and the users table
    (``user_store``).
    """
    if candidate is None:
        return ValidationResult(success=False, errors={})
    if not isinstance(candidate, Mapping):
        logger.warning(
            "validation_failed",
            extra={"entity": "doctor", "reason": "candidate_not_a_mapping"},
        )
        return ValidationResult(success=False, errors={})

    stores: list[RecordStore] = []
    if need_unique:
        stores.append(store if store is not None else get_doctor_store())
        stores.append(user_store if user_store is not None else get_user_store())

    errors = collect_errors(candidate, USER_RULES, stores, need_unique, exclude_id)
    errors.update(collect_errors(candidate, DOCTOR_RULES, stores, need_unique, exclude_id))
    if errors:
        logger.info(
            "validation_failed",
            extra={"entity": "doctor", "fields": sorted(errors)},
        )
    return _result(errors)
