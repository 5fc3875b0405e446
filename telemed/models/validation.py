"""Pydantic models for profile validation results."""

from pydantic import BaseModel

from telemed.models.enums import ValidationErrorType

ValidationErrorMap = dict[str, ValidationErrorType]


class ValidationResult(BaseModel):
    """Outcome of validating a profile candidate.

    ``errors`` is ``None`` on success.  On failure it maps every invalid
    field to the first check that field failed.  A ``None`` candidate
    yields ``success=False`` with an empty map.
    """
    success: bool
    errors: ValidationErrorMap | None = None
