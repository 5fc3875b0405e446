"""Pydantic models for doctor search filters.

``FilterConfig`` is the sanitized form of a raw client filter.  Every
field that is set is an active constraint; ``None`` means no constraint.
Field aliases are the camelCase keys clients send.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from telemed.models.enums import ExperienceBucket, Qualification, Speciality, WorkPlan


class FilterConfig(BaseModel):
    """Sanitized doctor search filter."""
    model_config = ConfigDict(populate_by_name=True)

    speciality: list[Speciality] | None = None
    experience: list[ExperienceBucket] | None = None
    service_experience: list[ExperienceBucket] | None = Field(
        default=None, alias="serviceExperience"
    )
    rating: list[float] | None = None
    sex: bool | None = None
    city: list[str] | None = None
    work_plan: list[WorkPlan] | None = Field(default=None, alias="workPlan")
    qualification: list[Qualification] | None = None
    is_child: bool | None = Field(default=None, alias="isChild")
    is_adult: bool | None = Field(default=None, alias="isAdult")
    full_name: str | None = Field(default=None, alias="fullName")
    is_downward: bool | None = Field(default=None, alias="isDownward")

    def to_raw(self) -> dict[str, Any]:
        """Re-encode as the raw wire shape (camelCase, unset keys omitted)."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class DoctorSearchResponse(BaseModel):
    """Full response for POST /api/v1/doctors/search."""
    doctors: list[dict[str, Any]] = []
    amount: int
    offset: int = Field(serialization_alias="from")
