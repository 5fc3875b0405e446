"""Pydantic models for doctor applications.

Profiles themselves travel as plain attribute mappings because they are
validated field by field; only the become-doctor application has a
fixed shape.
"""

from pydantic import BaseModel


class BecomeDoctorRequest(BaseModel):
    """Application submitted by a user who wants to become a doctor."""
    name: str
    surname: str
    phone: str | None = None
    email: str | None = None
    sex: bool | None = None
    education: str | None = None
    speciality: str | None = None
    yearEducation: str | None = None
    blankSeries: str | None = None
    blankNumber: str | None = None
    issueDate: str | None = None
    experience: str | None = None
    passportIssuedByWhom: str | None = None
    passportSeries: str | None = None
    passportIssueDate: str | None = None
    workExperience: str | None = None
    workPlaces: str | None = None
