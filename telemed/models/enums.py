"""Enum types mirroring the symbolic vocabularies of doctor profiles."""

from enum import Enum


class Speciality(str, Enum):
    """Medical specialities a doctor can list on the profile."""
    Pediatrician = "Pediatrician"
    Nutritionist = "Nutritionist"
    Therapist = "Therapist"
    Cardiologist = "Cardiologist"
    Dermatologist = "Dermatologist"
    Endocrinologist = "Endocrinologist"
    Gastroenterologist = "Gastroenterologist"
    Gynecologist = "Gynecologist"
    Neurologist = "Neurologist"
    Ophthalmologist = "Ophthalmologist"
    Otolaryngologist = "Otolaryngologist"
    Psychologist = "Psychologist"
    Psychotherapist = "Psychotherapist"
    Surgeon = "Surgeon"
    Urologist = "Urologist"
    Dentist = "Dentist"


class WorkPlan(str, Enum):
    """Whether a doctor handles one or several consultations at a time."""
    Single = "Single"
    Multiple = "Multiple"


class ExperienceBucket(str, Enum):
    """Symbolic experience tiers, resolved to day ranges in constants."""
    LessYear = "LessYear"
    OneYear = "OneYear"
    ThreeYears = "ThreeYears"
    FiveYears = "FiveYears"
    MoreFiveYears = "MoreFiveYears"


class Qualification(str, Enum):
    """Doctor qualification category."""
    first = "first"
    second = "second"
    highest = "highest"


class ValidationErrorType(str, Enum):
    """Kind of failure recorded for a single profile field."""
    RequiredError = "required_error"
    TypeError = "type_error"
    UniqueError = "unique_error"
    LengthError = "length_error"
    PhoneFormatError = "phone_format_error"
    EmailFormatError = "email_format_error"
