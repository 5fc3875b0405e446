"""Shared test fixtures.

Provides sample user / doctor profiles, in-memory record stores, a mock
Supabase client and a ``test_client`` for FastAPI.
"""

import os
from collections.abc import Generator
from datetime import datetime, timezone
from typing import Any
from unittest.mock import MagicMock, patch

import pytest

os.environ.setdefault("SUPABASE_URL", "https://test.supabase.co")
os.environ.setdefault("SUPABASE_KEY", "test-key")

from fastapi.testclient import TestClient  # noqa: E402

from telemed.db.store import InMemoryRecordStore  # noqa: E402

NOW = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)

SAMPLE_USER: dict[str, Any] = {
    "name": "Иван",
    "surname": "Иванов",
    "patronymic": "Иванович",
    "photoUrl": "",
    "phone": 79028319028,
    "email": "ivanov_ivan@mail.ru",
    "password": "ivanovcoolguy911",
    "sex": True,
    "city": "Москва",
    "country": "Россия",
    "consultations": [],
    "reviews": [],
    "notificationEmail": "ivanov_ivan@mail.ru",
    "sendNotificationToEmail": True,
    "sendMailingsToEmail": True,
    "createdAt": NOW,
    "lastActiveAt": NOW,
}

SAMPLE_DOCTOR: dict[str, Any] = {
    **SAMPLE_USER,
    "password": "12345678",
    "fullName": "Иванов Иван Иванович",
    "education": "Первый МГМУ им. И. М. Сеченова",
    "yearEducation": "2010 - 2015",
    "blankSeries": "12345678",
    "blankNumber": "12345678",
    "issueDate": "21.11.2015",
    "speciality": ["Pediatrician", "Nutritionist"],
    "beginDoctorDate": NOW,
    "experience": 364,
    "serviceExperience": 360,
    "rating": 4.6,
    "price": 700,
    "whosFavourite": [],
    "clientsReviews": [],
    "clientsConsultations": [],
    "schedule": [],
    "workPlan": "Multiple",
    "qualification": "first",
    "isChild": False,
    "isAdult": True,
}

SECOND_DOCTOR: dict[str, Any] = {
    **SAMPLE_DOCTOR,
    "fullName": "Егоров Егор Егорович",
    "name": "Егор",
    "surname": "Егоров",
    "patronymic": "Егорович",
    "email": "123@mail.com",
    "notificationEmail": "123@mail.com",
    "experience": 1000,
    "speciality": [],
    "qualification": None,
    "rating": 0,
    "city": None,
    "workPlan": None,
    "isChild": None,
    "isAdult": None,
}


@pytest.fixture()
def sample_user() -> dict[str, Any]:
    return dict(SAMPLE_USER)


@pytest.fixture()
def sample_doctor() -> dict[str, Any]:
    return dict(SAMPLE_DOCTOR)


@pytest.fixture()
def second_doctor() -> dict[str, Any]:
    return dict(SECOND_DOCTOR)


@pytest.fixture()
def user_store() -> InMemoryRecordStore:
    return InMemoryRecordStore("users")


@pytest.fixture()
def doctor_store() -> InMemoryRecordStore:
    return InMemoryRecordStore("doctors")


def chainable_table_mock() -> MagicMock:
    """Return a mock that supports fluent chaining."""
    m = MagicMock()
    for method in (
        "select", "insert", "update", "eq", "neq", "limit",
        "in_", "contains", "gte", "lt", "or_", "order",
    ):
        getattr(m, method).return_value = m
    return m


@pytest.fixture()
def mock_supabase() -> Generator[MagicMock, None, None]:
    """Patch ``get_supabase`` for the record store and health router."""
    mock_client = MagicMock()
    table = chainable_table_mock()
    table.execute.return_value = MagicMock(data=[])
    mock_client.table.return_value = table
    with patch("telemed.db.store.get_supabase", return_value=mock_client), \
            patch("telemed.routers.health.get_supabase", return_value=mock_client):
        yield mock_client


@pytest.fixture()
def mock_supabase_disconnected() -> Generator[MagicMock, None, None]:
    """Patch ``get_supabase`` to simulate a disconnected database."""
    with patch(
        "telemed.routers.health.get_supabase",
        side_effect=Exception("Connection refused"),
    ):
        yield MagicMock()


@pytest.fixture()
def test_client() -> Generator[TestClient, None, None]:
    """Provide a FastAPI TestClient."""
    from telemed.main import app

    with TestClient(app) as client:
        yield client
