"""Unit tests for doctor search filter normalization."""

from __future__ import annotations

from typing import Any

import pytest

from telemed.models.filters import FilterConfig
from telemed.services.filters import normalize_filter


def _raw(filter_: Any) -> dict[str, Any]:
    return normalize_filter(filter_).to_raw()


class TestPassThrough:
    """Well-formed entries survive unchanged."""

    @pytest.mark.parametrize(
        "filter_",
        [
            {"fullName": "Hey"},
            {"isDownward": True},
            {"isDownward": False},
            {"speciality": ["Pediatrician"]},
            {"experience": ["LessYear"]},
            {"serviceExperience": ["OneYear", "MoreFiveYears"]},
            {"qualification": ["first"]},
            {"rating": [5]},
            {"city": ["Москва"]},
            {"workPlan": ["Single"]},
            {"sex": True},
            {"isChild": False},
            {"isAdult": False},
        ],
    )
    def test_should_pass(self, filter_: dict[str, Any]) -> None:
        assert _raw(filter_) == filter_

    def test_full_name_is_not_modified(self) -> None:
        assert _raw({"fullName": "  Иван  Иванов "}) == {"fullName": "  Иван  Иванов "}


class TestRejection:
    """Malformed entries degrade to no constraint."""

    @pytest.mark.parametrize(
        "filter_",
        [
            {"fullName": [True]},
            {"fullName": ""},
            {"isDownward": ["123"]},
            {"speciality": ["123"]},
            {"speciality": []},
            {"speciality": "Pediatrician"},
            {"experience": ["123"]},
            {"qualification": ["123"]},
            {"rating": [123]},
            {"rating": [-1]},
            {"rating": ["4"]},
            {"rating": 4},
            {"city": [123]},
            {"city": []},
            {"workPlan": ["123"]},
            {"isChild": 123},
            {"isAdult": 123},
            {"sex": "true"},
            {"isChild": 0},
        ],
    )
    def test_should_not_pass(self, filter_: dict[str, Any]) -> None:
        assert _raw(filter_) == {}

    def test_one_unknown_speciality_drops_the_whole_key(self) -> None:
        assert _raw({"speciality": ["Pediatrician", "NotARealSpecialty"]}) == {}

    def test_rating_drops_only_invalid_elements(self) -> None:
        assert _raw({"rating": [1, 123, "4", True, None, 4.5, -2]}) == {"rating": [1, 4.5]}

    def test_unknown_keys_are_ignored(self) -> None:
        assert _raw({"colour": ["red"], "sex": False}) == {"sex": False}

    def test_mixed_key_types_do_not_raise(self) -> None:
        assert normalize_filter({1: "x", "sex": "nope", None: True}) == FilterConfig()
        assert _raw({1: "x", "isChild": True}) == {"isChild": True}

    @pytest.mark.parametrize("filter_", [None, [], "speciality", 42])
    def test_non_mapping_input(self, filter_: Any) -> None:
        assert normalize_filter(filter_) == FilterConfig()


class TestIndependence:
    """Each key is judged on its own."""

    def test_bad_keys_do_not_affect_good_ones(self) -> None:
        raw = {
            "speciality": ["Pediatrician", "Wizard"],
            "city": ["Москва"],
            "rating": [123, 4],
            "isChild": "yes",
            "workPlan": ["Multiple"],
        }
        assert _raw(raw) == {"city": ["Москва"], "rating": [4], "workPlan": ["Multiple"]}

    def test_normalizing_twice_is_idempotent(self) -> None:
        raw = {
            "speciality": ["Pediatrician", "Therapist"],
            "experience": ["LessYear", "FiveYears"],
            "serviceExperience": ["ThreeYears"],
            "rating": [0, 4, 5],
            "sex": False,
            "city": ["Москва", "Новосибирск"],
            "workPlan": ["Single", "Multiple"],
            "qualification": ["highest"],
            "isChild": True,
            "isAdult": False,
            "fullName": "Иванов Иван",
            "isDownward": True,
        }
        first = normalize_filter(raw)
        second = normalize_filter(first.to_raw())
        assert first == second
        assert first.to_raw() == raw

    def test_typed_fields(self) -> None:
        cfg = normalize_filter({"speciality": ["Pediatrician"], "isDownward": True})
        assert cfg.speciality is not None
        assert cfg.speciality[0].value == "Pediatrician"
        assert cfg.is_downward is True
        assert cfg.city is None
