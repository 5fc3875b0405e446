"""Unit tests for experience buckets and enum membership."""

from __future__ import annotations

import pytest

from telemed.core.constants import EXPERIENCE_BUCKETS
from telemed.models.enums import ExperienceBucket, Speciality, WorkPlan
from telemed.services.buckets import (
    bucket_ranges,
    check_all,
    is_member,
    rating_ranges,
    resolve_bucket,
)


class TestResolveBucket:
    """Static bucket table."""

    def test_every_bucket_resolves(self) -> None:
        for bucket in ExperienceBucket:
            minimum, maximum = resolve_bucket(bucket)
            assert minimum >= 0
            assert maximum is None or maximum > minimum

    def test_accepts_string_keys(self) -> None:
        assert resolve_bucket("LessYear") == (0, 365)

    def test_unknown_bucket(self) -> None:
        with pytest.raises(ValueError):
            resolve_bucket("TenYears")

    def test_buckets_are_contiguous_and_exhaustive(self) -> None:
        intervals = sorted(EXPERIENCE_BUCKETS.values())
        assert intervals[0][0] == 0
        for (_, upper), (lower, _) in zip(intervals, intervals[1:]):
            assert upper == lower
        assert intervals[-1][1] is None

    def test_table_is_read_only(self) -> None:
        with pytest.raises(TypeError):
            EXPERIENCE_BUCKETS[ExperienceBucket.LessYear] = (0, 1)  # type: ignore[index]

    @pytest.mark.parametrize(
        "days, bucket",
        [
            (0, "LessYear"),
            (364, "LessYear"),
            (365, "OneYear"),
            (1000, "OneYear"),
            (1095, "ThreeYears"),
            (1825, "FiveYears"),
            (5000, "MoreFiveYears"),
        ],
    )
    def test_each_day_count_falls_in_one_bucket(self, days: int, bucket: str) -> None:
        hits = [
            b.value for b in ExperienceBucket
            if bucket_ranges("experience", [b])[0].matches({"experience": days})
        ]
        assert hits == [bucket]


class TestRanges:
    """Range sub-predicates."""

    def test_bucket_ranges(self) -> None:
        ranges = bucket_ranges("serviceExperience", ["LessYear", "MoreFiveYears"])
        assert [(r.field, r.minimum, r.maximum) for r in ranges] == [
            ("serviceExperience", 0, 365),
            ("serviceExperience", 2190, None),
        ]

    def test_rating_ranges_are_half_open(self) -> None:
        (four,) = rating_ranges("rating", [4])
        assert four.matches({"rating": 4})
        assert four.matches({"rating": 4.6})
        assert not four.matches({"rating": 5})
        assert not four.matches({"rating": 3.99})


class TestEnumMembership:
    """All-or-nothing membership."""

    def test_check_all(self) -> None:
        assert check_all(["Pediatrician"], Speciality) is True
        assert check_all(["Pediatrician", "NotARealSpecialty"], Speciality) is False

    def test_check_all_requires_a_list(self) -> None:
        assert check_all("Pediatrician", Speciality) is False
        assert check_all(None, Speciality) is False

    def test_empty_list_passes(self) -> None:
        assert check_all([], WorkPlan) is True

    def test_is_member_rejects_non_strings(self) -> None:
        assert is_member("Single", WorkPlan)
        assert not is_member(1, WorkPlan)
        assert not is_member(True, WorkPlan)
        assert not is_member(["Single"], WorkPlan)
