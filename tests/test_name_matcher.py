"""Unit tests for full-name matching."""

from __future__ import annotations

import itertools

import pytest

from telemed.services.name_matcher import matches, record_full_name, tokenize

FULL_NAME = "Иван Иванов Иванович"


class TestMatches:
    """Every token must be a substring, in any order."""

    @pytest.mark.parametrize("query", ["Иван", "Иванов", "Иванович", "ван"])
    def test_single_token(self, query: str) -> None:
        assert matches(FULL_NAME, query)

    @pytest.mark.parametrize(
        "query",
        [" ".join(p) for n in (2, 3) for p in itertools.permutations(["Иван", "Иванов", "Иванович"], n)],
    )
    def test_any_token_order(self, query: str) -> None:
        assert matches(FULL_NAME, query)

    def test_one_missing_token_fails(self) -> None:
        assert not matches(FULL_NAME, "Иван Петров")

    def test_no_match(self) -> None:
        assert not matches(FULL_NAME, "123 123 123")

    def test_case_sensitive(self) -> None:
        assert not matches(FULL_NAME, "иван")

    def test_extra_whitespace(self) -> None:
        assert matches(FULL_NAME, "  Иванович\tИван \n")

    def test_blank_query_matches_everything(self) -> None:
        assert matches(FULL_NAME, "   ")


class TestTokenize:
    def test_deduplicates(self) -> None:
        assert tokenize("Иван Иван Иванов") == {"Иван", "Иванов"}


class TestRecordFullName:
    def test_prefers_full_name_field(self) -> None:
        assert record_full_name({"fullName": "A B C", "name": "X"}) == "A B C"

    def test_falls_back_to_parts(self) -> None:
        record = {"name": "Егор", "surname": "Егоров", "patronymic": None}
        assert record_full_name(record) == "Егор Егоров"
