"""Tests for the in-memory repository."""

from __future__ import annotations

from dataclasses import dataclass

import pytest

from route_binding import EntityNotFoundError, InMemoryQuery, InMemoryRepository


@dataclass
class Country:
    code: str
    name: str


class CountryRepository(InMemoryRepository):
    route_key_name = "code"
    records = [
        {"code": "X1", "name": "Xland"},
        {"code": "Y2", "name": "Yland"},
        {"code": "X1", "name": "Xland again"},
    ]


class TestInMemoryQuery:
    """Tests for InMemoryQuery."""

    def test_all_and_first(self):
        """Test filtering returns matches in record order."""
        query = CountryRepository().where("code", "X1")

        assert [r["name"] for r in query.all()] == ["Xland", "Xland again"]
        assert query.first()["name"] == "Xland"
        assert query.first_or_fail()["name"] == "Xland"

    def test_no_match(self):
        """Test no-match behaviour of first and first_or_fail."""
        query = InMemoryQuery([{"id": 1}], "id", 2, "Thing")

        assert query.first() is None
        assert query.all() == []
        with pytest.raises(EntityNotFoundError, match=r"\[Thing\] where id = 2"):
            query.first_or_fail()

    def test_missing_field_never_matches(self):
        """Test records without the field are skipped."""
        query = InMemoryQuery([{"other": None}], "id", None)

        assert query.first() is None

    def test_object_records(self):
        """Test attribute access for non-mapping records."""
        repo = InMemoryRepository([Country("X1", "Xland")], route_key_name="code")

        assert repo.find("X1") == Country("X1", "Xland")


class TestInMemoryRepository:
    """Tests for InMemoryRepository."""

    def test_class_level_configuration(self):
        """Test subclasses configure route key and records."""
        repo = CountryRepository()

        assert repo.get_route_key_name() == "code"
        assert len(repo) == 3

    def test_defaults(self):
        """Test the default route key is 'id'."""
        repo = InMemoryRepository()

        assert repo.get_route_key_name() == "id"
        assert len(repo) == 0

    def test_find_or_fail(self):
        """Test find_or_fail raises for unknown keys."""
        repo = InMemoryRepository([{"id": "1"}])

        assert repo.find_or_fail("1") == {"id": "1"}
        with pytest.raises(EntityNotFoundError) as exc_info:
            repo.find_or_fail("2")
        assert exc_info.value.identifier == "InMemoryRepository"

    def test_add_does_not_touch_class_records(self):
        """Test instances copy the class-level records."""
        repo = CountryRepository()
        repo.add({"code": "Z3", "name": "Zland"})

        assert repo.find("Z3") is not None
        assert len(CountryRepository.records) == 3
