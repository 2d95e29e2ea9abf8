"""In-memory repositories for route-key lookups.

InMemoryRepository implements the query contract the default lookup
relies on (``get_route_key_name`` / ``where`` / ``first_or_fail``) over
a plain list of records. It is handy for tests, examples and small
apps whose entities live in memory.

Records may be dicts or objects; fields are read with ``record[field]``
for mappings and ``getattr(record, field)`` otherwise.

Example:
    >>> class CountryRepository(InMemoryRepository):
    ...     route_key_name = "code"
    ...     records = [{"code": "X1", "name": "Xland"}]
    ...
    >>> CountryRepository().where("code", "X1").first_or_fail()
    {'code': 'X1', 'name': 'Xland'}
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, ClassVar

from .exceptions import EntityNotFoundError

_MISSING = object()


def _read_field(record: Any, field: str) -> Any:
    if isinstance(record, Mapping):
        return record.get(field, _MISSING)
    return getattr(record, field, _MISSING)


class InMemoryQuery:
    """Equality-filtered view over a repository's records."""

    def __init__(
        self,
        records: Iterable[Any],
        field: str,
        value: Any,
        entity_name: str | None = None,
    ) -> None:
        self._records = list(records)
        self._field = field
        self._value = value
        self._entity_name = entity_name

    @property
    def field(self) -> str:
        return self._field

    @property
    def value(self) -> Any:
        return self._value

    def all(self) -> list[Any]:
        """Return every record whose field equals the value."""
        return [
            record
            for record in self._records
            if _read_field(record, self._field) == self._value
        ]

    def first(self) -> Any | None:
        """Return the first matching record, or None."""
        for record in self._records:
            if _read_field(record, self._field) == self._value:
                return record
        return None

    def first_or_fail(self) -> Any:
        """Return the first matching record.

        Raises:
            EntityNotFoundError: If no record matches.
        """
        for record in self._records:
            if _read_field(record, self._field) == self._value:
                return record
        raise EntityNotFoundError.for_lookup(self._entity_name, self._field, self._value)

    def __repr__(self) -> str:
        return f"InMemoryQuery({self._field}={self._value!r})"


class InMemoryRepository:
    """Repository over an in-memory list of records.

    Subclasses usually set ``route_key_name`` and ``records`` as class
    attributes; both can also be passed to the constructor.

    Attributes:
        route_key_name: Field used as route key (default ``"id"``).
        records: Records searched by ``where``.
    """

    route_key_name: ClassVar[str] = "id"
    records: ClassVar[list[Any]] = []

    def __init__(
        self,
        records: Iterable[Any] | None = None,
        *,
        route_key_name: str | None = None,
    ) -> None:
        self._records = list(records) if records is not None else list(self.records)
        self._route_key_name = route_key_name or self.route_key_name

    def get_route_key_name(self) -> str:
        return self._route_key_name

    def where(self, field: str, value: Any) -> InMemoryQuery:
        return InMemoryQuery(self._records, field, value, type(self).__name__)

    def find(self, value: Any) -> Any | None:
        """Find a record by route key, or None."""
        return self.where(self._route_key_name, value).first()

    def find_or_fail(self, value: Any) -> Any:
        """Find a record by route key.

        Raises:
            EntityNotFoundError: If no record matches.
        """
        return self.where(self._route_key_name, value).first_or_fail()

    def add(self, record: Any) -> None:
        self._records.append(record)

    def __len__(self) -> int:
        return len(self._records)


__all__ = ["InMemoryQuery", "InMemoryRepository"]
