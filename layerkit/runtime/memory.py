"""
In-memory repository — a dict-backed reference implementation.

Useful in tests and prototypes: wire it into a generated service until
the real data-access layer exists.  Records are plain dicts; callers
always get copies, never the stored objects.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Mapping
from typing import Any

from layerkit.runtime.contracts import NotFoundError

Record = dict[str, Any]
Predicate = Callable[[Mapping[str, Any]], bool]

_MISSING = object()


def _sort_key(value: Any) -> tuple[bool, Any]:
    # None sorts first instead of raising on comparison
    return (value is not None, value)


class MemoryQuery:
    """Immutable, composable query over a repository's records.

    Every builder method returns a new query; nothing runs until
    ``all()``, ``first()``, ``count()`` or iteration.

        repo.query().where(status="draft").order_by("id", descending=True).limit(5).all()
    """

    def __init__(
        self,
        source: Callable[[], Iterable[Mapping[str, Any]]],
        *,
        predicates: tuple[Predicate, ...] = (),
        ordering: tuple[tuple[str, bool], ...] = (),
        limit: int | None = None,
        offset: int = 0,
    ) -> None:
        self._source = source
        self._predicates = predicates
        self._ordering = ordering
        self._limit = limit
        self._offset = offset

    def _replace(self, **changes: Any) -> MemoryQuery:
        params = {
            "predicates": self._predicates,
            "ordering": self._ordering,
            "limit": self._limit,
            "offset": self._offset,
        }
        params.update(changes)
        return MemoryQuery(self._source, **params)

    # ── Builders ────────────────────────────────────────────────

    def where(self, **equals: Any) -> MemoryQuery:
        """Keep records whose fields equal the given values."""

        def _matches(record: Mapping[str, Any]) -> bool:
            return all(record.get(k, _MISSING) == v for k, v in equals.items())

        return self._replace(predicates=(*self._predicates, _matches))

    def filter(self, predicate: Predicate) -> MemoryQuery:
        """Keep records for which ``predicate`` is true."""
        return self._replace(predicates=(*self._predicates, predicate))

    def order_by(self, field: str, descending: bool = False) -> MemoryQuery:
        """Sort by ``field``; earlier calls take precedence over later ones."""
        return self._replace(ordering=(*self._ordering, (field, descending)))

    def limit(self, count: int) -> MemoryQuery:
        if count < 0:
            raise ValueError(f"limit must be >= 0, got {count}")
        return self._replace(limit=count)

    def offset(self, count: int) -> MemoryQuery:
        if count < 0:
            raise ValueError(f"offset must be >= 0, got {count}")
        return self._replace(offset=count)

    # ── Execution ───────────────────────────────────────────────

    def all(self) -> list[Record]:
        rows = [
            dict(r) for r in self._source()
            if all(p(r) for p in self._predicates)
        ]
        # Stable sorts applied last-key-first give multi-key ordering
        for field, descending in reversed(self._ordering):
            rows.sort(key=lambda r, f=field: _sort_key(r.get(f)), reverse=descending)
        rows = rows[self._offset:]
        if self._limit is not None:
            rows = rows[: self._limit]
        return rows

    def first(self) -> Record | None:
        rows = self.all()
        return rows[0] if rows else None

    def count(self) -> int:
        return len(self.all())

    def __iter__(self) -> Iterator[Record]:
        return iter(self.all())


class InMemoryRepository:
    """Dict-backed repository with auto-incrementing integer ids.

    Args:
        records: Initial records; ids are assigned where missing.
        key: Name of the id field.
    """

    def __init__(self, records: Iterable[Mapping[str, Any]] = (), *, key: str = "id") -> None:
        self.key = key
        self._records: dict[Any, Record] = {}
        self._next_id = 1
        for record in records:
            self.create(record)

    def create(self, attributes: Mapping[str, Any]) -> Record:
        record = dict(attributes)
        if record.get(self.key) is None:
            record[self.key] = self._next_id
        id = record[self.key]
        if id in self._records:
            raise ValueError(f"Duplicate {self.key} {id!r}")
        if isinstance(id, int) and id >= self._next_id:
            self._next_id = id + 1
        self._records[id] = record
        return dict(record)

    def first(self, id: Any) -> Record | None:
        record = self._records.get(id)
        return dict(record) if record is not None else None

    def find_or_fail(self, id: Any) -> Record:
        record = self.first(id)
        if record is None:
            raise NotFoundError(id)
        return record

    def update(self, id: Any, attributes: Mapping[str, Any]) -> Record:
        record = self._records.get(id)
        if record is None:
            raise NotFoundError(id)
        if self.key in attributes and attributes[self.key] != id:
            raise ValueError(f"Cannot change {self.key} of record {id!r}")
        record.update(attributes)
        return dict(record)

    def delete(self, id: Any) -> bool:
        return self._records.pop(id, None) is not None

    def delete_multiple(self, ids: Iterable[Any]) -> int:
        return sum(1 for id in ids if self.delete(id))

    def query(self) -> MemoryQuery:
        return MemoryQuery(lambda: list(self._records.values()))

    def __len__(self) -> int:
        return len(self._records)

    def __repr__(self) -> str:
        return f"InMemoryRepository({len(self._records)} records)"
