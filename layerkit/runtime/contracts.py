"""
Data-access contract — the capability set every repository provides.

Generated code depends on these protocols, not on a shared base class:
any object with the right methods is a repository.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from typing import Any, Protocol, runtime_checkable


class NotFoundError(LookupError):
    """Raised by ``find_or_fail`` / ``update`` when no record has the id."""

    def __init__(self, id: Any, message: str | None = None) -> None:
        self.id = id
        super().__init__(message or f"No record found for id {id!r}")


@runtime_checkable
class Query(Protocol):
    """A composable query handle returned by ``Repository.query()``."""

    def all(self) -> list[Any]: ...

    def first(self) -> Any | None: ...

    def count(self) -> int: ...

    def __iter__(self) -> Iterator[Any]: ...


@runtime_checkable
class Repository(Protocol):
    """Capability set of a repository.

    ``first`` returns None for a missing id; ``find_or_fail`` and
    ``update`` raise ``NotFoundError``.  ``delete`` reports whether a
    record was removed and ``delete_multiple`` how many were.
    """

    def create(self, attributes: Mapping[str, Any]) -> Any: ...

    def first(self, id: Any) -> Any | None: ...

    def find_or_fail(self, id: Any) -> Any: ...

    def update(self, id: Any, attributes: Mapping[str, Any]) -> Any: ...

    def delete(self, id: Any) -> bool: ...

    def delete_multiple(self, ids: Iterable[Any]) -> int: ...

    def query(self) -> Query: ...
