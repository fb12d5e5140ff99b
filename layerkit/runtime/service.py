"""
Service base — business logic over an injected repository.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from layerkit.runtime.contracts import Query, Repository


class Service:
    """Wraps a repository and exposes the same operations.

    The repository is passed in by the caller; nothing is looked up.
    Subclasses add domain behaviour and may override any operation.
    """

    def __init__(self, repository: Repository) -> None:
        self.repository = repository

    def create(self, attributes: Mapping[str, Any]) -> Any:
        return self.repository.create(attributes)

    def first(self, id: Any) -> Any | None:
        return self.repository.first(id)

    def find_or_fail(self, id: Any) -> Any:
        return self.repository.find_or_fail(id)

    def update(self, id: Any, attributes: Mapping[str, Any]) -> Any:
        return self.repository.update(id, attributes)

    def delete(self, id: Any) -> bool:
        return self.repository.delete(id)

    def delete_multiple(self, ids: Iterable[Any]) -> int:
        return self.repository.delete_multiple(ids)

    def query(self) -> Query:
        return self.repository.query()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.repository!r})"
