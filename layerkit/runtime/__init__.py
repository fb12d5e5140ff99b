"""
Runtime types that generated repositories and services depend on.

    from layerkit.runtime import InMemoryRepository, NotFoundError, Repository, Service
"""

from layerkit.runtime.contracts import NotFoundError, Query, Repository
from layerkit.runtime.memory import InMemoryRepository, MemoryQuery
from layerkit.runtime.service import Service

__all__ = [
    "InMemoryRepository",
    "MemoryQuery",
    "NotFoundError",
    "Query",
    "Repository",
    "Service",
]
