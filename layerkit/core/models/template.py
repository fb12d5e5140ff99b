"""
Template and output models — used by all generators.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict

from layerkit.core.models.artifact import ArtifactKind


class StubTemplate(BaseModel):
    """A stub loaded from disk.

    Immutable once loaded; placeholders are checked by the stub store
    before a ``StubTemplate`` is ever handed out.
    """

    model_config = ConfigDict(frozen=True)

    kind: ArtifactKind
    body: str
    source: Path | None = None


class GeneratedFile(BaseModel):
    """A rendered file waiting to be written.

    Attributes:
        path:    Target path on disk.
        content: Full file content.
        kind:    Artifact kind that produced it.
        reason:  Why this file was generated.
    """

    path: Path
    content: str
    kind: ArtifactKind
    reason: str = ""


class WriteResult(BaseModel):
    """Outcome of writing one file: written, or left alone because it exists."""

    path: Path
    status: Literal["written", "conflict"]

    @property
    def written(self) -> bool:
        return self.status == "written"

    @property
    def conflict(self) -> bool:
        return self.status == "conflict"

    @classmethod
    def success(cls, path: Path) -> WriteResult:
        """Create a written result."""
        return cls(path=path, status="written")

    @classmethod
    def exists(cls, path: Path) -> WriteResult:
        """Create a conflict result."""
        return cls(path=path, status="conflict")
