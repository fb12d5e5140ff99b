"""
Artifact models — what a generator command is asked to produce.

A ``ClassSpec`` is the resolved identity of one class: where it lives
in the namespace tree and on disk.  A ``GenerationRequest`` bundles it
with the artifact kind and companion flags for a single invocation.
Both are built and discarded within one command run.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict

ArtifactKind = Literal["trait", "interface", "repository", "service"]
Companion = Literal["service", "interface"]

# Iteration order for stub loading and publishing
ARTIFACT_KINDS: tuple[ArtifactKind, ...] = ("trait", "interface", "repository", "service")

# Which companions each kind may generate, in generation order
COMPANION_KINDS: dict[str, tuple[Companion, ...]] = {
    "repository": ("service", "interface"),
}


class ClassSpec(BaseModel):
    """A resolved class to generate.

    Attributes:
        raw_name:         Name as the user typed it.
        root_namespace:   Configured root namespace (e.g. ``App``).
        namespace:        Fully-qualified namespace of the class.
        short_class_name: Bare identifier substituted into the stub.
        file_path:        Target file on disk.
        segments:         Nested namespace path taken from the raw name.
        separator:        Namespace separator used to build ``namespace``.
    """

    model_config = ConfigDict(frozen=True)

    raw_name: str
    root_namespace: str
    namespace: str
    short_class_name: str
    file_path: Path
    segments: tuple[str, ...] = ()
    separator: str = "\\"

    @property
    def qualified_name(self) -> str:
        """Namespace and class name joined with the separator."""
        return f"{self.namespace}{self.separator}{self.short_class_name}"


class GenerationRequest(BaseModel):
    """One generation request: a class, its kind, and companion flags."""

    model_config = ConfigDict(frozen=True)

    class_spec: ClassSpec
    kind: ArtifactKind
    companions: frozenset[Companion] = frozenset()

    @property
    def with_service(self) -> bool:
        return "service" in self.companions

    @property
    def with_interface(self) -> bool:
        return "interface" in self.companions

    def ordered_companions(self) -> list[Companion]:
        """Requested companions in the kind's generation order."""
        order = COMPANION_KINDS.get(self.kind, ())
        return [c for c in order if c in self.companions]
