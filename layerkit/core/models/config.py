"""
Configuration model — loaded from layerkit.yml.

Everything has a default, so a project without a config file still
gets the conventional layout:

    App\\Repositories             → app/repositories/
    App\\Repositories\\Interfaces → app/repositories/interfaces/
    App\\Services                 → app/services/
    App\\Traits                   → app/traits/
"""

from __future__ import annotations

import re
import string
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator

from layerkit.core.models.artifact import ArtifactKind

# Fields a companion naming pattern may reference
_NAMING_FIELDS = frozenset({"name", "stem"})

# Same delimiters the name resolver accepts
_NAMESPACE_DELIMITERS = re.compile(r"[\\/.]")


class KindSettings(BaseModel):
    """Where one artifact kind lives and how its classes are named.

    Attributes:
        namespace: Namespace suffix appended to the root namespace.
        directory: Directory under the source root (``/``-separated).
        suffix:    Conventional class-name suffix (``Repository``, ...).
    """

    namespace: str
    directory: str
    suffix: str = ""


_DEFAULT_KINDS: dict[str, dict[str, str]] = {
    "trait": {"namespace": "Traits", "directory": "traits", "suffix": ""},
    "interface": {
        "namespace": "Repositories\\Interfaces",
        "directory": "repositories/interfaces",
        "suffix": "Interface",
    },
    "repository": {
        "namespace": "Repositories",
        "directory": "repositories",
        "suffix": "Repository",
    },
    "service": {"namespace": "Services", "directory": "services", "suffix": "Service"},
}


def _default_kinds() -> dict[str, KindSettings]:
    return {kind: KindSettings(**values) for kind, values in _DEFAULT_KINDS.items()}


class CompanionNaming(BaseModel):
    """Name patterns for companion artifacts.

    ``{name}`` is the primary class name, ``{stem}`` the same name with
    the primary kind's suffix removed.  ``PostRepository`` therefore
    yields ``PostService`` and ``PostRepositoryInterface`` by default.
    """

    service: str = "{stem}Service"
    interface: str = "{name}Interface"

    @field_validator("service", "interface")
    @classmethod
    def _known_fields(cls, value: str) -> str:
        try:
            fields = {f for _, f, _, _ in string.Formatter().parse(value) if f is not None}
        except ValueError as e:
            raise ValueError(f"Malformed naming pattern {value!r}: {e}") from e
        unknown = fields - _NAMING_FIELDS
        if unknown:
            raise ValueError(
                f"Unknown field(s) {', '.join(sorted(unknown))} in naming pattern "
                f"{value!r}; use {{name}} or {{stem}}"
            )
        return value


class LayerkitConfig(BaseModel):
    """Generator configuration for one project."""

    root_namespace: str = "App"
    source_root: str = "app"
    extension: str = ".py"
    namespace_separator: str = "\\"
    stubs_path: str | None = "stubs"

    companions: CompanionNaming = Field(default_factory=CompanionNaming)
    kinds: dict[ArtifactKind, KindSettings] = Field(default_factory=_default_kinds)

    # Directory holding layerkit.yml (or the working directory)
    project_root: Path = Field(default_factory=Path.cwd)

    @field_validator("extension")
    @classmethod
    def _dotted_extension(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("extension must not be empty")
        return value if value.startswith(".") else f".{value}"

    @field_validator("namespace_separator")
    @classmethod
    def _single_separator(cls, value: str) -> str:
        if value not in ("\\", ".", "/"):
            raise ValueError("namespace_separator must be one of '\\', '.', '/'")
        return value

    @field_validator("kinds", mode="before")
    @classmethod
    def _merge_default_kinds(cls, value: Any) -> Any:
        # Partial entries in the file only override the keys they name
        if not isinstance(value, dict):
            return value
        merged: dict[str, Any] = {k: dict(v) for k, v in _DEFAULT_KINDS.items()}
        for kind, override in value.items():
            if isinstance(override, KindSettings):
                override = override.model_dump()
            if isinstance(override, dict) and kind in merged:
                merged[kind].update(override)
            else:
                merged[kind] = override
        return merged

    @field_validator("kinds")
    @classmethod
    def _unique_namespaces(cls, value: dict[str, KindSettings]) -> dict[str, KindSettings]:
        seen: dict[tuple[str, ...], str] = {}
        for kind, settings in value.items():
            key = tuple(_NAMESPACE_DELIMITERS.split(settings.namespace.strip("\\/.")))
            if key in seen:
                raise ValueError(
                    f"kinds {seen[key]!r} and {kind!r} share namespace {settings.namespace!r}"
                )
            seen[key] = kind
        return value

    @property
    def source_dir(self) -> Path:
        """Absolute directory the root namespace maps to."""
        return self.project_root / self.source_root

    @property
    def stubs_dir(self) -> Path | None:
        """Directory holding stub overrides (None disables overrides)."""
        if not self.stubs_path:
            return None
        return self.project_root / self.stubs_path

    def kind(self, kind: str) -> KindSettings:
        """Settings for one artifact kind."""
        return self.kinds[kind]  # type: ignore[index]
