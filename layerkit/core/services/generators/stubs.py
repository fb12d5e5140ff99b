"""
Stub store — the templates generated files are stamped from.

Built-in stubs live in ``stubs/<kind>.stub`` next to this module.  A
project may override any of them by dropping a file with the same name
into its configured stubs directory (see ``publish-stubs``).

Stubs know exactly two placeholders:

    {{ class }}       bare class / interface / trait identifier
    {{ namespace }}   fully-qualified namespace

Both ``{{ class }}`` and ``{{class}}`` spellings match.  Any other
spaced ``{{ token }}`` is rejected when the stub is loaded, never at render
time.  Unspaced braces around other names (``f"{{name}}"``) are plain text.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from pathlib import Path

from layerkit.core.errors import StubNotFoundError, StubPlaceholderError
from layerkit.core.models.artifact import ARTIFACT_KINDS, ArtifactKind, ClassSpec
from layerkit.core.models.template import StubTemplate

logger = logging.getLogger(__name__)


# ── Stub directory ──────────────────────────────────────────────────

STUBS_DIR = Path(__file__).parent / "stubs"

STUB_SUFFIX = ".stub"

PLACEHOLDERS = frozenset({"class", "namespace"})

# Known placeholders match in either spelling; anything else only counts as
# a placeholder when spaced, so a literal f"{{name}}" survives untouched
_TOKEN = re.compile(r"\{\{\s*(class|namespace)\s*\}\}|\{\{\s+([A-Za-z_][\w.-]*)\s+\}\}")


def stub_filename(kind: str) -> str:
    return f"{kind}{STUB_SUFFIX}"


def builtin_stub_path(kind: str) -> Path:
    """Path of the packaged stub for ``kind``."""
    return STUBS_DIR / stub_filename(kind)


def placeholders_in(body: str) -> set[str]:
    """All placeholder names used in a template body."""
    return {m.group(1) or m.group(2) for m in _TOKEN.finditer(body)}


def load_stub(kind: ArtifactKind, path: Path) -> StubTemplate:
    """Read and validate one stub file.

    Raises:
        StubNotFoundError: If the file cannot be read.
        StubPlaceholderError: If it uses an unknown placeholder.
    """
    try:
        body = path.read_text(encoding="utf-8")
    except OSError as e:
        raise StubNotFoundError(f"Cannot read {kind} stub {path}: {e}") from e

    unknown = placeholders_in(body) - PLACEHOLDERS
    if unknown:
        names = ", ".join("{{ %s }}" % n for n in sorted(unknown))
        raise StubPlaceholderError(
            f"Stub {path} uses unknown placeholder(s): {names}. "
            f"Allowed: {{{{ class }}}}, {{{{ namespace }}}}"
        )

    return StubTemplate(kind=kind, body=body, source=path)


def render(template: StubTemplate, spec: ClassSpec) -> str:
    """Substitute the class and namespace placeholders.

    Single pass: substituted values are never scanned again, and text
    outside the ``{{ … }}`` tokens is left byte-for-byte intact.
    """
    values = {
        "class": spec.short_class_name,
        "namespace": spec.namespace,
    }

    def _replace(m: re.Match) -> str:
        name = m.group(1) or m.group(2)
        if name not in values:
            raise StubPlaceholderError(f"Unknown placeholder {{{{ {name} }}}} in {template.kind} stub")
        return values[name]

    return _TOKEN.sub(_replace, template.body)


class StubStore:
    """Read-only registry of validated stubs, keyed by artifact kind."""

    def __init__(self, templates: Mapping[str, StubTemplate]) -> None:
        self._templates = dict(templates)

    @classmethod
    def load(cls, overrides: Path | None = None) -> StubStore:
        """Load every kind's stub, preferring files in ``overrides``.

        Raises:
            StubNotFoundError: If a kind has neither an override nor a
                packaged stub.
            StubPlaceholderError: If any stub uses an unknown placeholder.
        """
        templates: dict[str, StubTemplate] = {}
        for kind in ARTIFACT_KINDS:
            path = builtin_stub_path(kind)
            if overrides is not None:
                candidate = overrides / stub_filename(kind)
                if candidate.is_file():
                    logger.debug("Using %s stub override %s", kind, candidate)
                    path = candidate
            if not path.is_file():
                raise StubNotFoundError(f"No stub registered for {kind!r} (looked for {path})")
            templates[kind] = load_stub(kind, path)
        return cls(templates)

    def kinds(self) -> tuple[str, ...]:
        return tuple(self._templates)

    def get_stub(self, kind: str) -> StubTemplate:
        """Template for ``kind``.

        Raises:
            StubNotFoundError: If no template is registered for ``kind``.
        """
        try:
            return self._templates[kind]
        except KeyError:
            raise StubNotFoundError(f"No stub registered for {kind!r}") from None
