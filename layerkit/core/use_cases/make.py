"""
Make use case — generate one artifact and any requested companions.

    make_artifact("repository", "Blog/PostRepository", config=config, with_interface=True)

resolves the name, renders the kind's stub, writes it, then generates
each companion the same way under a derived name.  Every artifact gets
its own outcome; a conflict or failure on one never stops the others.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

from layerkit.core.errors import InvalidNameError
from layerkit.core.models.artifact import (
    COMPANION_KINDS,
    ArtifactKind,
    ClassSpec,
    Companion,
    GenerationRequest,
)
from layerkit.core.models.config import LayerkitConfig
from layerkit.core.models.template import GeneratedFile
from layerkit.core.persistence.source_file import write_source_file
from layerkit.core.services.generators.names import NameResolver
from layerkit.core.services.generators.stubs import StubStore, render

logger = logging.getLogger(__name__)

OutcomeStatus = Literal["created", "exists", "failed"]


@dataclass
class ArtifactOutcome:
    """What happened to one generated file."""

    kind: str
    name: str
    path: Path | None = None
    status: OutcomeStatus = "failed"
    error: str | None = None

    @property
    def created(self) -> bool:
        return self.status == "created"

    def to_dict(self) -> dict:
        return {
            "kind": self.kind,
            "name": self.name,
            "path": str(self.path) if self.path else None,
            "status": self.status,
            "error": self.error,
        }


@dataclass
class MakeResult:
    """Result of one make command, primary artifact first."""

    kind: str
    raw_name: str
    outcomes: list[ArtifactOutcome] = field(default_factory=list)
    error: str | None = None

    @property
    def created(self) -> int:
        return sum(1 for o in self.outcomes if o.created)

    @property
    def ok(self) -> bool:
        """At least one artifact was written and the name was valid."""
        return self.error is None and self.created > 0

    def to_dict(self) -> dict:
        return {
            "kind": self.kind,
            "name": self.raw_name,
            "ok": self.ok,
            "error": self.error,
            "artifacts": [o.to_dict() for o in self.outcomes],
        }


def build_request(
    kind: ArtifactKind,
    raw_name: str,
    config: LayerkitConfig,
    *,
    with_service: bool = False,
    with_interface: bool = False,
    resolver: NameResolver | None = None,
) -> GenerationRequest:
    """Validate flags and resolve the name into a GenerationRequest.

    Raises:
        ValueError: If a companion flag is not supported by ``kind``.
        InvalidNameError: If the name cannot be resolved.
    """
    companions: set[Companion] = set()
    if with_service:
        companions.add("service")
    if with_interface:
        companions.add("interface")

    unsupported = companions - set(COMPANION_KINDS.get(kind, ()))
    if unsupported:
        flags = ", ".join(f"--{c}" for c in sorted(unsupported))
        raise ValueError(f"make-{kind} does not accept {flags}")

    resolver = resolver or NameResolver.from_config(config)
    spec = resolver.resolve(raw_name, config.root_namespace, config.kind(kind).namespace)
    return GenerationRequest(class_spec=spec, kind=kind, companions=frozenset(companions))


def companion_name(spec: ClassSpec, kind: str, companion: Companion, config: LayerkitConfig) -> str:
    """Raw name for a companion of ``spec``, keeping its nested path.

    ``Blog/PostRepository`` → ``Blog/PostService`` / ``Blog/PostRepositoryInterface``
    with the default naming patterns.
    """
    name = spec.short_class_name
    suffix = config.kind(kind).suffix
    stem = name[: -len(suffix)] if suffix and name.endswith(suffix) and name != suffix else name
    pattern = getattr(config.companions, companion)
    return "/".join((*spec.segments, pattern.format(name=name, stem=stem)))


def make_artifact(
    kind: ArtifactKind,
    raw_name: str,
    *,
    config: LayerkitConfig,
    stubs: StubStore | None = None,
    with_service: bool = False,
    with_interface: bool = False,
) -> MakeResult:
    """Generate ``kind`` named ``raw_name``, plus any requested companions.

    Args:
        kind: Artifact kind of the primary file.
        raw_name: Class name as typed, optionally namespaced.
        config: Project configuration.
        stubs: Loaded stub store (default: load from config).
        with_service: Also generate a service (repository only).
        with_interface: Also generate an interface (repository only).

    Returns:
        MakeResult with one outcome per artifact.  An invalid name sets
        ``error`` and nothing is written.

    Raises:
        ValueError: If a companion flag is not supported by ``kind``.
        StubError: If the stubs are missing or malformed.
    """
    result = MakeResult(kind=kind, raw_name=raw_name)

    try:
        request = build_request(
            kind, raw_name, config,
            with_service=with_service,
            with_interface=with_interface,
        )
    except InvalidNameError as e:
        logger.debug("Rejected name %r: %s", raw_name, e)
        result.error = str(e)
        return result

    if stubs is None:
        stubs = StubStore.load(config.stubs_dir)

    result.outcomes.append(_generate(request, stubs))

    for companion in request.ordered_companions():
        derived = companion_name(request.class_spec, kind, companion, config)
        logger.info("Generating %s companion %s", companion, derived)
        sub = make_artifact(companion, derived, config=config, stubs=stubs)
        if sub.error:
            result.outcomes.append(
                ArtifactOutcome(kind=companion, name=derived, status="failed", error=sub.error)
            )
        else:
            result.outcomes.extend(sub.outcomes)

    return result


def _generate(request: GenerationRequest, stubs: StubStore) -> ArtifactOutcome:
    spec = request.class_spec
    generated = GeneratedFile(
        path=spec.file_path,
        content=render(stubs.get_stub(request.kind), spec),
        kind=request.kind,
        reason=f"make-{request.kind} {spec.raw_name}",
    )
    outcome = ArtifactOutcome(kind=request.kind, name=spec.qualified_name, path=generated.path)

    try:
        written = write_source_file(generated.path, generated.content)
    except OSError as e:
        logger.error("Cannot write %s: %s", generated.path, e)
        outcome.error = f"Cannot write {generated.path}: {e.strerror or e}"
        return outcome

    outcome.status = "created" if written.written else "exists"
    return outcome
