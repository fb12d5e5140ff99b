"""
Publish-stubs use case — copy the packaged stubs into the project.

Once published, the copies in the stubs directory override the packaged
ones for every make command.  Existing copies are never overwritten.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from layerkit.core.models.artifact import ARTIFACT_KINDS
from layerkit.core.models.config import LayerkitConfig
from layerkit.core.persistence.source_file import write_source_file
from layerkit.core.services.generators.stubs import builtin_stub_path, load_stub, stub_filename
from layerkit.core.use_cases.make import ArtifactOutcome

logger = logging.getLogger(__name__)

# Used when layerkit.yml disables overrides with stubs_path: null
DEFAULT_STUBS_DIR = "stubs"


@dataclass
class PublishResult:
    """Result of publishing the stubs."""

    target_dir: Path
    outcomes: list[ArtifactOutcome] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return any(o.created for o in self.outcomes)

    def to_dict(self) -> dict:
        return {
            "target_dir": str(self.target_dir),
            "ok": self.ok,
            "stubs": [o.to_dict() for o in self.outcomes],
        }


def publish_stubs(config: LayerkitConfig) -> PublishResult:
    """Copy every packaged stub into the project's stubs directory.

    Raises:
        StubError: If a packaged stub is missing or malformed.
    """
    target = config.stubs_dir or config.project_root / DEFAULT_STUBS_DIR
    result = PublishResult(target_dir=target)

    for kind in ARTIFACT_KINDS:
        template = load_stub(kind, builtin_stub_path(kind))
        path = target / stub_filename(kind)
        outcome = ArtifactOutcome(kind=kind, name=stub_filename(kind), path=path)
        try:
            written = write_source_file(path, template.body)
        except OSError as e:
            logger.error("Cannot publish %s stub to %s: %s", kind, path, e)
            outcome.error = f"Cannot write {path}: {e.strerror or e}"
        else:
            outcome.status = "created" if written.written else "exists"
        result.outcomes.append(outcome)

    return result
