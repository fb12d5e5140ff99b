"""
Domain models — Pydantic types for the generators.

All models are re-exported here for convenient access:

    from layerkit.core.models import ClassSpec, LayerkitConfig, StubTemplate
"""

from layerkit.core.models.artifact import (
    ARTIFACT_KINDS,
    COMPANION_KINDS,
    ArtifactKind,
    ClassSpec,
    Companion,
    GenerationRequest,
)
from layerkit.core.models.config import CompanionNaming, KindSettings, LayerkitConfig
from layerkit.core.models.template import GeneratedFile, StubTemplate, WriteResult

__all__ = [
    # artifact.py
    "ARTIFACT_KINDS",
    "ArtifactKind",
    "COMPANION_KINDS",
    "ClassSpec",
    "Companion",
    "GenerationRequest",
    # config.py
    "CompanionNaming",
    "KindSettings",
    "LayerkitConfig",
    # template.py
    "GeneratedFile",
    "StubTemplate",
    "WriteResult",
]
