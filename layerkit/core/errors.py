"""
Error taxonomy for the generators.

Name and configuration errors are raised before anything touches the
filesystem.  Stub errors mean the packaged (or overridden) templates are
broken and the command cannot continue.  An existing target file is not
an error at all — it is reported per artifact as a conflict.
"""

from __future__ import annotations


class LayerkitError(Exception):
    """Base class for every error the CLI reports to the user."""


class ConfigError(LayerkitError):
    """Raised when layerkit.yml is invalid or unreadable."""


class InvalidNameError(LayerkitError, ValueError):
    """Raised when a requested class name cannot be turned into a file."""


class StubError(LayerkitError):
    """Raised when a stub template is missing or malformed."""


class StubNotFoundError(StubError):
    """No template is registered for the requested artifact kind."""


class StubPlaceholderError(StubError):
    """A template uses a placeholder token outside the known set."""
