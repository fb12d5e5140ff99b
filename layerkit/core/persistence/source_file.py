"""
Source file writer — the only component that touches the filesystem.

Never overwrites: an existing target is reported as a conflict and left
alone.  New files are written atomically (temp file in the target
directory, then rename) so an interrupted run never leaves half a class
behind.
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

from layerkit.core.models.template import WriteResult

logger = logging.getLogger(__name__)

# Permissions for generated sources (mkstemp defaults to 0600)
_FILE_MODE = 0o644


def write_source_file(path: Path, content: str) -> WriteResult:
    """Write ``content`` to ``path`` unless something is already there.

    Args:
        path: Target file.
        content: Full file content.

    Returns:
        WriteResult — ``written`` or ``conflict``.

    Raises:
        OSError: If the directory or file cannot be created.
    """
    if path.exists():
        logger.info("%s already exists — leaving it untouched", path)
        return WriteResult.exists(path)

    # Ensure parent directory exists
    path.parent.mkdir(parents=True, exist_ok=True)

    # Atomic write: temp file in same directory, then rename
    fd, tmp_path = tempfile.mkstemp(
        dir=path.parent,
        prefix=f".{path.name}.",
        suffix=".tmp",
    )
    tmp = Path(tmp_path)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as fh:
            fh.write(content)
        tmp.chmod(_FILE_MODE)
        tmp.rename(path)
    except Exception:
        tmp.unlink(missing_ok=True)
        logger.error("Failed to write %s", path)
        raise

    logger.debug("Wrote %d bytes to %s", len(content), path)
    return WriteResult.success(path)
