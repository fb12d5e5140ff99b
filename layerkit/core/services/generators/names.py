"""
Name resolver — raw class name → namespace, identifier and file path.

``Blog/PostRepository`` under root ``App`` and sub-namespace
``Repositories`` becomes:

    namespace   App\\Repositories\\Blog
    class       PostRepository
    file        <source_root>/repositories/Blog/PostRepository.py

Sub-namespace segments map to the kind's configured directory; segments
typed by the user are kept verbatim but may not reach into another
kind's directory (``repositories/interfaces``).  Pure computation —
nothing here touches the filesystem.
"""

from __future__ import annotations

import keyword
import re
from collections.abc import Mapping
from pathlib import Path

from layerkit.core.errors import InvalidNameError
from layerkit.core.models.artifact import ClassSpec
from layerkit.core.models.config import LayerkitConfig

# Any of these separate namespace segments in user input
_DELIMITERS = re.compile(r"[\\/.]")

_LEADING_DELIMITERS = re.compile(r"^[\\/.]+")

# ASCII identifiers only — every segment becomes a directory or file name
_SEGMENT = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def split_namespace(value: str) -> list[str]:
    """Split a namespace written with any delimiter into its segments."""
    value = value.strip()
    if not value:
        return []
    return _DELIMITERS.split(value.strip("\\/."))


def _check_segment(segment: str, raw_name: str) -> None:
    if not segment:
        raise InvalidNameError(f"Invalid class name {raw_name!r}: empty namespace segment")
    if not _SEGMENT.match(segment):
        raise InvalidNameError(
            f"Invalid class name {raw_name!r}: {segment!r} is not a valid identifier"
        )
    if keyword.iskeyword(segment):
        raise InvalidNameError(f'The name "{segment}" is reserved by Python.')


class NameResolver:
    """Resolves class names under one source root.

    Args:
        source_root: Directory the root namespace maps to.
        extension: Source file extension, including the dot.
        separator: Separator used when joining namespace segments.
        directories: Sub-namespace → directory overrides.  Keys are
            normalised, so ``Repositories\\Interfaces`` and
            ``Repositories.Interfaces`` name the same entry.  A
            sub-namespace without an entry maps to its lowercased
            segments.
    """

    def __init__(
        self,
        source_root: Path,
        *,
        extension: str = ".py",
        separator: str = "\\",
        directories: Mapping[str, str] | None = None,
    ) -> None:
        self.source_root = source_root
        self.extension = extension
        self.separator = separator
        self._directories = {
            tuple(split_namespace(ns)): tuple(p for p in directory.split("/") if p)
            for ns, directory in (directories or {}).items()
        }

    @classmethod
    def from_config(cls, config: LayerkitConfig) -> NameResolver:
        return cls(
            config.source_dir,
            extension=config.extension,
            separator=config.namespace_separator,
            directories={k.namespace: k.directory for k in config.kinds.values()},
        )

    def directory_for(self, sub_namespace: str) -> tuple[str, ...]:
        """Directory segments for a sub-namespace."""
        parts = tuple(split_namespace(sub_namespace))
        if parts in self._directories:
            return self._directories[parts]
        return tuple(p.lower() for p in parts)

    def _check_shadowing(
        self, directory: tuple[str, ...], prefix: list[str], raw_name: str
    ) -> None:
        # repositories/ + "interfaces/Foo" would land in another kind's
        # directory; compared case-insensitively for case-folding filesystems
        typed = [p.lower() for p in prefix]
        base = [p.lower() for p in directory]
        for other in self._directories.values():
            nested = [p.lower() for p in other]
            if len(nested) <= len(base) or nested[: len(base)] != base:
                continue
            rest = nested[len(base):]
            if typed[: len(rest)] == rest:
                raise InvalidNameError(
                    f"Invalid class name {raw_name!r}: "
                    f"{'/'.join(other)} is reserved for another kind"
                )

    def resolve(self, raw_name: str, root_namespace: str, sub_namespace: str = "") -> ClassSpec:
        """Resolve ``raw_name`` into a ClassSpec.

        Raises:
            InvalidNameError: If the name (or the root namespace) is empty,
                contains an empty segment, a non-identifier character, a
                reserved word, or a directory belonging to another kind.
        """
        name = (raw_name or "").strip()
        if not name:
            raise InvalidNameError("Class name must not be empty")

        root_parts = split_namespace(root_namespace)
        if not root_parts:
            raise InvalidNameError("Root namespace must not be empty")
        for segment in root_parts:
            _check_segment(segment, root_namespace)

        sub_parts = split_namespace(sub_namespace)
        for segment in sub_parts:
            _check_segment(segment, sub_namespace)

        leading = _LEADING_DELIMITERS.match(name)
        if leading:
            if ".." in leading.group(0):
                raise InvalidNameError(f"Invalid class name {raw_name!r}: '..' is not allowed")
            name = name[leading.end():]

        parts = _DELIMITERS.split(name)
        for segment in parts:
            _check_segment(segment, raw_name)

        # Already fully qualified (App\Repositories\Blog\Post) — drop the prefix
        qualified = root_parts + sub_parts
        if len(parts) > len(qualified) and parts[: len(qualified)] == qualified:
            parts = parts[len(qualified):]

        *prefix, identifier = parts
        directory = self.directory_for(sub_namespace)
        self._check_shadowing(directory, prefix, raw_name)

        namespace = self.separator.join(qualified + prefix)
        file_path = self.source_root.joinpath(
            *directory,
            *prefix,
            identifier + self.extension,
        )

        return ClassSpec(
            raw_name=raw_name,
            root_namespace=root_namespace,
            namespace=namespace,
            short_class_name=identifier,
            file_path=file_path,
            segments=tuple(prefix),
            separator=self.separator,
        )
