#!/usr/bin/env python3
"""
Logical paths and their physical mappings.

A RelativePath identifies a document independently of the content root that
stores it; a PathMapping is what a reader resolves it to.
"""
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Mapping, Optional, Tuple


class RelativePath(str):
    """
    Normalized, root-relative, '/'-separated logical path.

    Backslashes are accepted as separators, so Windows-style and posix-style
    spellings of the same path compare equal:
        RelativePath('/docs/./a/b.md') == 'docs/a/b.md'
    """

    def __new__(cls, value):
        if isinstance(value, RelativePath):
            return value
        return super().__new__(cls, cls._normalize(str(value)))

    @staticmethod
    def _normalize(value: str) -> str:
        parts = []
        for segment in value.replace('\\', '/').split('/'):
            if segment in ('', '.'):
                continue
            if segment == '..':
                if not parts:
                    raise ValueError(f"Path escapes its content root: {value!r}")
                parts.pop()
                continue
            parts.append(segment)
        if not parts:
            raise ValueError(f"Empty relative path: {value!r}")
        return '/'.join(parts)

    @classmethod
    def from_physical(cls, root, physical_path) -> "RelativePath":
        """Logical path of a physical file below root."""
        return cls(Path(physical_path).relative_to(Path(root)).as_posix())

    @property
    def parts(self) -> Tuple[str, ...]:
        return tuple(self.split('/'))

    @property
    def name(self) -> str:
        return self.parts[-1]

    @property
    def suffix(self) -> str:
        return Path(self.name).suffix

    @property
    def parent(self) -> Optional["RelativePath"]:
        """Containing folder, None at the root."""
        if '/' not in self:
            return None
        return RelativePath(self.rsplit('/', 1)[0])

    def __truediv__(self, other) -> "RelativePath":
        return RelativePath(f"{self}/{other}")

    def __repr__(self) -> str:
        return f"RelativePath({str(self)!r})"


def _freeze(properties: Optional[Mapping[str, str]]) -> Mapping[str, str]:
    return MappingProxyType(dict(properties or {}))


@dataclass(frozen=True)
class PathMapping:
    physical_path: str
    properties: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self):
        # frozen: bypass __setattr__ to store the read-only view
        object.__setattr__(self, 'physical_path', str(self.physical_path))
        object.__setattr__(self, 'properties', _freeze(self.properties))
