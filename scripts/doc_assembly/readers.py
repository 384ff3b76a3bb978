#!/usr/bin/env python3
"""
Content readers: resolve logical paths against one or more content roots.

A LayeredReader is the ordered root set of a build. The docset folder comes
first and fallback folders after it; the first reader that has a path wins.
"""
from pathlib import Path
from typing import Dict, Iterable, Iterator, Optional

from .paths import PathMapping, RelativePath


class RootFolderReader:
    """Reads one physical folder tree."""

    def __init__(self, root, properties: Optional[Dict[str, str]] = None):
        self.root = Path(root)
        self.properties = {"root": str(self.root), **(properties or {})}

    def enumerate_files(self) -> Iterator[RelativePath]:
        if not self.root.is_dir():
            return
        for f in sorted(self.root.rglob("*")):
            if not f.is_file():
                continue
            # a file named a\b.html would normalize to a/b.html, which find_file cannot open
            if '\\' in f.relative_to(self.root).as_posix():
                continue
            yield RelativePath.from_physical(self.root, f)

    def find_file(self, path) -> Optional[PathMapping]:
        path = RelativePath(path)
        physical = self.root.joinpath(*path.parts)
        if not physical.is_file():
            return None
        return PathMapping(str(physical), self.properties)

    def __repr__(self):
        return f"RootFolderReader({str(self.root)!r})"


class LayeredReader:
    """Ordered composition of readers; highest precedence first."""

    def __init__(self, readers: Iterable):
        self.readers = tuple(readers)
        if not self.readers:
            raise ValueError("LayeredReader needs at least one reader")

    def enumerate_files(self) -> Iterator[RelativePath]:
        seen = set()
        for reader in self.readers:
            for path in reader.enumerate_files():
                if path not in seen:
                    seen.add(path)
                    yield path

    def find_file(self, path) -> Optional[PathMapping]:
        path = RelativePath(path)
        for reader in self.readers:
            mapping = reader.find_file(path)
            if mapping is not None:
                return mapping
        return None
