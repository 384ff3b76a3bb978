#!/usr/bin/env python3
"""
Output writer: materializes files under a single output root.
"""
import shutil
from pathlib import Path

from .paths import PathMapping, RelativePath
from .readers import RootFolderReader


class OutputFolderWriter:

    def __init__(self, output_root):
        self.output_root = Path(output_root)

    def _target(self, path) -> Path:
        target = self.output_root.joinpath(*RelativePath(path).parts)
        target.parent.mkdir(parents=True, exist_ok=True)
        return target

    def create(self, path):
        """Open a new file for binary writing; missing folders are created."""
        return open(self._target(path), "wb")

    def copy(self, mapping: PathMapping, dest) -> None:
        """Duplicate the physical file behind mapping at dest."""
        shutil.copyfile(mapping.physical_path, self._target(dest))

    def create_reader(self) -> RootFolderReader:
        """Read-back view over everything written so far."""
        return RootFolderReader(self.output_root, {"origin": "output"})
