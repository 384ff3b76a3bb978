#!/usr/bin/env python3
"""
Virtual File Layer
==================

Single entry point for all file I/O of a build. Composes one content reader
(required) with an optional output writer:

    - Inputs are resolved through the reader (layered content roots).
    - Outputs are created or copied through the writer.
    - Once disposed, every operation except dispose() raises LayerDisposedError.

The layer holds no per-call state besides its LayerState, so reads may run
from many worker threads at once. Writes are safe for distinct destinations.
dispose() must only be called after in-flight operations have finished.
"""
import functools
from enum import Enum
from typing import Dict, Iterable, List, Mapping, Optional

from .errors import LayerDisposedError, LayerNotWritableError, LogicalPathNotFoundError
from .paths import PathMapping, RelativePath
from .readers import LayeredReader, RootFolderReader
from .writers import OutputFolderWriter


class LayerState(Enum):
    ACTIVE = "active"
    DISPOSED = "disposed"


def _guarded(operation: str, writes: bool = False):
    """Run the method only on an active layer (and, if writes, one with a writer)."""
    def decorator(method):
        @functools.wraps(method)
        def wrapper(self, *args, **kwargs):
            if self.state is LayerState.DISPOSED:
                raise LayerDisposedError()
            if writes and not self.can_write:
                raise LayerNotWritableError(operation)
            return method(self, *args, **kwargs)
        return wrapper
    return decorator


class VirtualFileLayer:

    def __init__(self, reader, writer=None):
        if reader is None:
            raise ValueError("VirtualFileLayer requires a reader")
        self.reader = reader
        self.writer = writer
        self.state = LayerState.ACTIVE

    @property
    def can_write(self) -> bool:
        return self.writer is not None

    @_guarded("list inputs")
    def list_inputs(self) -> List[RelativePath]:
        return list(self.reader.enumerate_files())

    @_guarded("list outputs", writes=True)
    def list_outputs(self) -> List[RelativePath]:
        return list(self.writer.create_reader().enumerate_files())

    @_guarded("check existence")
    def exists(self, path) -> bool:
        return self.reader.find_file(RelativePath(path)) is not None

    @_guarded("open for reading")
    def open_read(self, path):
        return open(self._resolve(path).physical_path, "rb")

    @_guarded("create", writes=True)
    def create(self, path):
        return self.writer.create(RelativePath(path))

    @_guarded("copy", writes=True)
    def copy(self, source, dest) -> None:
        self.writer.copy(self._resolve(source), RelativePath(dest))

    @_guarded("read properties")
    def get_properties(self, path) -> Mapping[str, str]:
        return self._resolve(path).properties

    def dispose(self) -> None:
        self.state = LayerState.DISPOSED

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.dispose()

    def _resolve(self, path) -> PathMapping:
        path = RelativePath(path)
        mapping = self.reader.find_file(path)
        if mapping is None:
            raise LogicalPathNotFoundError(path)
        return mapping


def create_file_layer(docset_folder, fallback_folders: Iterable = (),
                      output_folder=None, properties: Optional[Dict[str, str]] = None) -> VirtualFileLayer:
    """
    Build a layer over a docset and its fallback folders.

    Precedence follows argument order: the docset folder first, then each
    fallback folder as given. Every mapping is tagged with its 'root' and an
    'origin' of 'docset' or 'fallback'; extra properties (e.g. 'repository')
    are added to all of them.
    """
    extra = dict(properties or {})
    readers = [RootFolderReader(docset_folder, {**extra, "origin": "docset"})]
    readers += [RootFolderReader(f, {**extra, "origin": "fallback"}) for f in fallback_folders]
    writer = OutputFolderWriter(output_folder) if output_folder is not None else None
    return VirtualFileLayer(LayeredReader(readers), writer)
