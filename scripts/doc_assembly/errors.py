#!/usr/bin/env python3
"""
Exceptions raised by the virtual file layer and the docset build.
Link and markup anomalies never raise; see link_classifier and html_rewriter.
"""


class FileLayerError(Exception):
    """Base class for virtual file layer failures."""


class LogicalPathNotFoundError(FileLayerError, FileNotFoundError):
    """No content root resolves the logical path."""

    def __init__(self, path):
        self.path = path
        super().__init__(f"File ({path}) not found.")


class LayerNotWritableError(FileLayerError):
    """A write operation was called on a layer without an output writer."""

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"Cannot {operation}: file layer has no output writer.")


class LayerDisposedError(FileLayerError):
    def __init__(self):
        super().__init__("File layer has been disposed.")


class BuildError(Exception):
    """The docset build was aborted."""
