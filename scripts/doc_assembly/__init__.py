#!/usr/bin/env python3
"""
Document Assembly Package
=========================

This package is the document-assembly layer of a multi-source documentation
build: it resolves each logical document across layered content roots and
post-processes the rendered HTML (link tagging and localization, markup
sanitizing, bookmark and word count extraction).

Modules:
    - config: Constants and build options
    - errors: File layer and build exceptions
    - paths: RelativePath and PathMapping value types
    - readers: Content roots and their layered composition
    - writers: Output folder writer
    - file_layer: VirtualFileLayer, the single file I/O entry point
    - link_classifier: href/src classification and localization
    - html_rewriter: HTML transforms and text-level link substitution
    - metadata: Inner text, word count and bookmark extraction
    - core: Per-document post-processing and the docset build

Usage:
    from doc_assembly import run
    run(BuildOptions(docset_folder=Path("docs"), output_folder=Path("_site"), locale="zh-cn"))
"""

__version__ = "1.0.0"

import sys


def run(options) -> int:
    """
    Run the full assembly for one docset.

    Returns the process exit code: 0 on success, 1 if any file failed,
    2 if the options are invalid.
    """
    from . import core
    from .errors import BuildError

    is_valid, message = options.validate()
    if not is_valid:
        print(f"ERROR: {message}", file=sys.stderr)
        return 2

    print(f"--> Assembling {options.docset_folder} -> {options.output_folder} (locale: {options.locale})")
    try:
        report = core.build(options)
    except BuildError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1
    return 0 if report.ok else 1


def run_with_args(argv=None) -> int:
    """
    Run the assembly with command-line arguments.
    This is the CLI entry point.
    """
    import argparse
    from pathlib import Path

    from .config import DEFAULT_LOCALE, DEFAULT_WORKERS, BuildOptions, parse_folder_list

    parser = argparse.ArgumentParser(
        description="Assemble a docset: resolve content roots and post-process rendered HTML.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    doc-assembly --docset-folder docs --output-folder _site
    doc-assembly --docset-folder zh-cn/docs --fallback-folders en-us/docs --locale zh-cn --output-folder _site
        """
    )
    parser.add_argument("--docset-folder", required=True, type=Path, help="Highest precedence content root")
    parser.add_argument("--output-folder", required=True, type=Path, help="Folder receiving the assembled files")
    parser.add_argument("--locale", default=DEFAULT_LOCALE, help="Locale inserted into absolute links")
    parser.add_argument("--fallback-folders", default="",
                        help="',' or ';' separated content roots, in precedence order")
    parser.add_argument("--repository", default="", help="Repository name recorded as provenance")
    parser.add_argument("--workers", default=DEFAULT_WORKERS, type=int, help="Parallel document workers")
    parser.add_argument("--continue-with-error", action="store_true",
                        help="Skip failing files instead of aborting the build")

    args = parser.parse_args(argv)
    options = BuildOptions(
        docset_folder=args.docset_folder,
        output_folder=args.output_folder,
        locale=args.locale,
        fallback_folders=parse_folder_list(args.fallback_folders),
        repository=args.repository,
        workers=args.workers,
        continue_with_error=args.continue_with_error,
    )
    return run(options)


# Export key functions and classes for direct imports
from .config import (
    BuildOptions,
    parse_folder_list,
)

from .errors import (
    BuildError,
    FileLayerError,
    LayerDisposedError,
    LayerNotWritableError,
    LogicalPathNotFoundError,
)

from .paths import (
    PathMapping,
    RelativePath,
)

from .readers import (
    LayeredReader,
    RootFolderReader,
)

from .writers import (
    OutputFolderWriter,
)

from .file_layer import (
    LayerState,
    VirtualFileLayer,
    create_file_layer,
)

from .link_classifier import (
    LinkType,
    classify_link,
)

from .html_rewriter import (
    LinkSite,
    add_link_type,
    remove_rerun_codepen_iframes,
    strip_tags,
    transform_html,
    transform_links,
)

from .metadata import (
    count_word,
    get_bookmarks,
    get_inner_text,
    load_html,
)


__all__ = [
    # Main entry points
    'run',
    'run_with_args',
    # Config
    'BuildOptions',
    'parse_folder_list',
    # Errors
    'BuildError',
    'FileLayerError',
    'LayerDisposedError',
    'LayerNotWritableError',
    'LogicalPathNotFoundError',
    # File layer
    'PathMapping',
    'RelativePath',
    'LayeredReader',
    'RootFolderReader',
    'OutputFolderWriter',
    'LayerState',
    'VirtualFileLayer',
    'create_file_layer',
    # Links
    'LinkType',
    'classify_link',
    # HTML
    'LinkSite',
    'add_link_type',
    'remove_rerun_codepen_iframes',
    'strip_tags',
    'transform_html',
    'transform_links',
    # Metadata
    'count_word',
    'get_bookmarks',
    'get_inner_text',
    'load_html',
]
