#!/usr/bin/env python3
"""
Docset assembly
===============

Post-processes every rendered document of a docset and writes the result
through the virtual file layer:

1) Resolve inputs across the docset folder and its fallback folders.
2) HTML: strip disallowed markup, hide CodePen rerun buttons, tag and
   localize links, then extract bookmarks and word counts.
3) Everything else: copied to the output folder as-is.
4) metadata.json: per-document bookmarks, word counts and provenance.
"""
import json
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from tqdm import tqdm

from . import config
from .errors import BuildError
from .file_layer import VirtualFileLayer, create_file_layer
from .html_rewriter import add_link_type, remove_rerun_codepen_iframes, strip_tags
from .metadata import count_word, get_bookmarks, load_html
from .paths import RelativePath


@dataclass
class ProcessedDocument:
    path: RelativePath
    html: str
    bookmarks: List[str]
    word_count: int
    properties: Dict[str, str] = field(default_factory=dict)

    def to_metadata(self) -> dict:
        return {
            'bookmarks': self.bookmarks,
            'word_count': self.word_count,
            'properties': dict(sorted(self.properties.items())),
        }


@dataclass
class BuildReport:
    processed: List[RelativePath] = field(default_factory=list)
    copied: List[RelativePath] = field(default_factory=list)
    failed: List[Tuple[RelativePath, str]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed


def is_html(path: RelativePath) -> bool:
    return path.suffix.lower() in config.HTML_SUFFIXES


def postprocess_html(html: str, locale: str) -> str:
    """Run the per-document rewriting chain."""
    html = strip_tags(html)
    html = remove_rerun_codepen_iframes(html)
    return add_link_type(html, locale)


def process_document(layer: VirtualFileLayer, path, locale: str) -> ProcessedDocument:
    path = RelativePath(path)
    with layer.open_read(path) as f:
        raw = f.read().decode('utf-8', errors='replace')

    html = postprocess_html(raw, locale)
    soup = load_html(html)
    return ProcessedDocument(
        path=path,
        html=html,
        bookmarks=get_bookmarks(soup),
        word_count=count_word(soup),
        properties=dict(layer.get_properties(path)),
    )


def write_document(layer: VirtualFileLayer, doc: ProcessedDocument) -> None:
    with layer.create(doc.path) as f:
        f.write(doc.html.encode('utf-8'))


def _process_and_write(layer, path, locale) -> ProcessedDocument:
    doc = process_document(layer, path, locale)
    write_document(layer, doc)
    return doc


def write_metadata(layer: VirtualFileLayer, documents: List[ProcessedDocument]) -> None:
    manifest = {str(d.path): d.to_metadata() for d in sorted(documents, key=lambda d: d.path)}
    with layer.create(config.METADATA_FILENAME) as f:
        f.write(json.dumps(manifest, indent=2, ensure_ascii=False).encode('utf-8'))


def _fail(report: BuildReport, options: config.BuildOptions, path, error: Exception) -> None:
    print(f"   [FAIL] {path}: {error}")
    report.failed.append((path, str(error)))
    if not options.continue_with_error:
        raise BuildError(f"Failed to process {path}: {error}") from error


def build(options: config.BuildOptions) -> BuildReport:
    """Assemble the whole docset described by options."""
    is_valid, message = options.validate()
    if not is_valid:
        raise BuildError(message)

    properties = {'repository': options.repository} if options.repository else None
    report = BuildReport()
    documents = []

    with create_file_layer(options.docset_folder, options.fallback_folders,
                           options.output_folder, properties) as layer:
        inputs = layer.list_inputs()
        html_inputs = [p for p in inputs if is_html(p)]
        other_inputs = [p for p in inputs if not is_html(p)]
        print(f"--> Found {len(inputs)} input files ({len(html_inputs)} HTML) "
              f"across {1 + len(options.fallback_folders)} content roots")

        # 1. Copy non-HTML content
        for path in other_inputs:
            if path == config.METADATA_FILENAME:
                print(f"   [WARN] Skipping {path}: name is reserved for the metadata manifest")
                continue
            try:
                layer.copy(path, path)
                report.copied.append(path)
            except OSError as e:
                _fail(report, options, path, e)
        print(f"   [Copy] {len(report.copied)} files")

        # 2. Post-process HTML documents in parallel
        with ThreadPoolExecutor(max_workers=options.workers) as pool:
            futures = {pool.submit(_process_and_write, layer, p, options.locale): p for p in html_inputs}
            try:
                for future in tqdm(as_completed(futures), total=len(futures), desc="Documents", unit="doc"):
                    path = futures[future]
                    try:
                        doc = future.result()
                    except Exception as e:
                        _fail(report, options, path, e)
                        continue
                    documents.append(doc)
                    report.processed.append(path)
            except BuildError:
                for pending in futures:
                    pending.cancel()
                raise

        # 3. Metadata manifest
        write_metadata(layer, documents)
        print(f"   [Metadata] {config.METADATA_FILENAME}: {len(documents)} documents")

    report.processed.sort()
    if report.failed:
        print(f"\n[WARNING] {len(report.failed)} files failed.")
    else:
        print(f"\n[SUCCESS] {len(report.processed)} documents assembled.")
    return report
