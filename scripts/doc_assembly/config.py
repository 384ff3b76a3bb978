#!/usr/bin/env python3
"""
Document assembly configuration and build options.
Shared across all doc_assembly modules.
"""
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

# --- LINK REWRITING ---
LINK_TYPE_ATTRIBUTE = "data-linktype"
CODEPEN_MARKER = "//codepen.io/"
CODEPEN_RERUN_SUFFIX = "&rerun-position=hidden&"

# Elements removed whole by strip_tags, plus the attribute dropped everywhere
STRIPPED_TAGS = ("style", "link", "script")
STRIPPED_ATTRIBUTE = "style"

# Attributes substituted by transform_links
LINK_ATTRIBUTES = ("href", "src")

# Culture names recognized as an existing locale segment of an absolute link,
# e.g. the 'de-de' of /de-de/a. Compared lower-cased.
CULTURE_NAMES = frozenset("""
    ar-ae ar-eg ar-sa bg-bg bs-latn-ba ca-es cs-cz cy-gb da-dk de-at de-ch de-de
    el-gr en-au en-ca en-gb en-ie en-in en-my en-nz en-sg en-us en-za es-ar es-cl
    es-co es-es es-mx es-pe es-us es-419 et-ee eu-es fi-fi fil-ph fr-be fr-ca
    fr-ch fr-fr ga-ie gl-es he-il hi-in hr-hr hu-hu id-id is-is it-ch it-it ja-jp
    ka-ge kk-kz ko-kr lb-lu lt-lt lv-lv mk-mk ms-my mt-mt nb-no nl-be nl-nl pl-pl
    pt-br pt-pt ro-ro ru-ru sk-sk sl-si sr-cyrl-rs sr-latn-rs sv-se ta-in te-in
    th-th tr-tr uk-ua ur-pk vi-vn zh-cn zh-hk zh-mo zh-sg zh-tw zh-hans zh-hant
""".split())

# --- BUILD ---
DEFAULT_LOCALE = "en-us"
DEFAULT_WORKERS = 4
HTML_SUFFIXES = (".html", ".htm")
METADATA_FILENAME = "metadata.json"


def parse_folder_list(value: Optional[str]) -> List[Path]:
    """Split a ',' or ';' separated folder list, dropping empty entries."""
    if not value:
        return []
    return [Path(p.strip()) for p in re.split(r'[,;]', value) if p.strip()]


@dataclass
class BuildOptions:
    docset_folder: Path
    output_folder: Path
    locale: str = DEFAULT_LOCALE
    fallback_folders: List[Path] = field(default_factory=list)
    repository: str = ""
    workers: int = DEFAULT_WORKERS
    continue_with_error: bool = False

    def validate(self) -> tuple:
        """
        Checks the options before any file is touched.
        Returns: (is_valid: bool, error_message: str)
        """
        if not self.docset_folder or not Path(self.docset_folder).is_dir():
            return False, f"Docset folder does not exist: {self.docset_folder}"

        if not self.locale or not self.locale.strip():
            return False, "Locale must not be empty"

        for folder in self.fallback_folders:
            if not Path(folder).is_dir():
                return False, f"Fallback folder does not exist: {folder}"

        if Path(self.output_folder).resolve() == Path(self.docset_folder).resolve():
            return False, "Output folder must differ from the docset folder"

        if self.workers < 1:
            return False, f"Worker count must be positive, got {self.workers}"

        return True, ""
