#!/usr/bin/env python3
"""
Docset Assembler
================

Resolves a docset across its content roots and post-processes the rendered
HTML into the output folder.

Usage:
    python run_doc_assembly.py --docset-folder docs --output-folder _site
    python run_doc_assembly.py --docset-folder zh-cn/docs --fallback-folders en-us/docs \\
        --locale zh-cn --output-folder _site

Features:
    - Layered content roots (docset first, fallback folders after)
    - data-linktype tagging and locale-prefixed absolute links
    - <script>/<style>/<link> and style attribute stripping
    - CodePen rerun button hiding
    - Bookmark and word count manifest (metadata.json)
"""

import sys
import os

# Ensure the scripts directory is in the path
script_dir = os.path.dirname(os.path.abspath(__file__))
if script_dir not in sys.path:
    sys.path.insert(0, script_dir)


def main():
    """Main entry point for the docset assembler."""
    from doc_assembly import run_with_args
    return run_with_args()


if __name__ == "__main__":
    sys.exit(main())
