#!/usr/bin/env python3
"""
Search and navigation metadata extracted from rendered documents:
inner text, word counts and bookmarks.
"""
import re
from typing import Iterator, List

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.element import PreformattedString


# Maximal runs of letters/digits
WORD_PATTERN = re.compile(r'[^\W_]+')


def load_html(html: str):
    """Parse an HTML string into a node usable by the extractors below."""
    # keep class/rel values as plain strings
    return BeautifulSoup(html, 'html.parser', multi_valued_attributes=None)


def _text_nodes(node) -> Iterator[str]:
    # Comments, doctypes, CDATA and processing instructions are PreformattedString
    if isinstance(node, NavigableString):
        if not isinstance(node, PreformattedString):
            yield str(node)
        return
    for s in node.descendants:
        if isinstance(s, NavigableString) and not isinstance(s, PreformattedString):
            yield str(s)


def get_inner_text(node) -> str:
    return ''.join(_text_nodes(node))


def count_word(node) -> int:
    """
    Count words of every text node below node, <title> included.
    Text nodes are counted separately, so '<p>a</p>b' is two words even
    though the inner text reads 'ab'.
    """
    return sum(len(WORD_PATTERN.findall(text)) for text in _text_nodes(node))


def get_bookmarks(node) -> List[str]:
    """
    Bookmarks in document order: every id, plus the name of anchors that
    have no id. Duplicates are kept.
    """
    tags = node.find_all(True) if isinstance(node, Tag) else []
    if isinstance(node, Tag) and node.name != '[document]':
        tags.insert(0, node)

    bookmarks = []
    for tag in tags:
        bookmark = tag.get('id')
        if bookmark is None and tag.name == 'a':
            bookmark = tag.get('name')
        if bookmark is not None:
            bookmarks.append(bookmark)
    return bookmarks
