#!/usr/bin/env python3
"""
HTML rewriting transforms applied to every rendered document.

Documents are never re-serialized. transform_html() scans the raw text for
start tags, hands each one to a transform as a StartTag, and the transform
records span edits (replace a value, insert an attribute, cut an attribute
or a whole element). The edits are applied to the original string, so every
byte no transform touched survives as the author wrote it: spacing,
attribute order, quote style, entities and void-tag syntax.

Comments and the raw text inside <script>/<style> are never scanned.
"""
import html as html_lib
import re
from typing import Callable, List, NamedTuple, Optional

from . import config
from .link_classifier import LinkType, classify_link

VOID_ELEMENTS = frozenset((
    'area', 'base', 'br', 'col', 'embed', 'hr', 'img', 'input',
    'link', 'meta', 'param', 'source', 'track', 'wbr',
))
RAW_TEXT_ELEMENTS = ('script', 'style')

_COMMENT = re.compile(r'<!--.*?(?:-->|$)', re.DOTALL)
_TAG_OPEN = re.compile(r'<([a-zA-Z][^\s/>]*)')
_SEPARATOR = re.compile(r'[\s/]*')
_ATTR_NAME = re.compile(r'[^\s/>][^\s/>=]*')
_ATTR_EQ = re.compile(r'\s*=\s*')
_BARE_VALUE = re.compile(r'[^\s>]*')
_NEEDS_QUOTES = re.compile(r'''[\s"'=<>`]''')


def encode_value(value: str, quote: str) -> str:
    """Escape value for an attribute delimited by quote ('' for unquoted)."""
    value = value.replace('&', '&amp;').replace('<', '&lt;')
    if quote == '"':
        return value.replace('"', '&quot;')
    if quote == "'":
        return value.replace("'", '&#39;')
    return value


class Attribute(NamedTuple):
    """
    One attribute of a start tag with its source offsets.

    start covers the separator before the name, so cutting start:end removes
    the attribute cleanly. value_start/value_end delimit the raw value
    without quotes; both are None for a value-less attribute.
    """
    name: str
    value: str
    start: int
    end: int
    value_start: Optional[int]
    value_end: Optional[int]
    quote: Optional[str]


class _Edit(NamedTuple):
    start: int
    end: int
    text: str
    seq: int


class StartTag:
    """A start tag found in the raw text; mutations are recorded as edits."""

    def __init__(self, html: str, raw_name: str, start: int, end: int,
                 attributes: List[Attribute], self_closing: bool, edits: list):
        self.html = html
        self.raw_name = raw_name
        self.name = raw_name.lower()
        self.start = start
        self.end = end
        self.attributes = attributes
        self.self_closing = self_closing
        self.removed_until = None
        self._edits = edits

    def find(self, name: str) -> Optional[Attribute]:
        """First attribute called name, compared case-insensitively."""
        name = name.lower()
        for attr in self.attributes:
            if attr.name.lower() == name:
                return attr
        return None

    def get(self, name: str, default=None):
        attr = self.find(name)
        return default if attr is None else attr.value

    def _edit(self, start: int, end: int, text: str) -> None:
        self._edits.append(_Edit(start, end, text, len(self._edits)))

    def set_value(self, attr: Attribute, value: str) -> None:
        if attr.quote is None:
            self._edit(attr.end, attr.end, '="' + encode_value(value, '"') + '"')
        elif attr.quote == '' and (value == '' or _NEEDS_QUOTES.search(value)):
            self._edit(attr.value_start, attr.value_end, '"' + encode_value(value, '"') + '"')
        else:
            self._edit(attr.value_start, attr.value_end, encode_value(value, attr.quote))

    def insert_into_value(self, attr: Attribute, offset: int, text: str) -> None:
        """Insert already-encoded text at offset within the raw value."""
        if attr.quote is None:
            self.set_value(attr, text)
            return
        position = attr.value_start + offset if offset >= 0 else attr.value_end
        self._edit(position, position, text)

    def add_attribute(self, name: str, value: str, after: Optional[Attribute] = None) -> None:
        """Insert name=value after another attribute, in that attribute's quote style."""
        if after is None and self.attributes:
            after = self.attributes[-1]
        quote = after.quote if after is not None and after.quote else '"'
        position = after.end if after is not None else self.start + 1 + len(self.raw_name)
        self._edit(position, position, f" {name}={quote}{encode_value(value, quote)}{quote}")

    def remove_attribute(self, attr: Attribute) -> None:
        self._edit(attr.start, attr.end, '')

    def decompose(self) -> None:
        """Cut the whole element: start tag, content and end tag."""
        end = _element_end(self.html, self)
        self._edit(self.start, end, '')
        self.removed_until = end


def _parse_start_tag(html: str, start: int, edits: list) -> Optional[StartTag]:
    m = _TAG_OPEN.match(html, start)
    if m is None:
        return None
    pos = m.end()
    attributes = []
    while True:
        attr_start = pos
        pos = _SEPARATOR.match(html, pos).end()
        if pos >= len(html):
            return None
        if html[pos] == '>':
            self_closing = '/' in html[attr_start:pos]
            return StartTag(html, m.group(1), start, pos + 1, attributes, self_closing, edits)

        name = _ATTR_NAME.match(html, pos)
        pos = name.end()
        value_start = value_end = quote = None
        eq = _ATTR_EQ.match(html, pos)
        if eq:
            pos = eq.end()
            if pos < len(html) and html[pos] in '"\'':
                close = html.find(html[pos], pos + 1)
                if close == -1:
                    return None
                quote, value_start, value_end = html[pos], pos + 1, close
                pos = close + 1
            else:
                bare = _BARE_VALUE.match(html, pos)
                quote, value_start, value_end = '', pos, bare.end()
                pos = bare.end()

        raw = html[value_start:value_end] if quote is not None else ''
        attributes.append(Attribute(name.group(0), html_lib.unescape(raw), attr_start, pos,
                                    value_start, value_end, quote))


def _element_end(html: str, tag: StartTag) -> int:
    """
    End offset of the element opened by tag. An element whose end tag is
    missing ends with its start tag.
    """
    if tag.name in VOID_ELEMENTS or tag.self_closing:
        return tag.end
    if tag.name in RAW_TEXT_ELEMENTS:
        close = re.compile(r'</' + tag.name + r'\s*>', re.IGNORECASE).search(html, tag.end)
        return close.end() if close else tag.end

    depth = 1
    same_name = re.compile(r'<(/?)' + re.escape(tag.name) + r'(?=[\s/>])[^>]*>', re.IGNORECASE)
    for m in same_name.finditer(html, tag.end):
        if m.group(1):
            depth -= 1
            if depth == 0:
                return m.end()
        elif not m.group(0).endswith('/>'):
            depth += 1
    return tag.end


def _apply_edits(html: str, edits: List[_Edit]) -> str:
    out = []
    cursor = 0
    for edit in sorted(edits, key=lambda e: (e.start, e.seq)):
        if edit.start < cursor:
            # inside a span an earlier edit already replaced
            continue
        out.append(html[cursor:edit.start])
        out.append(edit.text)
        cursor = edit.end
    out.append(html[cursor:])
    return ''.join(out)


def transform_html(html: str, transform: Callable[[StartTag], None]) -> str:
    """Apply transform(tag) to every start tag in document order."""
    edits = []
    pos = 0
    while True:
        lt = html.find('<', pos)
        if lt == -1:
            break
        comment = _COMMENT.match(html, lt)
        if comment:
            pos = comment.end()
            continue
        tag = _parse_start_tag(html, lt, edits)
        if tag is None:
            pos = lt + 1
            continue

        transform(tag)
        if tag.removed_until is not None:
            pos = tag.removed_until
            continue
        pos = tag.end
        if tag.name in RAW_TEXT_ELEMENTS and not tag.self_closing:
            close = re.compile(r'</' + tag.name + r'\s*>', re.IGNORECASE).search(html, pos)
            pos = close.start() if close else len(html)

    return _apply_edits(html, edits) if edits else html


# -----------------------------------------------------------------------------
# Node transforms
# -----------------------------------------------------------------------------

def add_link_type_node(tag: StartTag, locale: str) -> None:
    href = tag.find('href')
    if href is None:
        return
    link_type, rewritten = classify_link(href.value, locale)
    if link_type is LinkType.ABSOLUTE_PATH and rewritten != href.value:
        # the rewrite only ever prefixes the original value
        prefix = rewritten[:len(rewritten) - len(href.value)]
        tag.insert_into_value(href, 0, encode_value(prefix, href.quote or ''))

    existing = tag.find(config.LINK_TYPE_ATTRIBUTE)
    if existing is not None:
        tag.set_value(existing, link_type.value)
    else:
        tag.add_attribute(config.LINK_TYPE_ATTRIBUTE, link_type.value, after=href)


def remove_rerun_codepen_iframe_node(tag: StartTag) -> None:
    if tag.name != 'iframe':
        return
    src = tag.find('src')
    if src is not None and config.CODEPEN_MARKER in src.value:
        tag.insert_into_value(src, -1, config.CODEPEN_RERUN_SUFFIX)


def strip_tags_node(tag: StartTag) -> None:
    if tag.name in config.STRIPPED_TAGS:
        tag.decompose()
        return
    for attr in tag.attributes:
        if attr.name.lower() == config.STRIPPED_ATTRIBUTE:
            tag.remove_attribute(attr)


# -----------------------------------------------------------------------------
# Document transforms
# -----------------------------------------------------------------------------

def add_link_type(html: str, locale: str) -> str:
    """Tag every href with data-linktype; localize absolute-path hrefs."""
    return transform_html(html, lambda tag: add_link_type_node(tag, locale))


def remove_rerun_codepen_iframes(html: str) -> str:
    """Hide the rerun button of embedded CodePen iframes."""
    return transform_html(html, remove_rerun_codepen_iframe_node)


def strip_tags(html: str) -> str:
    """Drop <style>, <link>, <script> elements and every style attribute."""
    return transform_html(html, strip_tags_node)


# -----------------------------------------------------------------------------
# Link substitution
# -----------------------------------------------------------------------------

class LinkSite(NamedTuple):
    """One href/src occurrence handed to a transform_links callback."""
    tag: str
    attribute: str
    value: str
    position: int


def transform_links(html: str, transform: Callable[[LinkSite], Optional[str]]) -> str:
    """
    Replace every href/src value with transform(site).

    Only the characters of each value change; a None result becomes ''.
    """
    def substitute(tag: StartTag) -> None:
        for attr in tag.attributes:
            if attr.name.lower() not in config.LINK_ATTRIBUTES:
                continue
            new_value = transform(LinkSite(tag.raw_name, attr.name, attr.value, attr.start))
            tag.set_value(attr, '' if new_value is None else new_value)

    return transform_html(html, substitute)
