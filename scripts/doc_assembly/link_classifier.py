#!/usr/bin/env python3
"""
Link classification for href/src values.

Every value lands in exactly one LinkType; malformed values degrade to
RELATIVE_PATH and are never rejected, so one bad attribute cannot fail a
document.
"""
import ipaddress
import re
from enum import Enum
from typing import Optional, Tuple
from urllib.parse import SplitResult, urlsplit

from .config import CULTURE_NAMES


class LinkType(str, Enum):
    RELATIVE_PATH = "relative-path"
    SELF_BOOKMARK = "self-bookmark"
    ABSOLUTE_PATH = "absolute-path"
    EXTERNAL = "external"

    def __str__(self):
        return self.value


_SCHEME = re.compile(r'^[a-zA-Z][a-zA-Z0-9+.\-]*:')
_INVALID_CHARS = re.compile(r'[\s\x00-\x1f\x7f]')
_HOST = re.compile(r'^[^\[\]@:/?#]*$')


def _valid_authority(parts: SplitResult) -> bool:
    host = parts.netloc.rpartition('@')[2]
    if host.startswith('['):
        literal, _, rest = host[1:].partition(']')
        try:
            ipaddress.IPv6Address(literal)
        except ValueError:
            return False
        return rest == '' or re.fullmatch(r':\d*', rest) is not None
    host = host.split(':', 1)[0]
    if not host or not _HOST.match(host):
        return False
    # raises ValueError on a non-numeric or out of range port
    parts.port
    return True


def parse_absolute_uri(value: str) -> Optional[SplitResult]:
    """
    Strictly parse an absolute URI ('scheme:...' or protocol-relative '//host').
    Returns None when value is not one; never raises.
    """
    if not value or _INVALID_CHARS.search(value):
        return None
    if not (_SCHEME.match(value) or value.startswith('//')):
        return None
    try:
        parts = urlsplit(value)
        if parts.netloc or value.startswith('//') or '//' in value[:len(parts.scheme) + 3]:
            if not _valid_authority(parts):
                return None
        elif not parts.path and not parts.query:
            return None
        if '[' in parts.path or ']' in parts.path:
            return None
    except ValueError:
        return None
    return parts


def _has_locale_segment(value: str, locale: str) -> bool:
    # only a full directory segment counts: '/de-de/a', not '/de-de' or '/how-to/a'
    m = re.match(r'[^/\\?#]+(?=[/\\])', value[1:])
    if m is None:
        return False
    segment = m.group(0).lower()
    return segment in CULTURE_NAMES or segment == locale.lower()


def classify_link(value: str, locale: str) -> Tuple[LinkType, str]:
    """
    Classify an href/src value and return (link_type, rewritten_value).

    Only ABSOLUTE_PATH values are rewritten: the locale is inserted after the
    leading separator, e.g. '/a' -> '/zh-cn/a' and '\\a#x' -> '/zh-cn\\a#x'.
    A value whose first segment already is a locale is left unchanged.
    """
    if value.startswith('#'):
        return LinkType.SELF_BOOKMARK, value

    if parse_absolute_uri(value) is not None:
        return LinkType.EXTERNAL, value

    if value.startswith(('/', '\\')):
        if _has_locale_segment(value, locale):
            return LinkType.ABSOLUTE_PATH, value
        return LinkType.ABSOLUTE_PATH, f"/{locale}{value}"

    return LinkType.RELATIVE_PATH, value
