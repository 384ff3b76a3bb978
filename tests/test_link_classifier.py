import pytest

from doc_assembly import LinkType, classify_link
from doc_assembly.link_classifier import parse_absolute_uri


@pytest.mark.parametrize("href, link_type, rewritten", [
    ("a.md", LinkType.RELATIVE_PATH, "a.md"),
    ("(https://a)", LinkType.RELATIVE_PATH, "(https://a)"),
    ("#aA", LinkType.SELF_BOOKMARK, "#aA"),
    ("/a", LinkType.ABSOLUTE_PATH, "/zh-cn/a"),
    ("/Alink#fraGMENT", LinkType.ABSOLUTE_PATH, "/zh-cn/Alink#fraGMENT"),
    ("/Alink?quERY", LinkType.ABSOLUTE_PATH, "/zh-cn/Alink?quERY"),
    ("/a#x", LinkType.ABSOLUTE_PATH, "/zh-cn/a#x"),
    ("\\a#x", LinkType.ABSOLUTE_PATH, "/zh-cn\\a#x"),
    ("/de-de/a", LinkType.ABSOLUTE_PATH, "/de-de/a"),
    ("/DE-DE\\a", LinkType.ABSOLUTE_PATH, "/DE-DE\\a"),
    ("/es-419/a", LinkType.ABSOLUTE_PATH, "/es-419/a"),
    ("/how-to/guide", LinkType.ABSOLUTE_PATH, "/zh-cn/how-to/guide"),
    ("/get-started/a", LinkType.ABSOLUTE_PATH, "/zh-cn/get-started/a"),
    ("/de-de", LinkType.ABSOLUTE_PATH, "/zh-cn/de-de"),
    ("/de-de#top", LinkType.ABSOLUTE_PATH, "/zh-cn/de-de#top"),
    ("http://abc", LinkType.EXTERNAL, "http://abc"),
    ("https://abc", LinkType.EXTERNAL, "https://abc"),
    ("https://[abc]", LinkType.RELATIVE_PATH, "https://[abc]"),
    ("https://[::1]:8080/a", LinkType.EXTERNAL, "https://[::1]:8080/a"),
    ("mailto:someone@contoso.com", LinkType.EXTERNAL, "mailto:someone@contoso.com"),
    ("//codepen.io/a", LinkType.EXTERNAL, "//codepen.io/a"),
    ("https://", LinkType.RELATIVE_PATH, "https://"),
    ("http://a b", LinkType.RELATIVE_PATH, "http://a b"),
    ("http://host:port/", LinkType.RELATIVE_PATH, "http://host:port/"),
    ("", LinkType.RELATIVE_PATH, ""),
    ("../b/c.md?x#y", LinkType.RELATIVE_PATH, "../b/c.md?x#y"),
])
def test_classify_link(href, link_type, rewritten):
    assert classify_link(href, "zh-cn") == (link_type, rewritten)


def test_locale_is_inserted_verbatim():
    assert classify_link("/a", "ZH-cn") == (LinkType.ABSOLUTE_PATH, "/ZH-cn/a")


def test_absolute_path_rewrite_is_idempotent():
    _, once = classify_link("/docs/page", "zh-cn")
    _, twice = classify_link(once, "zh-cn")
    assert once == twice == "/zh-cn/docs/page"


def test_link_type_string_form():
    assert [str(t) for t in LinkType] == ["relative-path", "self-bookmark", "absolute-path", "external"]


@pytest.mark.parametrize("value", ["https://[abc]", "(https://a)", "a.md", "/a", "http://[::1", "\x00http://a"])
def test_parse_failure_is_a_value_not_an_exception(value):
    assert parse_absolute_uri(value) is None


def test_configured_locale_segment_is_not_repeated():
    assert classify_link("/xx-yy/a", "xx-yy") == (LinkType.ABSOLUTE_PATH, "/xx-yy/a")
    assert classify_link("/xx-yy/a", "zh-cn") == (LinkType.ABSOLUTE_PATH, "/zh-cn/xx-yy/a")
