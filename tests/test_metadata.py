import pytest

from doc_assembly import count_word, get_bookmarks, get_inner_text, load_html

DESCRIPTION = (
    "<p>Open Publishing is being developed by the Visual Studio China team. The team owns the "
    "MSDN and Technet platforms, as well as CAPS authoring tool, which is the replacement of DxStudio.</p>"
)


@pytest.mark.parametrize("html, expected", [
    ("", ""),
    ("<p id='1'>a</p>", "a"),
    ("<div><p>a</p><p>b</p></div>", "ab"),
    ("<p>x<!-- hidden -->y</p>", "xy"),
    ("<p>fish &amp; chips</p>", "fish & chips"),
])
def test_get_inner_text(html, expected):
    assert get_inner_text(load_html(html)) == expected


def test_get_inner_text_of_subtree():
    soup = load_html("<h1>Title</h1><div id='body'><p>one</p> <p>two</p></div>")
    assert get_inner_text(soup.find(id="body")) == "one two"


@pytest.mark.parametrize("html, expected", [
    ("", 0),
    ("a", 1),
    ("a b", 2),
    ("a b ?!", 2),
    ("<p>a</p>b", 2),
    ("<p>a</p>b<p>c</p>", 3),
    ("<div><div class=\"content\"><h1>Connect and TFS information ?!</h1></div></div>", 4),
    ("<div><div class=\"content\"><h1>Connect and TFS information</h1></div></div>", 4),
    ("<div><div class=\"content\"><h1>Connect and TFS information</h1>" + DESCRIPTION + "</div></div>", 35),
    ("<div><title>Connect and TFS information</title><div class=\"content\">"
     "<h1>Connect and TFS information</h1>" + DESCRIPTION + "</div></div>", 39),
    ("<div><div class=\"content\"><h1>Connect and TFS information</h1><p>Open Publishing is being developed "
     "by the Visual Studio China team. The team owns the <a href=\"http://www.msdn.com\">MSDN</a> and Technet "
     "platforms, as well as CAPS authoring tool, which is the replacement of DxStudio.</p></div></div>", 35),
])
def test_count_word(html, expected):
    assert count_word(load_html(html)) == expected


@pytest.mark.parametrize("html, expected", [
    ("", []),
    ("<h1 id='a'></h1>", ["a"]),
    ("<h1 id='a'></h1><h2 id='b'></h2>", ["a", "b"]),
    ("<a id='a'></a>", ["a"]),
    ("<a name='a'></a>", ["a"]),
    ("<a id='a' name='b'></a>", ["a"]),
    ("<div name='x'></div>", []),
    ("<h2 id='dup'></h2><p><a name='inner'></a></p><h2 id='dup'></h2>", ["dup", "inner", "dup"]),
])
def test_get_bookmarks(html, expected):
    assert get_bookmarks(load_html(html)) == expected


def test_get_bookmarks_includes_subtree_root():
    soup = load_html("<h1 id='outside'></h1><section id='root'><h2 id='child'></h2></section>")
    assert get_bookmarks(soup.find("section")) == ["root", "child"]
