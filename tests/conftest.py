import pytest

from doc_assembly import create_file_layer


def write_files(root, files):
    for rel, content in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content, encoding="utf-8")
    return root


@pytest.fixture
def docset(tmp_path):
    return write_files(tmp_path / "docset", {
        "index.html": "<h1 id='top'>Docset index</h1>",
        "guide/intro.html": "<p>Docset intro</p>",
        "media/logo.png": b"\x89PNG docset",
    })


@pytest.fixture
def fallback(tmp_path):
    return write_files(tmp_path / "fallback", {
        "guide/intro.html": "<p>Fallback intro</p>",
        "guide/only-fallback.html": "<a name='here'></a><p>Fallback only</p>",
    })


@pytest.fixture
def output(tmp_path):
    return tmp_path / "_site"


@pytest.fixture
def layer(docset, fallback, output):
    layer = create_file_layer(docset, [fallback], output, {"repository": "contoso/docs"})
    yield layer
    layer.dispose()
