import bz2
import gzip
import os

import pytest

from xml.sax.saxutils import escape

from constants.index import DOCS_DIRNAME, INDEX_DIRNAME

EXPORT_NS = "http://www.mediawiki.org/xml/export-0.11/"


def page_xml(title, page_id, ns, text):
    return (
        "  <page>\n"
        f"    <title>{escape(title)}</title>\n"
        f"    <ns>{ns}</ns>\n"
        f"    <id>{page_id}</id>\n"
        "    <revision>\n"
        "      <id>999999</id>\n"
        f'      <text xml:space="preserve">{escape(text)}</text>\n'
        "    </revision>\n"
        "  </page>\n"
    )


def dump_xml(pages, namespaced=True):
    """`pages` is a list of (title, id, ns, text) tuples or raw `<page>` strings"""
    root_attrs = f' xmlns="{EXPORT_NS}" version="0.11"' if namespaced else ""
    body = "".join(p if isinstance(p, str) else page_xml(*p) for p in pages)
    return (
        f"<mediawiki{root_attrs}>\n"
        "  <siteinfo>\n    <sitename>Wikipedia</sitename>\n  </siteinfo>\n"
        f"{body}"
        "</mediawiki>\n"
    )


@pytest.fixture
def make_dump(tmp_path):
    """Writes a dump into `tmp_path`; compression follows the file name suffix"""

    def _make_dump(pages, name="dump.xml.bz2", namespaced=True):
        path = tmp_path / name
        data = dump_xml(pages, namespaced=namespaced).encode("utf-8")
        if name.endswith(".bz2"):
            path.write_bytes(bz2.compress(data))
        elif name.endswith(".gz"):
            path.write_bytes(gzip.compress(data))
        else:
            path.write_bytes(data)
        return str(path)

    return _make_dump


@pytest.fixture
def output_dir(tmp_path):
    return str(tmp_path / "public")


@pytest.fixture
def read_tree():
    """relative path -> bytes for everything under docs/ and index/"""

    def _read_tree(output_dir):
        tree = {}
        for dirname in (DOCS_DIRNAME, INDEX_DIRNAME):
            root = os.path.join(output_dir, dirname)
            for name in sorted(os.listdir(root)):
                with open(os.path.join(root, name), "rb") as f:
                    tree[f"{dirname}/{name}"] = f.read()
        return tree

    return _read_tree
