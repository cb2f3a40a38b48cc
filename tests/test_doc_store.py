import struct

import pytest

from wiki_indexor.errors import EncodingBoundaryError
from wiki_indexor.index_builder.doc_reader import read_doc_shard
from wiki_indexor.index_builder.doc_writer import (
    check_document,
    encode_document,
    write_doc_shard,
    write_doc_shards,
)
from wiki_indexor.index_builder.meta_writer import read_meta, write_meta
from wiki_indexor.structures import Document


def test_encode_document_layout():
    doc = Document(doc_id=1, title="Café", content="xyz")
    assert encode_document(doc) == (
        struct.pack("<I", 1)
        + struct.pack("<H", 5)
        + "Café".encode("utf-8")
        + struct.pack("<I", 3)
        + b"xyz"
    )


def test_doc_shard_round_trip_keeps_insertion_order(tmp_path):
    docs = [
        Document(doc_id=65546, title="Second", content="later id, written first"),
        Document(doc_id=10, title="First", content=""),
        Document(doc_id=131082, title="東京", content="line one\n\nline two"),
    ]
    path = str(tmp_path / "shard_00010.bin")
    write_doc_shard(path, docs)

    with open(path, "rb") as f:
        assert struct.unpack("<I", f.read(4))[0] == 3

    assert read_doc_shard(path) == docs


def test_title_length_limit():
    title = "t" * 0xFFFF
    assert check_document(Document(1, title, ""))[0] == title.encode("utf-8")

    with pytest.raises(EncodingBoundaryError):
        check_document(Document(1, title + "t", ""))

    with pytest.raises(EncodingBoundaryError):
        encode_document(Document(1, "é" * 40000, ""))


def test_write_doc_shards_names_and_skips_empty(tmp_path):
    written = write_doc_shards(
        str(tmp_path),
        {10: [Document(10, "A", "a")], 7: [], 65535: [Document(65535, "B", "b")]},
    )
    assert written == 2
    assert sorted(p.name for p in tmp_path.iterdir()) == [
        "shard_00010.bin",
        "shard_65535.bin",
    ]


def test_reader_rejects_truncated_shard(tmp_path):
    path = tmp_path / "shard_00001.bin"
    write_doc_shard(str(path), [Document(1, "Title", "content")])
    path.write_bytes(path.read_bytes()[:-2])

    with pytest.raises(ValueError):
        read_doc_shard(str(path))


def test_meta_round_trip(tmp_path):
    path = str(tmp_path / "meta.json")
    write_meta(path, doc_count=12)

    assert read_meta(path) == {
        "docCount": 12,
        "shardCount": 4096,
        "docShardCount": 65536,
    }
