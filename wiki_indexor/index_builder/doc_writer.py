import os
import struct
import logging

from wiki_indexor.errors import EncodingBoundaryError
from wiki_indexor.index_builder.constants import (
    DOC_SHARD_FILENAME,
    MAX_CONTENT_BYTES,
    MAX_TITLE_BYTES,
    SIZE_KEY,
)
from wiki_indexor.structures import Document

logger = logging.getLogger(__name__)


def check_document(doc: Document) -> tuple[bytes, bytes]:
    """
    Returns the UTF-8 encoded (title, content) of `doc`.
    Raises `EncodingBoundaryError` when either does not fit its length field.
    """
    title_bytes = doc.title.encode("utf-8")
    content_bytes = doc.content.encode("utf-8")

    if len(title_bytes) > MAX_TITLE_BYTES:
        raise EncodingBoundaryError(
            f"Title of doc {doc.doc_id} is {len(title_bytes)} bytes, limit is {MAX_TITLE_BYTES}"
        )
    if len(content_bytes) > MAX_CONTENT_BYTES:
        raise EncodingBoundaryError(
            f"Content of doc {doc.doc_id} is {len(content_bytes)} bytes, limit is {MAX_CONTENT_BYTES}"
        )

    return title_bytes, content_bytes


def encode_document(doc: Document) -> bytes:
    title_bytes, content_bytes = check_document(doc)

    return b"".join(
        [
            struct.pack(SIZE_KEY["doc_id"], doc.doc_id),
            struct.pack(SIZE_KEY["title_length"], len(title_bytes)),
            title_bytes,
            struct.pack(SIZE_KEY["content_length"], len(content_bytes)),
            content_bytes,
        ]
    )


def write_doc_shard(path: str, docs: list[Document]):
    """
    `shard_NNNNN.bin`:
    - doc_count: u32
    - per document, in insertion order:
        - doc_id: u32
        - title_length: u16, title: bytes
        - content_length: u32, content: bytes
    """
    with open(path, "wb") as f:
        f.write(struct.pack(SIZE_KEY["doc_count"], len(docs)))
        for doc in docs:
            f.write(encode_document(doc))


def write_doc_shards(docs_dir: str, doc_shards: dict[int, list[Document]]) -> int:
    written = 0
    for shard in sorted(doc_shards):
        docs = doc_shards[shard]
        if len(docs) == 0:
            continue

        write_doc_shard(
            os.path.join(docs_dir, DOC_SHARD_FILENAME.format(shard=shard)), docs
        )
        written += 1

    logger.info(f"Wrote {written} document shards to {docs_dir}")
    return written
