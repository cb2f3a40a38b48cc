import os
import struct
import logging

from wiki_indexor.errors import EncodingBoundaryError
from wiki_indexor.index_builder.constants import (
    INDEX_SHARD_FILENAME,
    MAX_TERM_BYTES,
    SIZE_KEY,
)
from wiki_indexor.structures import Posting
from utils.varint import encode

logger = logging.getLogger(__name__)


def encode_postings(postings: list[Posting]) -> bytes:
    """
    Encodes postings sorted by doc_id.

    Per posting:
    - doc_id_delta: varint (from the previous doc_id of this term, first from 0)
    - position_count: varint
    - position_delta: varint, repeated (from the previous position of this posting)
    """
    buf = bytearray()
    prev_doc_id = 0
    for index, posting in enumerate(sorted(postings, key=lambda p: p.doc_id)):
        if index > 0 and posting.doc_id == prev_doc_id:
            raise EncodingBoundaryError(
                f"Duplicate posting for doc {posting.doc_id} in one term"
            )

        buf += encode(posting.doc_id - prev_doc_id)
        prev_doc_id = posting.doc_id

        buf += encode(len(posting.positions))
        prev_position = 0
        for position in posting.positions:
            buf += encode(position - prev_position)
            prev_position = position

    return bytes(buf)


def encode_term(term: str, postings: list[Posting]) -> bytes:
    term_bytes = term.encode("utf-8")
    if len(term_bytes) > MAX_TERM_BYTES:
        raise EncodingBoundaryError(
            f"Term of {len(term_bytes)} bytes exceeds limit of {MAX_TERM_BYTES}"
        )

    return b"".join(
        [
            struct.pack(SIZE_KEY["term_length"], len(term_bytes)),
            term_bytes,
            struct.pack(SIZE_KEY["postings_count"], len(postings)),
            encode_postings(postings),
        ]
    )


def write_index_shard(path: str, term_map: dict[str, list[Posting]]):
    """
    `shard_NNNN.bin`, one block per term in ascending byte order:
    - term_length: u8, term: bytes
    - postings_count: u32
    - postings (see `encode_postings`)
    """
    with open(path, "wb") as f:
        # UTF-8 byte order, which is also code point order
        for term in sorted(term_map, key=lambda t: t.encode("utf-8")):
            f.write(encode_term(term, term_map[term]))


def write_index_shards(
    index_dir: str, index_shards: dict[int, dict[str, list[Posting]]]
) -> int:
    written = 0
    for shard in sorted(index_shards):
        term_map = index_shards[shard]
        if len(term_map) == 0:
            continue

        write_index_shard(
            os.path.join(index_dir, INDEX_SHARD_FILENAME.format(shard=shard)),
            term_map,
        )
        written += 1

    logger.info(f"Wrote {written} index shards to {index_dir}")
    return written
