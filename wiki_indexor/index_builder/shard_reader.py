import struct

import numpy as np

from wiki_indexor.index_builder.constants import READ_SIZE_KEY, SIZE_KEY
from wiki_indexor.structures import Posting
from utils.varint import decode_bytes_jit


class ShardReader:
    """
    Decodes an index shard file back into terms and postings.

    The whole shard is loaded into a read-only uint8 array; varints are
    decoded with `decode_bytes_jit`. A zero sentinel byte is appended so a
    truncated trailing varint stops at the end of the buffer instead of
    reading past it.
    """

    def __init__(self, shard_path: str):
        self.shard_path = shard_path

        with open(shard_path, "rb") as f:
            raw = f.read()

        self.size = len(raw)
        self.raw = raw
        self.data = np.frombuffer(raw + b"\x00", dtype=np.uint8)

    def __iter__(self):
        return self.terms()

    def _unpack(self, key: str, offset: int):
        fmt = SIZE_KEY[key]
        size = READ_SIZE_KEY[fmt]
        if offset + size > self.size:
            raise ValueError(
                f"Truncated {key} at offset {offset} in {self.shard_path}"
            )

        return struct.unpack_from(fmt, self.raw, offset)[0], offset + size

    def _varint(self, offset: int):
        value, offset = decode_bytes_jit(self.data, offset)
        if offset > self.size:
            raise ValueError(f"Truncated varint in {self.shard_path}")

        return value, offset

    def read_postings(self, offset: int) -> tuple[list[Posting], int]:
        count, offset = self._unpack("postings_count", offset)

        postings = []
        curr_doc_id = 0
        for _ in range(count):
            doc_id_delta, offset = self._varint(offset)
            position_count, offset = self._varint(offset)
            curr_doc_id += doc_id_delta

            positions = []
            curr_position = 0
            for _ in range(position_count):
                position_delta, offset = self._varint(offset)
                curr_position += position_delta
                positions.append(curr_position)

            postings.append(Posting(curr_doc_id, positions))

        return postings, offset

    def terms(self):
        """Yields (term, [Posting, ...]) in file order"""
        offset = 0
        while offset < self.size:
            term_length, offset = self._unpack("term_length", offset)
            if offset + term_length > self.size:
                raise ValueError(f"Truncated term at offset {offset} in {self.shard_path}")

            try:
                term = self.raw[offset : offset + term_length].decode("utf-8")
            except UnicodeDecodeError as e:
                raise ValueError(f"Invalid term bytes in {self.shard_path}: {e}")
            offset += term_length

            postings, offset = self.read_postings(offset)
            yield term, postings

    def to_dict(self) -> dict[str, list[Posting]]:
        return {term: postings for term, postings in self.terms()}
