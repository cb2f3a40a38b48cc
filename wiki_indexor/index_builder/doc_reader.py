import struct
import logging

from wiki_indexor.index_builder.constants import READ_SIZE_KEY, SIZE_KEY
from wiki_indexor.structures import Document

logger = logging.getLogger(__name__)


def _read_exact(f, size: int) -> bytes:
    data = f.read(size)
    if len(data) != size:
        raise EOFError(f"Expected {size} bytes, got {len(data)}")
    return data


def _read_field(f, key: str) -> int:
    fmt = SIZE_KEY[key]
    return struct.unpack(fmt, _read_exact(f, READ_SIZE_KEY[fmt]))[0]


def read_doc(f) -> Document:
    doc_id = _read_field(f, "doc_id")
    title_length = _read_field(f, "title_length")
    title = _read_exact(f, title_length).decode("utf-8")
    content_length = _read_field(f, "content_length")
    content = _read_exact(f, content_length).decode("utf-8")

    return Document(doc_id=doc_id, title=title, content=content)


def read_doc_shard(path: str) -> list[Document]:
    docs = []
    with open(path, "rb") as f:
        try:
            doc_count = _read_field(f, "doc_count")
            for _ in range(doc_count):
                docs.append(read_doc(f))
        except (struct.error, EOFError, UnicodeDecodeError) as e:
            logger.error(f"Error reading {path} after {len(docs)} documents: {e}")
            raise ValueError(f"Error reading doc shard {path}") from e

        if f.read(1):
            raise ValueError(f"Trailing bytes after {doc_count} documents in {path}")

    return docs
