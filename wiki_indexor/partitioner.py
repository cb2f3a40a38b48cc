from constants.index import DOC_SHARD_COUNT, SHARD_COUNT
from utils.hashing import fnv1a_32


def term_shard(term: str, shard_count: int = SHARD_COUNT) -> int:
    return fnv1a_32(term.encode("utf-8")) % shard_count


def doc_shard(doc_id: int, doc_shard_count: int = DOC_SHARD_COUNT) -> int:
    return doc_id % doc_shard_count
