SIZE_KEY = {
    "doc_count": "<I",
    "doc_id": "<I",
    "title_length": "<H",
    "content_length": "<I",
    "term_length": "<B",
    "postings_count": "<I",
}

READ_SIZE_KEY = {
    "<B": 1,
    "<H": 2,
    "<I": 4,
}

MAX_TERM_BYTES = 0xFF
MAX_TITLE_BYTES = 0xFFFF
MAX_CONTENT_BYTES = 0xFFFFFFFF

DOC_SHARD_FILENAME = "shard_{shard:05d}.bin"
INDEX_SHARD_FILENAME = "shard_{shard:04d}.bin"
