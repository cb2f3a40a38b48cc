import json

from constants.index import DOC_SHARD_COUNT, SHARD_COUNT


def write_meta(
    path: str,
    doc_count: int,
    shard_count: int = SHARD_COUNT,
    doc_shard_count: int = DOC_SHARD_COUNT,
):
    meta = {
        "docCount": doc_count,
        "shardCount": shard_count,
        "docShardCount": doc_shard_count,
    }
    with open(path, "w") as f:
        json.dump(meta, f)
        f.write("\n")


def read_meta(path: str) -> dict:
    with open(path) as f:
        return json.load(f)
