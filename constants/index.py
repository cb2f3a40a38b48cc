import os
from dotenv import load_dotenv

load_dotenv()


def positive_int(name: str, default: int) -> int:
    value = int(os.getenv(name, str(default)))
    if value < 1:
        raise ValueError(f"{name} must be a positive integer, got {value}")
    return value


# Fixed by the on-disk format: readers derive file names from these.
SHARD_COUNT = 4096
DOC_SHARD_COUNT = 65536

# Passes of innermost-template removal before giving up on deeper nesting
TEMPLATE_PASSES = 10

PROGRESS_INTERVAL = positive_int("WIKI_INDEX_PROGRESS_INTERVAL", 10000)
OUTPUT_DIR = os.getenv("WIKI_INDEX_OUTPUT_DIR", "public")
LOCK_TIMEOUT = float(os.getenv("WIKI_INDEX_LOCK_TIMEOUT", "-1"))
LOG_LEVEL = os.getenv("WIKI_INDEX_LOG_LEVEL", "INFO").upper()

DOCS_DIRNAME = "docs"
INDEX_DIRNAME = "index"
META_FILENAME = "meta.json"
