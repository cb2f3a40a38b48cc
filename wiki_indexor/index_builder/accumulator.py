import logging

from constants.index import DOC_SHARD_COUNT, SHARD_COUNT
from preprocessing.tokenizer import term_positions
from wiki_indexor.index_builder.constants import MAX_TERM_BYTES
from wiki_indexor.partitioner import doc_shard, term_shard
from wiki_indexor.structures import Document, Posting

logger = logging.getLogger(__name__)


class ShardAccumulator:
    def __init__(
        self, shard_count: int = SHARD_COUNT, doc_shard_count: int = DOC_SHARD_COUNT
    ):
        """
        Holds every index shard and document shard in memory until the flush.

        `index_shards`: shard -> term -> [Posting(doc_id, positions), ...]
            Postings are appended in arrival order; sorting by doc_id happens
            when the shard is encoded.
        `doc_shards`: shard -> [Document, ...] in insertion order

        Shards are created on first use, so only non-empty shards ever exist.
        Memory grows with the number of distinct (term, document) pairs.
        """
        self.shard_count = shard_count
        self.doc_shard_count = doc_shard_count

        self.index_shards: dict[int, dict[str, list[Posting]]] = {}
        self.doc_shards: dict[int, list[Document]] = {}

        self.doc_count = 0
        self.dropped_terms = 0

    def add_document(self, doc: Document, tokens: list[str]):
        """
        Add a document and the postings of its tokens.

        Occurrences are grouped per document first, so each (term, document)
        pair contributes exactly one posting with ascending positions.
        Terms longer than `MAX_TERM_BYTES` cannot be encoded and are dropped;
        the remaining terms keep their original positions.
        """
        doc_shard_num = doc_shard(doc.doc_id, self.doc_shard_count)
        if doc_shard_num not in self.doc_shards:
            self.doc_shards[doc_shard_num] = []
        self.doc_shards[doc_shard_num].append(doc)
        self.doc_count += 1

        for term, positions in term_positions(tokens).items():
            if len(term.encode("utf-8")) > MAX_TERM_BYTES:
                self.dropped_terms += 1
                logger.debug(
                    f"Dropping term of {len(term)} characters from doc {doc.doc_id}"
                )
                continue

            shard = term_shard(term, self.shard_count)
            if shard not in self.index_shards:
                self.index_shards[shard] = {}

            term_map = self.index_shards[shard]

            if term not in term_map:
                term_map[term] = []
            term_map[term].append(Posting(doc.doc_id, positions))

    def term_count(self) -> int:
        return sum(len(term_map) for term_map in self.index_shards.values())
