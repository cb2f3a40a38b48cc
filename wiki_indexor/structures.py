from collections import namedtuple
from dataclasses import dataclass


Posting = namedtuple("Posting", ["doc_id", "positions"])


@dataclass
class Page:
    title: str
    page_id: int
    namespace: int
    text: str = ""

    @property
    def is_article(self) -> bool:
        return self.namespace == 0


@dataclass(frozen=True)
class Document:
    doc_id: int
    title: str
    content: str


@dataclass
class BuildStats:
    pages_read: int = 0
    documents: int = 0
    non_article_pages: int = 0
    skipped_pages: int = 0
    duplicate_pages: int = 0
    rejected_documents: int = 0
    dropped_terms: int = 0
    doc_shards_written: int = 0
    index_shards_written: int = 0

    def summary(self) -> str:
        return (
            f"documents={self.documents} pages_read={self.pages_read} "
            f"non_article={self.non_article_pages} skipped={self.skipped_pages} "
            f"duplicates={self.duplicate_pages} rejected={self.rejected_documents} "
            f"dropped_terms={self.dropped_terms} doc_shards={self.doc_shards_written} "
            f"index_shards={self.index_shards_written}"
        )
