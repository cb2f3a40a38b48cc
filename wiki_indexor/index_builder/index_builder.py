import os
import time
import shutil
import logging
import tempfile

import filelock

from constants.index import (
    DOCS_DIRNAME,
    INDEX_DIRNAME,
    LOCK_TIMEOUT,
    META_FILENAME,
    OUTPUT_DIR,
    PROGRESS_INTERVAL,
)
from preprocessing.sanitizer import WikitextSanitizer
from preprocessing.tokenizer import tokenize
from wiki_indexor.dump_reader import DumpReader
from wiki_indexor.errors import EncodingBoundaryError, OutputWriteError
from wiki_indexor.index_builder.accumulator import ShardAccumulator
from wiki_indexor.index_builder.doc_writer import check_document, write_doc_shards
from wiki_indexor.index_builder.meta_writer import write_meta
from wiki_indexor.index_builder.postings_writer import write_index_shards
from wiki_indexor.structures import BuildStats, Document, Page

logger = logging.getLogger(__name__)


class IndexBuilder:
    def __init__(
        self,
        dump_path: str,
        output_dir: str = OUTPUT_DIR,
        progress_interval: int = PROGRESS_INTERVAL,
        lock_timeout: float = LOCK_TIMEOUT,
        sanitizer: WikitextSanitizer | None = None,
    ):
        """
        Builds the sharded index for one dump in a single sequential pass.

        Streaming: every article page (namespace 0) is sanitized, tokenized
            and added to an in-memory `ShardAccumulator`. Nothing touches the
            output directory during this phase.
        Flushing: document shards, then index shards, then `meta.json` are
            written into a temporary directory inside `output_dir`, which then
            replaces `output_dir/docs` and `output_dir/index`.

        A failure in either phase leaves the previous `docs/` and `index/`
        untouched. Only one builder may write into `output_dir` at a time,
        enforced with a lock file placed next to `output_dir` so it is never
        published with the output.
        """
        if progress_interval < 1:
            raise ValueError(f"progress_interval must be positive, got {progress_interval}")

        self.dump_path = dump_path
        self.output_dir = output_dir
        self.progress_interval = progress_interval
        self.lock_timeout = lock_timeout
        self.sanitizer = sanitizer if sanitizer is not None else WikitextSanitizer()

        self.stats = BuildStats()
        self.seen_doc_ids: set[int] = set()
        self.start = time.time()

    @property
    def lock_path(self) -> str:
        return os.path.normpath(os.path.abspath(self.output_dir)) + ".lock"

    def build(self) -> BuildStats:
        try:
            os.makedirs(self.output_dir, exist_ok=True)
        except OSError as e:
            raise OutputWriteError(
                f"Cannot create output directory {self.output_dir}: {e}"
            ) from e

        lock_path = self.lock_path
        lock = filelock.FileLock(lock_path, timeout=self.lock_timeout)
        logger.debug(f"Locking {lock_path}")
        try:
            with lock:
                accumulator = self._stream()
                self._flush(accumulator)
        except filelock.Timeout as e:
            raise OutputWriteError(
                f"Another build holds {lock_path}, gave up after {self.lock_timeout}s"
            ) from e
        logger.debug(f"Unlocked {lock_path}")

        logger.info(f"Build finished in {time.time() - self.start:.1f}s: {self.stats.summary()}")
        return self.stats

    def _stream(self) -> ShardAccumulator:
        accumulator = ShardAccumulator()

        logger.info(f"Reading dump {self.dump_path}")
        with DumpReader(self.dump_path) as reader:
            for page in reader:
                self.stats.pages_read += 1
                self.add_page(page, accumulator)

            self.stats.skipped_pages = reader.skipped_pages

        self.stats.documents = accumulator.doc_count
        self.stats.dropped_terms = accumulator.dropped_terms
        logger.info(
            f"Total: {accumulator.doc_count} docs, {accumulator.term_count()} terms in {len(accumulator.index_shards)} shards"
        )
        return accumulator

    def add_page(self, page: Page, accumulator: ShardAccumulator) -> bool:
        """Returns True when the page was accepted as a document"""
        if not page.is_article:
            self.stats.non_article_pages += 1
            return False

        if page.page_id in self.seen_doc_ids:
            self.stats.duplicate_pages += 1
            logger.warning(f"Skipping duplicate page id {page.page_id} ('{page.title}')")
            return False

        doc = Document(
            doc_id=page.page_id,
            title=page.title,
            content=self.sanitizer.sanitize(page.text),
        )
        try:
            check_document(doc)
        except EncodingBoundaryError as e:
            self.stats.rejected_documents += 1
            logger.warning(f"Rejecting page {page.page_id}: {e}")
            return False

        self.seen_doc_ids.add(doc.doc_id)
        accumulator.add_document(doc, tokenize(doc.content))

        if accumulator.doc_count % self.progress_interval == 0:
            logger.info(
                f"Indexed {accumulator.doc_count} docs in {time.time() - self.start:.1f}s"
            )
        return True

    def _flush(self, accumulator: ShardAccumulator):
        try:
            build_dir = tempfile.mkdtemp(prefix=".build-", dir=self.output_dir)
        except OSError as e:
            raise OutputWriteError(f"Cannot write to {self.output_dir}: {e}") from e

        try:
            docs_dir = os.path.join(build_dir, DOCS_DIRNAME)
            index_dir = os.path.join(build_dir, INDEX_DIRNAME)
            os.makedirs(docs_dir)
            os.makedirs(index_dir)

            logger.info(f"Writing doc shards for {accumulator.doc_count} docs")
            self.stats.doc_shards_written = write_doc_shards(
                docs_dir, accumulator.doc_shards
            )
            logger.info(f"Writing index shards for {accumulator.doc_count} docs")
            self.stats.index_shards_written = write_index_shards(
                index_dir, accumulator.index_shards
            )
            write_meta(os.path.join(index_dir, META_FILENAME), accumulator.doc_count)

            self._swap_into_place(build_dir)
        except OSError as e:
            raise OutputWriteError(f"Cannot write to {self.output_dir}: {e}") from e
        finally:
            shutil.rmtree(build_dir, ignore_errors=True)

    def _swap_into_place(self, build_dir: str):
        """
        Renames `build_dir/docs` and `build_dir/index` over the live ones.
        The replaced directories are moved into `build_dir` and removed with it.
        """
        for dirname in (DOCS_DIRNAME, INDEX_DIRNAME):
            target = os.path.join(self.output_dir, dirname)
            if os.path.exists(target):
                os.rename(target, os.path.join(build_dir, f"{dirname}.old"))

            os.rename(os.path.join(build_dir, dirname), target)
            logger.debug(f"Swapped {target} into place")
