import bz2
import gzip
import logging

from lxml import etree

from wiki_indexor.errors import DumpReadError, PageParseError
from wiki_indexor.structures import Page

logger = logging.getLogger(__name__)

MAX_PAGE_ID = 0xFFFFFFFF


def open_dump(path: str):
    """
    Opens the dump as a binary stream, decompressing by suffix
    (`.bz2`, `.gz`, anything else is read as plain XML)
    """
    try:
        if path.endswith(".bz2"):
            return bz2.open(path, "rb")
        if path.endswith(".gz"):
            return gzip.open(path, "rb")
        return open(path, "rb")
    except OSError as e:
        raise DumpReadError(f"Cannot open dump {path}: {e}") from e


def _parse_int(elem, tag: str, title: str) -> int:
    raw = elem.findtext(tag)
    if raw is None:
        raise PageParseError(f"Page '{title}' has no <{tag[3:]}> element")

    try:
        return int(raw.strip())
    except ValueError:
        raise PageParseError(f"Page '{title}' has a non-integer <{tag[3:]}>: {raw!r}")


def parse_page(elem) -> Page:
    """
    Extracts a `Page` from a `<page>` element.
    Works with or without the MediaWiki export namespace on the elements.
    """
    title = elem.findtext("{*}title") or ""
    page_id = _parse_int(elem, "{*}id", title)
    namespace = _parse_int(elem, "{*}ns", title)

    if page_id < 0 or page_id > MAX_PAGE_ID:
        raise PageParseError(f"Page '{title}' id {page_id} does not fit 32 bits")

    text = elem.findtext("{*}revision/{*}text") or ""
    return Page(title=title, page_id=page_id, namespace=namespace, text=text)


class DumpReader:
    """
    Streams `Page` records out of a MediaWiki XML export.

    Elements are cleared once read so memory stays flat over the dump.
    Malformed pages are skipped and counted in `skipped_pages`; errors at the
    stream level (bad compression, broken XML) raise `DumpReadError`.
    """

    def __init__(self, dump_path: str):
        self.dump_path = dump_path
        self.skipped_pages = 0
        self.f_dump = None

    def __enter__(self):
        self.f_dump = open_dump(self.dump_path)
        return self

    def __exit__(self, *args):
        self.close()

    def close(self):
        if self.f_dump is None:
            return

        self.f_dump.close()
        self.f_dump = None

    def __iter__(self):
        if self.f_dump is None:
            raise RuntimeError("DumpReader must be used as a context manager")

        context = etree.iterparse(
            self.f_dump, events=("end",), tag="{*}page", huge_tree=True
        )
        try:
            for _, elem in context:
                try:
                    page = parse_page(elem)
                except PageParseError as e:
                    self.skipped_pages += 1
                    logger.warning(f"Skipping malformed page: {e}")
                    page = None

                elem.clear()
                while elem.getprevious() is not None:
                    del elem.getparent()[0]

                if page is not None:
                    yield page
        except (OSError, EOFError, etree.LxmlError) as e:
            raise DumpReadError(f"Cannot read dump {self.dump_path}: {e}") from e
