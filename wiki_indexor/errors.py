class IndexBuildError(Exception):
    """Fatal: the build cannot continue and the process should exit non-zero"""


class DumpReadError(IndexBuildError):
    """The dump cannot be opened, decompressed or parsed as an XML stream"""


class OutputWriteError(IndexBuildError):
    """The output directory cannot be created, locked or written"""


class PageParseError(ValueError):
    """A single page element is malformed; the page is skipped"""


class EncodingBoundaryError(ValueError):
    """A value does not fit the fixed-width length field of the on-disk format"""
