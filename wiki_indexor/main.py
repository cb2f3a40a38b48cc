import sys
import logging
import argparse

from constants.index import LOG_LEVEL, OUTPUT_DIR
from wiki_indexor.errors import IndexBuildError
from wiki_indexor.index_builder.index_builder import IndexBuilder

logging.basicConfig(
    level=LOG_LEVEL, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

USAGE = "wiki-indexor <dump.xml.bz2>"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wiki-indexor", usage=USAGE, add_help=False
    )
    parser.add_argument("dump", nargs="?", help="Path to the compressed XML dump")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    if args.dump is None:
        print(f"usage: {USAGE}")
        return 1

    try:
        stats = IndexBuilder(args.dump, output_dir=OUTPUT_DIR).build()
    except IndexBuildError as e:
        logger.error(f"Index build failed: {e}")
        return 2

    print(f"done: {stats.documents} docs")
    return 0


if __name__ == "__main__":
    sys.exit(main())
