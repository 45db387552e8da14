"""
Read a CSV file of WGs and keywords, and write a web page of keyword -> WGs.

Usage:
    ietf-keywords-to-page --infile keywords.csv > page.html
    ietf-keywords-to-page --infile keywords.csv --overview > index.html
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from .config import CONFIG_NAMES, PROGRAM_NAME, Options, load_options
from .errors import KeywordsPageError
from .pivot import read_keywords
from .render import write_page

logger = logging.getLogger(__name__)

EPILOG = f"""\
Reads a YAML config file called '{CONFIG_NAMES[0]}' in ~/.{PROGRAM_NAME}/ or,
failing that, in the current directory. Flags given on the command line win.

Example config:

  infile: keywords.csv
  overview: false
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=PROGRAM_NAME,
        description="Reads a CSV file of WGs and keywords, and outputs a webpage of keyword -> WG.",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    # Flags default to None so the config file can fill in what was not given.
    parser.add_argument("-i", "--infile", default=None, help="input csv file")
    parser.add_argument("-o", "--overview", action="store_true", default=None,
                        help="Generate overview page only (keywords containing *)")
    parser.add_argument("-v", "--verbose", action="store_true", default=None, help="be more verbose.")
    parser.add_argument("-d", "--debug", action="store_true", default=None, help="print debug information.")
    return parser


def configure_logging(options: Options) -> None:
    if options.debug:
        level = logging.DEBUG
    elif options.verbose:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s", stream=sys.stderr)


def run(options: Options) -> None:
    keywords = read_keywords(options.infile, options)
    write_page(keywords, options, sys.stdout)


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        options = load_options(args)
    except KeywordsPageError as exc:
        logging.basicConfig(level=logging.WARNING, stream=sys.stderr)
        logger.error("%s", exc)
        return 1

    configure_logging(options)
    logger.debug("Options: %s", options)

    if options.infile is None:
        logger.error("--infile is a required parameter")
        parser.print_usage(sys.stderr)
        return 1

    try:
        run(options)
    except KeywordsPageError as exc:
        logger.critical("%s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
