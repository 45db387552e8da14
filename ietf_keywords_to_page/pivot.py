"""
Read the WG/keyword CSV and pivot it into keyword -> WGs.

The input has a header line listing WGs, then for each subsequent line
keywords in the column of the WG that listed them:

    A,B,C
    1,2,3          ->   1: [A, B]   2: [B, C]   3: [C]
    ,1,2

A ``*`` anywhere in a cell marks a high-level keyword for the overview page.
"""
from __future__ import annotations

import csv
import logging
import re
from pathlib import Path
from typing import Dict, Iterable, List

import pandas as pd

from .config import Options
from .errors import CsvParseError, InputFileError

logger = logging.getLogger(__name__)

OVERVIEW_MARKER = "*"

_WORD_START_RE = re.compile(r"(^|\s)(\S)")


class _RawLines:
    """Line iterator that remembers the raw text of the record being read."""

    def __init__(self, handle: Iterable[str]):
        self._lines = iter(handle)
        self._pending: List[str] = []

    def __iter__(self) -> "_RawLines":
        return self

    def __next__(self) -> str:
        line = next(self._lines)
        self._pending.append(line)
        return line

    def take(self) -> str:
        raw = "".join(self._pending)
        self._pending = []
        return raw


def _has_bare_quote(raw: str) -> bool:
    """True when a ``"`` shows up inside a field that did not open with one."""
    state = "start"
    for ch in raw:
        if state == "quoted":
            if ch == '"':
                state = "closing"
        elif ch in ",\r\n":
            state = "start"
        elif ch == '"':
            if state == "unquoted":
                return True
            # "" inside a quoted field, or the opening quote
            state = "quoted"
        elif state == "start":
            state = "unquoted"
    return False


def read_records(handle: Iterable[str]) -> List[List[str]]:
    """Parse CSV text into records; rows may have any number of fields."""
    lines = _RawLines(handle)
    reader = csv.reader(lines, strict=True)
    records = []
    try:
        for row in reader:
            if _has_bare_quote(lines.take()):
                raise CsvParseError('bare " in non-quoted field', line=reader.line_num)
            # Blank lines carry no cells, same as a row of empty ones.
            if row:
                records.append(row)
    except csv.Error as exc:
        raise CsvParseError(str(exc), line=reader.line_num) from exc
    return records


def is_overview_cell(cell: str) -> bool:
    return OVERVIEW_MARKER in cell


def _upper_char(ch: str) -> str:
    # Characters without a one-character upper case ("ß" -> "SS") stay as they are.
    upper = ch.upper()
    return upper if len(upper) == 1 else ch


def normalize_keyword(cell: str) -> str:
    """
    Strip ``*`` markers and surrounding whitespace, then fix the case.

    A keyword whose first character is already upper case is assumed to be
    an acronym and kept verbatim ("TLS"). Anything else is lowercased and
    every whitespace-separated word capitalized ("network coding" ->
    "Network Coding"). Returns "" when nothing but markers is left.
    """
    keyword = cell.replace(OVERVIEW_MARKER, "").strip()
    if not keyword:
        return ""
    first = keyword[0]
    if _upper_char(first) == first:
        return keyword
    return _WORD_START_RE.sub(lambda m: m.group(1) + _upper_char(m.group(2)), keyword.lower())


def _rectangular_rows(records: List[List[str]], width: int) -> List[List[str]]:
    rows = []
    for line_no, row in enumerate(records[1:], start=2):
        extra = [c for c in row[width:] if c.strip()]
        if extra:
            logger.warning("Row %d has %d keyword(s) past the last WG column, ignoring: %s",
                           line_no, len(extra), ", ".join(extra))
        rows.append(row[:width] + [""] * (width - len(row)))
    return rows


def pivot_keywords(records: List[List[str]], overview: bool = False) -> Dict[str, List[str]]:
    """
    Turn WG-by-keyword records into {keyword: [WG, ...]}.

    ``records[0]`` is the header of WG names. WGs are appended in row-major
    scan order and duplicates are kept. With ``overview`` set only cells
    carrying a ``*`` count; otherwise every non-empty cell does.
    """
    # read_records never yields an empty header, but hand-built records may.
    if len(records) < 2 or not records[0]:
        return {}

    header = records[0]
    width = len(header)
    frame = pd.DataFrame(_rectangular_rows(records, width), columns=range(width), dtype=str)

    cells = (
        frame.melt(var_name="column", value_name="cell", ignore_index=False)
        .rename_axis("row")
        .reset_index()
        .sort_values(by=["row", "column"], kind="mergesort")
    )
    cells = cells[cells["cell"] != ""]
    if overview:
        cells = cells[cells["cell"].str.contains(OVERVIEW_MARKER, regex=False)]
    cells = cells.assign(keyword=cells["cell"].map(normalize_keyword))

    keywords: Dict[str, List[str]] = {}
    for item in cells.itertuples(index=False):
        if not item.keyword:
            logger.debug("Skipping cell %r in WG %s: nothing left after stripping markers",
                         item.cell, header[item.column])
            continue
        if overview:
            logger.info("%s is an overview keyword", item.keyword)
        keywords.setdefault(item.keyword, []).append(header[item.column])

    logger.debug("Pivoted %d data rows x %d WGs into %d keywords", len(frame), width, len(keywords))
    return keywords


def read_keywords(path: Path, options: Options) -> Dict[str, List[str]]:
    """Read ``path`` and pivot it in the mode ``options`` selects."""
    try:
        with open(path, newline="", encoding="utf-8-sig") as handle:
            records = read_records(handle)
    except OSError as exc:
        raise InputFileError(f"Unable to open {path}: {exc}") from exc
    except UnicodeDecodeError as exc:
        raise InputFileError(f"{path} is not valid UTF-8: {exc}") from exc

    logger.info("Read %d records from %s", len(records), path)
    return pivot_keywords(records, overview=options.overview)
