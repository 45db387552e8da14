"""
Turn a CSV of IETF working groups and their keywords into a keyword -> WG page.
"""

from .config import Options, load_options
from .errors import ConfigError, CsvParseError, InputFileError, KeywordsPageError, RenderError
from .pivot import normalize_keyword, pivot_keywords, read_keywords, read_records
from .render import KeywordEntry, keyword_entries, render_page, write_page

__version__ = "0.1.0"

__all__ = [
    'Options',
    'load_options',
    'KeywordsPageError',
    'ConfigError',
    'InputFileError',
    'CsvParseError',
    'RenderError',
    'normalize_keyword',
    'pivot_keywords',
    'read_keywords',
    'read_records',
    'KeywordEntry',
    'keyword_entries',
    'render_page',
    'write_page',
]
