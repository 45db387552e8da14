"""
Render the keyword -> WGs mapping as the keywords web page.
"""
from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from typing import Dict, List, Optional, TextIO
from urllib.parse import quote

from jinja2 import Environment, PackageLoader, StrictUndefined, TemplateError, select_autoescape

from .config import Options
from .errors import RenderError

logger = logging.getLogger(__name__)

TEMPLATE_NAME = "keywords.html"
DATATRACKER_WG_URL = "https://datatracker.ietf.org/wg/{}/about/"

# Intro text is trusted markup; keywords and WG names are escaped.
HEADERS = {
    True: {
        "heading": "Overview Keywords",
        "intro": (
            "This page helps you find which working groups are working on specific "
            "(high level) technologies.</br>\n"
            "      It is designed to be a simple way for newcomers to figure out where work "
            "they are interested in may be being discussed. This is a very high level overview, "
            'more detailed information is <a href="page.html">over here</a>.'
        ),
    },
    False: {
        "heading": "Detail Keywords",
        "intro": (
            "This page has a simple mapping from various keywords and acronyms to IETF WGs "
            "that are working on these.</br>\n"
            "      It is designed so established IETF participants can figure out where new work "
            "should go, where a specific protocol or technology of interest is being discussed, "
            "etc.</br>\n"
            '      A higher level / introductory page is <a href="index.html">over here</a>.'
        ),
    },
}


@dataclass(frozen=True)
class KeywordEntry:
    keyword: str
    wgs: List[str]


def wg_url(group: str) -> str:
    return DATATRACKER_WG_URL.format(quote(group, safe=""))


def keyword_entries(keywords: Dict[str, List[str]]) -> List[KeywordEntry]:
    """Keywords in ascending order; each keeps its WGs in mapping order."""
    return [KeywordEntry(keyword=kw, wgs=list(keywords[kw])) for kw in sorted(keywords)]


def _environment() -> Environment:
    env = Environment(
        loader=PackageLoader("ietf_keywords_to_page", "templates"),
        autoescape=select_autoescape(["html"]),
        undefined=StrictUndefined,
        keep_trailing_newline=True,
    )
    env.filters["wg_url"] = wg_url
    return env


def render_page(keywords: Dict[str, List[str]], options: Options) -> str:
    entries = keyword_entries(keywords)
    try:
        template = _environment().get_template(TEMPLATE_NAME)
        page = template.render(header=HEADERS[options.overview], entries=entries)
    except TemplateError as exc:
        raise RenderError(f"Unable to render {TEMPLATE_NAME}: {exc}") from exc
    logger.info("Rendered %s page with %d keywords",
                "overview" if options.overview else "detail", len(entries))
    return page


def write_page(keywords: Dict[str, List[str]], options: Options, stream: Optional[TextIO] = None) -> None:
    """Render fully, then write; nothing reaches ``stream`` if rendering fails."""
    page = render_page(keywords, options)
    if stream is None:
        stream = sys.stdout
    stream.write(page)
