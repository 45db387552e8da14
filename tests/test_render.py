import io

import pytest
from jinja2 import DictLoader, Environment

from ietf_keywords_to_page import render
from ietf_keywords_to_page.config import Options
from ietf_keywords_to_page.errors import RenderError
from ietf_keywords_to_page.render import keyword_entries, render_page, wg_url, write_page

DETAIL = Options()
OVERVIEW = Options(overview=True)


def test_entries_sorted_by_codepoint():
    keywords = {"b": ["x"], "TLS": ["tls"], "a": ["y"], "B": ["z"]}
    assert [e.keyword for e in keyword_entries(keywords)] == ["B", "TLS", "a", "b"]


def test_entries_keep_wg_order():
    entries = keyword_entries({"DNS": ["dnsop", "add", "dnsop"]})
    assert entries[0].wgs == ["dnsop", "add", "dnsop"]


def test_wg_url():
    assert wg_url("tls") == "https://datatracker.ietf.org/wg/tls/about/"


def test_detail_page():
    page = render_page({"Transport": ["tls", "quic"], "DNS": ["dnsop"]}, DETAIL)
    assert page.startswith("<!DOCTYPE html>")
    assert "<h1>Detail Keywords</h1>" in page
    assert 'href="index.html"' in page
    assert 'href="wagtail.css"' in page
    assert (
        '<a href="https://datatracker.ietf.org/wg/tls/about/">tls</a>, '
        '<a href="https://datatracker.ietf.org/wg/quic/about/">quic</a>'
    ) in page
    assert page.index("<b>DNS</b>") < page.index("<b>Transport</b>")


def test_overview_page():
    page = render_page({"Security": ["saag"]}, OVERVIEW)
    assert "<h1>Overview Keywords</h1>" in page
    assert 'href="page.html"' in page
    assert "Detail Keywords" not in page


def test_pages_share_layout():
    detail = render_page({}, DETAIL)
    overview = render_page({}, OVERVIEW)
    for page in (detail, overview):
        assert '<div class="body body-panel clearfix"' in page
        assert "<title>Keywords</title>" in page


def test_empty_mapping_renders_empty_list():
    page = render_page({}, DETAIL)
    assert "<ul>" in page and "</ul>" in page
    assert "<li>" not in page
    assert page.rstrip().endswith("</html>")


def test_keywords_and_wgs_are_escaped():
    page = render_page({"<script>": ["a&b"]}, DETAIL)
    assert "<script>" not in page
    assert "<b>&lt;script&gt;</b>" in page
    assert ">a&amp;b</a>" in page


def test_write_page_writes_whole_document():
    out = io.StringIO()
    write_page({"DNS": ["dnsop"]}, DETAIL, out)
    assert out.getvalue() == render_page({"DNS": ["dnsop"]}, DETAIL)


def test_template_failure_is_render_error(monkeypatch):
    broken = Environment(loader=DictLoader({render.TEMPLATE_NAME: "{% for %}"}))
    monkeypatch.setattr(render, "_environment", lambda: broken)
    out = io.StringIO()
    with pytest.raises(RenderError):
        write_page({"DNS": ["dnsop"]}, DETAIL, out)
    assert out.getvalue() == ""
