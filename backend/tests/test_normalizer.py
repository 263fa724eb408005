"""Tests for URL and text cleanup."""

from searchstream.search.normalizer import clean_text, clean_url


def test_clean_url_unwraps_duckduckgo_redirect():
    wrapped = "//duckduckgo.com/l/?uddg=https%3A%2F%2Fdocs.python.org%2F3%2F&rut=abc123"
    assert clean_url(wrapped) == "https://docs.python.org/3/"


def test_clean_url_leaves_plain_urls_alone():
    assert clean_url("https://example.com/a?b=c") == "https://example.com/a?b=c"
    assert clean_url("") == ""


def test_clean_text_decodes_entities_and_collapses_whitespace():
    raw = "  Fish &amp; Chips\n\t&quot;best&quot;   in &lt;town&gt; &#39;24  "
    assert clean_text(raw) == "Fish & Chips \"best\" in <town> '24"


def test_clean_text_decodes_sequentially():
    assert clean_text("&amp;lt;b&amp;gt;") == "<b>"


def test_clean_text_handles_missing_values():
    assert clean_text(None) == ""
    assert clean_text("   ") == ""


def test_clean_text_decodes_remaining_entities():
    assert clean_text("Don&#x27;t block&nbsp;the loop") == "Don't block the loop"


def test_clean_text_drops_inline_markup():
    assert clean_text("reliable, <b>asynchronous</b> apps with <strong>Rust</strong>") == (
        "reliable, asynchronous apps with Rust"
    )
    assert clean_text("x < y and z > w") == "x < y and z > w"
