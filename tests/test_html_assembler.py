import pytest

from mdrender.domain.errors import IoFailureError
from mdrender.infrastructure.html import HtmlAssembler

CSS_URL = "https://example.com/style.css"


def test_wraps_fragment_with_stylesheet_and_class():
    page = HtmlAssembler().assemble("<p>Hi</p>", CSS_URL, "markdown-body")

    assert page.startswith("<!DOCTYPE html>")
    assert f'<link rel="stylesheet" href="{CSS_URL}">' in page
    assert '<article class="markdown-body">\n<p>Hi</p>\n</article>' in page
    assert '<meta charset="utf-8">' in page


def test_includes_responsive_and_print_media_blocks():
    page = HtmlAssembler().assemble("", CSS_URL, "doc")

    assert "@media (max-width: 767px)" in page
    assert "@media print" in page
    assert ".doc {" in page


def test_is_deterministic():
    assembler = HtmlAssembler()
    first = assembler.assemble("<h1>x</h1>", CSS_URL, "c")
    assert HtmlAssembler().assemble("<h1>x</h1>", CSS_URL, "c") == first


def test_fragment_is_inserted_verbatim():
    fragment = "<p>{{CSS_CLASS}} & <b>raw</b></p>"
    page = HtmlAssembler().assemble(fragment, CSS_URL, "body")
    assert fragment in page


def test_attribute_values_are_escaped():
    page = HtmlAssembler().assemble("", 'x.css" onload="alert(1)', "c")
    assert 'onload="alert(1)"' not in page


def test_missing_template(tmp_path):
    assembler = HtmlAssembler(template_path=tmp_path / "missing.html")
    with pytest.raises(IoFailureError):
        assembler.assemble("", CSS_URL, "c")
