"""Tests for plain text and HTML quoting."""

import pytest

from mailforge.errors import TemplateError
from mailforge.quoting import DEFAULT_QUOTING_MARKUP, quote_html_text, quote_plain_text, validate_template


class TestQuotePlainText:
    def test_prefixes_every_line(self):
        assert quote_plain_text("hello\nworld") == "> hello\n> world"

    def test_keeps_line_count_and_order(self):
        text = "first\n\nthird\nfourth"
        quoted = quote_plain_text(text)
        lines = quoted.split("\n")
        assert len(lines) == len(text.split("\n"))
        assert [line[2:] for line in lines] == text.split("\n")
        assert all(line.startswith("> ") for line in lines)

    def test_trailing_newline_does_not_add_a_line(self):
        assert quote_plain_text("hello\n") == "> hello\n"

    def test_crlf_line_endings(self):
        assert quote_plain_text("a\r\nb") == "> a\r\n> b"

    def test_only_line_terminators_split(self):
        assert quote_plain_text("a\x0cb\x0bc") == "> a\x0cb\x0bc"

    def test_other_line_terminators(self):
        assert quote_plain_text("a\rb\u2028c\x85d") == "> a\r> b\u2028> c\x85> d"

    def test_blank_lines_are_quoted(self):
        assert quote_plain_text("a\n\nb\n") == "> a\n> \n> b\n"

    def test_none_is_empty(self):
        assert quote_plain_text(None) == ""
        assert quote_plain_text("") == ""


class TestQuoteHtmlText:
    def test_substitutes_placeholder(self):
        assert quote_html_text("<blockquote>%s</blockquote>", "<p>hi</p>") == "<blockquote><p>hi</p></blockquote>"

    def test_none_text_is_empty(self):
        assert quote_html_text("<blockquote>%s</blockquote>", None) == "<blockquote></blockquote>"

    def test_default_markup(self):
        quoted = quote_html_text(DEFAULT_QUOTING_MARKUP, "x")
        assert quoted.startswith("<blockquote")
        assert ">x</blockquote>" in quoted

    def test_escaped_percent_is_literal(self):
        assert quote_html_text('<div style="width: 100%%">%s</div>', "x") == '<div style="width: 100%">x</div>'

    def test_text_with_percent_is_untouched(self):
        assert quote_html_text("<q>%s</q>", "50% off") == "<q>50% off</q>"

    @pytest.mark.parametrize("template", [
        "no placeholder here",
        "%s and %s",
        "<q>%d</q>",
        "<q>%s</q> 100%",
    ])
    def test_rejects_bad_templates(self, template):
        with pytest.raises(TemplateError):
            quote_html_text(template, "text")

    def test_validate_template_accepts_default(self):
        validate_template(DEFAULT_QUOTING_MARKUP)
