"""
Quoting for reply bodies: line prefixes for plain text, a one-placeholder
template for HTML.
"""

import re
from typing import Optional

from mailforge.errors import TemplateError

DEFAULT_QUOTING_MARKUP = (
    '<blockquote style="color: gray; border-left: 1px solid #4f4f4f; padding-left: 1cm">%s</blockquote>'
)
PLAIN_TEXT_QUOTE_PREFIX = "> "

_CONVERSION = re.compile(r"%(.)", re.DOTALL)
# Line terminators that start a new quoted line; a trailing one does not
_LINE_BREAK = re.compile(r"(?:\r\n|\r(?!\n)|[\n\x85\u2028\u2029])(?!\Z)")


def quote_plain_text(text: Optional[str]) -> str:
    """Prefix every line of `text` with "> ". `None` quotes to ""."""
    if not text:
        return ""
    return PLAIN_TEXT_QUOTE_PREFIX + _LINE_BREAK.sub(lambda m: m.group(0) + PLAIN_TEXT_QUOTE_PREFIX, text)


def validate_template(template: str) -> None:
    placeholders = 0
    for match in _CONVERSION.finditer(template):
        conversion = match.group(1)
        if conversion == "s":
            placeholders += 1
        elif conversion != "%":
            raise TemplateError(f"Unsupported conversion %{conversion} in quoting template", template)
    if "%" in _CONVERSION.sub("", template):
        raise TemplateError("Dangling % at the end of quoting template", template)
    if placeholders != 1:
        raise TemplateError(f"Quoting template needs exactly one %s placeholder, found {placeholders}", template)


def quote_html_text(template: str, text: Optional[str]) -> str:
    """Wrap `text` in `template`, which must hold exactly one `%s`."""
    validate_template(template)
    return template % (text or "",)
