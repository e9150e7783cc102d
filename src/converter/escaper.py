"""Escaping and whitespace normalization for markdown text.

Literal document text is rewritten so that characters with markdown meaning
render as punctuation instead of structure. Intentional markup produced by
the emitter never passes through escape_text; line-start escaping runs on
finalized inline runs, where only literal text can open a line with a
block marker.
"""

import re
from typing import Optional

from .context import ConversionContext

HARD_BREAK = "  \n"

_WHITESPACE = re.compile(r"[ \t\n\r\f]+")
_INLINE_SPECIAL = re.compile(r"([\\`*_\[\]])")
_TAG_LIKE = re.compile(r"<(?=[A-Za-z/!?])")
_ENTITY_LIKE = re.compile(r"&(?=#?[A-Za-z0-9]+;)")

_LINE_START_RULES = (
    re.compile(r"^(#)"),
    re.compile(r"^(>)"),
    re.compile(r"^([-+])(?=\s|$)"),
    re.compile(r"^(-)(?=[-\s]*$)"),
    re.compile(r"^(=)(?=[=\s]*$)"),
    re.compile(r"^(~)(?=~~)"),
)
_ORDERED_MARKER = re.compile(r"^(\d{1,9})([.)])(?=\s|$)")
_HEADING_CLOSER = re.compile(r"(^|\s)(#+)$")

_BACKTICK_RUN = re.compile(r"`+")
_URL_CONTROL = re.compile(r"[\t\n\r]")
_NEEDS_ANGLE_BRACKETS = re.compile(r"[ ()<>]")


def collapse_whitespace(text: str) -> str:
    """Collapse runs of HTML whitespace (including newlines) to one space.

    Non-breaking spaces are content, not whitespace, and are kept.
    """
    return _WHITESPACE.sub(" ", text)


def escape_text(text: str) -> str:
    """Backslash-escape inline markdown metacharacters in literal text."""
    text = _INLINE_SPECIAL.sub(r"\\\1", text)
    text = _TAG_LIKE.sub(r"\\<", text)
    return _ENTITY_LIKE.sub(r"\\&", text)


def escape(raw_text: str, context: ConversionContext) -> str:
    """Escape a text node for the current context.

    Inside a preformatted frame text is returned verbatim; code fences are
    widened instead (see code_fence). Elsewhere whitespace is collapsed and
    metacharacters are escaped.
    """
    if context.in_preformatted:
        return raw_text
    return escape_text(collapse_whitespace(raw_text))


def escape_line_start(line: str) -> str:
    """Escape a block marker that literal text would open a line with."""
    for rule in _LINE_START_RULES:
        if rule.match(line):
            return rule.sub(r"\\\1", line, count=1)
    return _ORDERED_MARKER.sub(r"\1\\\2", line, count=1)


def finalize_inline(text: str) -> str:
    """Turn an inline run into the lines of a paragraph-like block.

    Newlines in an inline run only come from explicit line breaks; each
    becomes a hard break. Edge spaces are trimmed, empty lines dropped and
    each line's start escaped.
    """
    lines = [line.strip(" ") for line in text.split("\n")]
    return HARD_BREAK.join(escape_line_start(line) for line in lines if line)


def escape_heading_closer(text: str) -> str:
    """Keep a trailing run of '#' from reading as a closing sequence."""
    return _HEADING_CLOSER.sub(r"\1\\\2", text)


def escape_table_cell(text: str) -> str:
    return text.replace("|", "\\|")


def _longest_backtick_run(content: str) -> int:
    return max((len(run) for run in _BACKTICK_RUN.findall(content)), default=0)


def code_fence(content: str) -> str:
    """Backtick fence long enough that content cannot close it early."""
    return "`" * max(3, _longest_backtick_run(content) + 1)


def code_span(content: str) -> str:
    """Wrap content in a code span.

    Uses the shortest backtick run that does not occur in content, padding
    with spaces where markdown would otherwise merge or strip delimiters.
    """
    runs = {len(run) for run in _BACKTICK_RUN.findall(content)}
    width = 1
    while width in runs:
        width += 1
    delimiter = "`" * width
    if (content.startswith("`") or content.endswith("`")
            or (content.startswith(" ") and content.endswith(" ") and content.strip(" "))):
        content = f" {content} "
    return f"{delimiter}{content}{delimiter}"


def format_link_destination(url: str, title: Optional[str] = None) -> str:
    """Format the (destination "title") part of a link or image."""
    url = _URL_CONTROL.sub("", url)
    if not url or _NEEDS_ANGLE_BRACKETS.search(url):
        destination = "<" + url.replace("<", "%3C").replace(">", "%3E") + ">"
    else:
        destination = url
    if title:
        title = collapse_whitespace(title).strip()
    if title:
        escaped = title.replace("\\", "\\\\").replace('"', '\\"')
        destination += f' "{escaped}"'
    return destination
