"""Final normalization pass over the emitted markdown.

Collapses blank-line runs, strips trailing whitespace (keeping hard
breaks), and trims the document so it starts with content and ends with a
single newline. Lines inside fenced code blocks are passed through untouched.
"""

import re
from typing import List, Optional, Tuple

# One container prefix: blockquote marker, bullet or ordered list marker
_CONTAINER_PREFIX = re.compile(r">[ ]?|[-*+][ ]|\d{1,9}[.)][ ]")
_FENCE_RUN = re.compile(r"`{3,}|~{3,}")
_HARD_BREAK = re.compile(r"\S[ ]{2,}$")


def _split_fence(line: str) -> Optional[Tuple[str, str]]:
    """Return (fence, rest of line) when line opens or closes a fence.

    Container prefixes are peeled off one at a time; each pass consumes at
    least one character, so the scan is linear in the prefix length.
    """
    rest = line.lstrip(" ")
    while True:
        match = _CONTAINER_PREFIX.match(rest)
        if not match:
            break
        rest = rest[match.end():].lstrip(" ")
    fence = _FENCE_RUN.match(rest)
    if not fence:
        return None
    return fence.group(0), rest[fence.end():]


def _fence_of(line: str) -> Optional[str]:
    split = _split_fence(line)
    if split is None:
        return None
    fence, rest = split
    # A backtick run followed by more backticks is a code span, not a fence
    if fence[0] == "`" and "`" in rest:
        return None
    return fence


def _closes(line: str, fence: str) -> bool:
    split = _split_fence(line)
    if split is None:
        return False
    candidate, rest = split
    return candidate[0] == fence[0] and len(candidate) >= len(fence) and not rest.strip()


def finalize(buffer: str) -> str:
    """Normalize raw emitter output into the final markdown document.

    Args:
        buffer: Raw markdown from the emitter

    Returns:
        Markdown with at most one consecutive blank line, no trailing
        whitespace (except hard breaks), no leading blank lines and exactly
        one trailing newline; the empty string for an empty document
    """
    lines = buffer.replace("\r\n", "\n").replace("\r", "\n").split("\n")
    output: List[str] = []
    open_fence: Optional[str] = None

    for position, line in enumerate(lines):
        if open_fence is not None:
            output.append(line)
            if _closes(line, open_fence):
                open_fence = None
            continue

        fence = _fence_of(line)
        if fence is not None:
            open_fence = fence
            output.append(line.rstrip())
            continue

        stripped = line.rstrip()
        if not stripped:
            if output and output[-1] != "":
                output.append("")
            continue

        following = lines[position + 1] if position + 1 < len(lines) else ""
        if _HARD_BREAK.search(line) and following.strip():
            stripped += "  "
        output.append(stripped)

    while output and output[-1] == "":
        output.pop()
    if not output:
        return ""
    return "\n".join(output) + "\n"
