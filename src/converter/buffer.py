"""Append-only output buffer of markdown fragments.

Fragments are either inline (joined directly, with HTML-style collapsing of
adjacent spaces) or block-level (separated from their neighbours by a blank
line). A run of inline fragments between blocks forms an implicit
paragraph. The buffer is flattened to text only once, by render().

Two lists of the same kind rendered back to back would read as one list,
so an empty HTML comment line is placed between them.
"""

from dataclasses import dataclass
from typing import List, Optional

from .escaper import finalize_inline

LIST_SEPARATOR = "<!-- -->"
ORDERED = "ordered"
UNORDERED = "unordered"


def list_kind(ordered: bool) -> str:
    return ORDERED if ordered else UNORDERED


@dataclass
class Fragment:
    """One piece of emitted markdown.

    Attributes:
        text: Markdown text
        block: True for block-level fragments
        first_list: Kind of the list the block text begins with, if any
        last_list: Kind of the list the block text ends inside, if any
    """
    text: str
    block: bool = False
    first_list: Optional[str] = None
    last_list: Optional[str] = None


class OutputBuffer:
    """Collects fragments for one block container.

    Attributes:
        fragments: Fragments in emission order
        tight_lists: Join list blocks to the preceding block with a single
            newline instead of a blank line (used for list item bodies)
        nested: Buffer for the content of an inline element; a leading
            space is kept so the enclosing run can collapse it
        first_list: Set by render(); kind of the list the output begins with
        last_list: Set by render(); kind of the list the output ends inside
    """

    def __init__(self, tight_lists: bool = False, nested: bool = False):
        self.fragments: List[Fragment] = []
        self.tight_lists = tight_lists
        self.nested = nested
        self.first_list: Optional[str] = None
        self.last_list: Optional[str] = None

    def __bool__(self) -> bool:
        return any(fragment.text for fragment in self.fragments)

    def _at_inline_space(self) -> bool:
        if not self.fragments:
            return not self.nested
        if self.fragments[-1].block:
            return True
        return self.fragments[-1].text.endswith((" ", "\n"))

    def append_inline(self, text: str) -> None:
        if text.startswith(" ") and self._at_inline_space():
            text = text.lstrip(" ")
        if text:
            self.fragments.append(Fragment(text))

    def append_block(
        self,
        text: str,
        first_list: Optional[str] = None,
        last_list: Optional[str] = None
    ) -> None:
        if text:
            self.fragments.append(
                Fragment(text, block=True, first_list=first_list, last_list=last_list)
            )

    def inline_text(self) -> str:
        """Concatenate fragments verbatim, for inline-only content."""
        return "".join(fragment.text for fragment in self.fragments)

    def _separator(self, previous: Fragment, block: Fragment) -> str:
        if block.first_list is not None and previous.last_list == block.first_list:
            if self.tight_lists:
                return f"\n{LIST_SEPARATOR}\n"
            return f"\n\n{LIST_SEPARATOR}\n\n"
        if self.tight_lists and block.first_list is not None:
            return "\n"
        return "\n\n"

    def render(self) -> str:
        """Flatten the buffer into markdown blocks."""
        blocks: List[Fragment] = []
        run: List[str] = []

        def flush_run():
            text = finalize_inline("".join(run))
            run.clear()
            if text:
                blocks.append(Fragment(text, block=True))

        for fragment in self.fragments:
            if fragment.block:
                flush_run()
                blocks.append(fragment)
            else:
                run.append(fragment.text)
        flush_run()

        self.first_list = blocks[0].first_list if blocks else None
        self.last_list = blocks[-1].last_list if blocks else None

        parts = []
        for position, block in enumerate(blocks):
            if position:
                parts.append(self._separator(blocks[position - 1], block))
            parts.append(block.text)
        return "".join(parts)
