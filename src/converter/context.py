"""Conversion context stack threaded through the DOM walk.

The stack records the structural context enclosing the node being emitted
(lists, blockquotes, preformatted regions, table rows). Frames are pushed
and popped only through the frame() context manager, so the stack depth on
leaving a node always equals the depth on entering it.
"""

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, List, Optional, TypeVar, Union

from src.models.conversion_options import DEFAULT_MAX_DEPTH

from .errors import DepthExceededError


@dataclass
class ListFrame:
    """An open list; counter is the number the next item receives."""
    ordered: bool
    counter: int = 1


@dataclass
class BlockquoteFrame:
    """Inside a blockquote; prefixes are applied by the enclosing renderer."""


@dataclass
class PreformattedFrame:
    """Inside a code block, where text is emitted verbatim."""


@dataclass
class TableRowFrame:
    """Inside a table row, where line breaks become <br>."""


Frame = Union[ListFrame, BlockquoteFrame, PreformattedFrame, TableRowFrame]
F = TypeVar("F", ListFrame, BlockquoteFrame, PreformattedFrame, TableRowFrame)


class ConversionContext:
    """Per-conversion stack of context frames plus the nesting depth guard.

    Attributes:
        frames: Open frames, innermost last
        depth: Current element nesting depth
        max_depth: Depth beyond which conversion fails fast
    """

    def __init__(self, max_depth: int = DEFAULT_MAX_DEPTH):
        self.frames: List[Frame] = []
        self.depth = 0
        self.max_depth = max_depth

    @contextmanager
    def frame(self, frame: F) -> Iterator[F]:
        """Push frame for the duration of the with-block."""
        self.frames.append(frame)
        try:
            yield frame
        finally:
            popped = self.frames.pop()
            if popped is not frame:
                raise RuntimeError("Context frames popped out of order")

    @contextmanager
    def descend(self) -> Iterator[int]:
        """Enter one level of element nesting.

        Raises:
            DepthExceededError: If the new depth exceeds max_depth
        """
        if self.depth + 1 > self.max_depth:
            raise DepthExceededError(self.depth + 1, self.max_depth)
        self.depth += 1
        try:
            yield self.depth
        finally:
            self.depth -= 1

    def _count(self, frame_type) -> int:
        return sum(1 for frame in self.frames if isinstance(frame, frame_type))

    @property
    def in_preformatted(self) -> bool:
        return self._count(PreformattedFrame) > 0

    @property
    def in_table_row(self) -> bool:
        return self._count(TableRowFrame) > 0

    @property
    def list_depth(self) -> int:
        return self._count(ListFrame)

    @property
    def current_list(self) -> Optional[ListFrame]:
        for frame in reversed(self.frames):
            if isinstance(frame, ListFrame):
                return frame
        return None
