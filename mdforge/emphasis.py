"""Matching of '*' and '_' emphasis runs into <em> and <strong> markup."""

from __future__ import annotations

import enum
from collections.abc import Iterable
from dataclasses import dataclass, replace


class BlockType(enum.Enum):
    TEXT = "text"
    STAR = "star"
    UNDER = "under"


@dataclass
class EmBlock:
    """A run of text, or a run of ``count`` emphasis characters.

    ``post`` collects closing tags that are written before ``text``.
    """

    type: BlockType = BlockType.TEXT
    count: int = 0
    char: str = ""
    text: str = ""
    post: str = ""


_EMTAGS = {1: ("<em>", "</em>"), 2: ("<strong>", "</strong>")}


class _Matcher:
    def __init__(self, blocks: list[EmBlock]) -> None:
        self.q = blocks

    def pair(self, first: int, last: int, match: int) -> int:
        """Index of the nearest block that can close the run at ``first``, or 0."""
        begin = self.q[first]
        for i in range(first + 1, last + 1):
            p = self.q[i]
            if p.type is not BlockType.TEXT and p.count <= 0:
                continue
            if p.type is begin.type and (p.count == match or p.count > 2):
                return i
        return 0

    @staticmethod
    def fill(block: EmBlock) -> None:
        if block.type is BlockType.TEXT:
            return
        block.text += block.char * block.count
        block.count = 0

    def close(self, first: int, last: int) -> None:
        for block in self.q[first + 1:last - 1]:
            self.fill(block)

    def match(self, first: int, last: int) -> None:
        start = self.q[first]
        while True:
            if start.count == 0:
                return
            if start.count == 2:
                match = 2
                end = self.pair(first, last, 2)
                if not end:
                    match = 1
                    end = self.pair(first, last, 1)
            elif start.count == 1:
                match = 1
                end = self.pair(first, last, 1)
            else:
                end = self.pair(first, last, 1)
                end2 = self.pair(first, last, 2)
                if end2 >= end:
                    end, match = end2, 2
                else:
                    match = 1

            if not end:
                return

            closer = self.q[end]
            closer.count -= match
            start.count -= match
            self.block(first, end)

            open_tag, close_tag = _EMTAGS[match]
            start.text = open_tag + start.text
            closer.post += close_tag

    def block(self, first: int, last: int) -> None:
        for i in range(first, last + 1):
            if self.q[i].type is not BlockType.TEXT:
                self.match(i, last)
        self.close(first, last)


def render_emphasis(blocks: Iterable[EmBlock]) -> str:
    """Match emphasis across ``blocks`` and return the resulting markup.

    Unmatched emphasis characters are written back as plain text. The
    given blocks are not modified.
    """
    queue = [replace(block) for block in blocks]
    matcher = _Matcher(queue)
    matcher.block(0, len(queue) - 1)
    out: list[str] = []
    for block in queue:
        matcher.fill(block)
        out.append(block.post)
        out.append(block.text)
    return "".join(out)