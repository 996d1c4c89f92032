"""Locates fenced structured blocks inside a completion.

A block looks like::

    ```flashcards
    [ ... ]
    ```

The opening marker is three backticks, the tag and a line break; the block
ends at the first following line that starts with three backticks. Only the
first block per tag is located.
"""

import re
from dataclasses import dataclass
from functools import lru_cache

FENCE = "```"
_CLOSING = "\n" + FENCE


@dataclass(frozen=True)
class FencedBlock:
    tag: str
    start: int
    end: int
    body: str


@lru_cache(maxsize=16)
def _opening_pattern(tag: str) -> re.Pattern[str]:
    return re.compile(re.escape(FENCE + tag) + r"[ \t]*\r?\n")


def find_fenced_block(text: str, tag: str) -> FencedBlock | None:
    """Return the first complete ```` ```tag ```` block in *text*, or None.

    ``start``/``end`` span the whole block including both markers. An
    opening marker without a closing marker is not a block.
    """
    opening = _opening_pattern(tag).search(text)
    if opening is None:
        return None
    body_start = opening.end()
    close_at = text.find(_CLOSING, body_start - 1)
    if close_at == -1:
        return None
    body = text[body_start:close_at] if close_at >= body_start else ""
    return FencedBlock(
        tag=tag,
        start=opening.start(),
        end=close_at + len(_CLOSING),
        body=body.rstrip("\r"),
    )


def remove_blocks(text: str, blocks: list[FencedBlock]) -> str:
    """Remove the given block spans from *text*; overlapping spans are merged."""
    spans = sorted((block.start, block.end) for block in blocks)
    pieces: list[str] = []
    cursor = 0
    for start, end in spans:
        if start < cursor:
            cursor = max(cursor, end)
            continue
        pieces.append(text[cursor:start])
        cursor = end
    pieces.append(text[cursor:])
    return "".join(pieces)
