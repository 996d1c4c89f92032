"""Reduces extracted text to a safe, bounded string before persistence."""

import re

MAX_CONTENT_CHARS = 50_000

# C0 controls except tab and newline, DEL, and the C1 block.
_CONTROL_RE = re.compile("[\x00-\x08\x0b-\x1f\x7f-\x9f]")
# A str holds code points, so any surrogate left in one is unpaired.
_SURROGATE_RE = re.compile("[\ud800-\udfff]")


def sanitize(text: str | None, max_chars: int = MAX_CONTENT_CHARS) -> str:
    """Strip NUL, control characters and lone surrogates, then truncate.

    Pure and idempotent: ``sanitize(sanitize(x)) == sanitize(x)``.
    """
    if not text:
        return ""
    cleaned = text.replace("\x00", "")
    cleaned = _CONTROL_RE.sub("", cleaned)
    cleaned = _SURROGATE_RE.sub("", cleaned)
    return cleaned[:max_chars]
