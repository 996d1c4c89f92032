"""Turns a raw completion into display text plus flashcards and a mind map."""

import json
from collections.abc import Callable
from typing import TypeVar

from studyassist.chat.blocks import FencedBlock, find_fenced_block, remove_blocks
from studyassist.chat.exceptions import MalformedArtifactError
from studyassist.chat.models import ArtifactExtraction, Flashcard, MindMap
from studyassist.chat.validator import build_flashcards, build_mindmap
from studyassist.logging.logger import Log

FLASHCARDS_TAG = "flashcards"
MINDMAP_TAG = "mindmap"

FLASHCARDS_NOTE = (
    "I've created flashcards for this query. Use the buttons below to open them."
)
MINDMAP_NOTE = "I've created a mind map for this query. Use the buttons below to open it."

T = TypeVar("T")


def extract_artifacts(completion_text: str | None) -> ArtifactExtraction:
    """Split a completion into display text and structured artifacts.

    Malformed payloads are logged and treated as absent. The first block of
    each tag is parsed and removed; later blocks with the same tag stay in the
    display text. An empty display text means there is nothing to show.
    """
    text = completion_text or ""

    flashcards_block = find_fenced_block(text, FLASHCARDS_TAG)
    mindmap_block = find_fenced_block(text, MINDMAP_TAG)

    flashcards = _parse_block(flashcards_block, build_flashcards) or None
    mindmap = _parse_block(mindmap_block, build_mindmap)

    found = [block for block in (flashcards_block, mindmap_block) if block is not None]
    cleaned = remove_blocks(text, found).strip()

    return ArtifactExtraction(
        display_text=_compose_display_text(cleaned, flashcards, mindmap),
        flashcards=flashcards,
        mindmap=mindmap,
    )


def _parse_block(
    block: FencedBlock | None,
    build: Callable[[object], T],
) -> T | None:
    if block is None:
        return None
    try:
        return build(json.loads(block.body))
    except (json.JSONDecodeError, MalformedArtifactError) as exc:
        Log.warning(f"Ignoring malformed {block.tag} block", error=str(exc))
        return None


def _compose_display_text(
    cleaned: str,
    flashcards: list[Flashcard] | None,
    mindmap: MindMap | None,
) -> str:
    if cleaned:
        return f"{cleaned}\n\n{FLASHCARDS_NOTE}" if flashcards else cleaned
    if flashcards:
        return FLASHCARDS_NOTE
    if mindmap is not None:
        return MINDMAP_NOTE
    return ""
