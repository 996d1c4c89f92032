"""Validates parsed flashcard and mind-map payloads and builds domain objects."""

from typing import Any

from studyassist.chat.exceptions import MalformedArtifactError
from studyassist.chat.models import Flashcard, MindMap, MindMapNode


def build_flashcards(data: Any) -> list[Flashcard]:
    """Build a flashcard set from a parsed JSON array.

    Raises:
        MalformedArtifactError: if the payload is not a list of
            ``{"question": str, "answer": str}`` objects.
    """
    if not isinstance(data, list):
        raise MalformedArtifactError("'flashcards' must be a JSON array")
    return [_build_flashcard(item, i) for i, item in enumerate(data)]


def _build_flashcard(raw: Any, index: int) -> Flashcard:
    if not isinstance(raw, dict):
        raise MalformedArtifactError(f"Flashcard at index {index} must be an object")
    question = raw.get("question")
    answer = raw.get("answer")
    if not isinstance(question, str) or not question.strip():
        raise MalformedArtifactError(
            f"Flashcard at index {index}: 'question' must be a non-empty string"
        )
    if not isinstance(answer, str):
        raise MalformedArtifactError(f"Flashcard at index {index}: 'answer' must be a string")
    return Flashcard(question=question, answer=answer)


def build_mindmap(data: Any) -> MindMap:
    """Build a mind map from a parsed JSON object.

    Child references are not checked against the node set, and cycles are
    accepted; node ids must be unique.

    Raises:
        MalformedArtifactError: on any shape violation.
    """
    if not isinstance(data, dict):
        raise MalformedArtifactError("'mindmap' must be a JSON object")
    topic = data.get("topic")
    if not isinstance(topic, str):
        raise MalformedArtifactError("'mindmap.topic' must be a string")
    raw_nodes = data.get("nodes")
    if not isinstance(raw_nodes, list):
        raise MalformedArtifactError("'mindmap.nodes' must be a list")

    seen_ids: set[str] = set()
    nodes: list[MindMapNode] = []
    for i, item in enumerate(raw_nodes):
        node = _build_node(item, i)
        if node.id in seen_ids:
            raise MalformedArtifactError(f"Duplicate mind map node id: {node.id}")
        seen_ids.add(node.id)
        nodes.append(node)
    return MindMap(topic=topic, nodes=nodes)


def _build_node(raw: Any, index: int) -> MindMapNode:
    if not isinstance(raw, dict):
        raise MalformedArtifactError(f"Node at index {index} must be an object")
    node_id = _as_id(raw.get("id"))
    if node_id is None:
        raise MalformedArtifactError(f"Node at index {index}: 'id' must be a string")
    label = raw.get("label")
    if not isinstance(label, str):
        raise MalformedArtifactError(f"Node at index {index}: 'label' must be a string")
    details = raw.get("details", "")
    if details is None:
        details = ""
    if not isinstance(details, str):
        raise MalformedArtifactError(f"Node at index {index}: 'details' must be a string")
    raw_children = raw.get("children", [])
    if raw_children is None:
        raw_children = []
    if not isinstance(raw_children, list):
        raise MalformedArtifactError(f"Node at index {index}: 'children' must be a list")
    children: list[str] = []
    for child in raw_children:
        child_id = _as_id(child)
        if child_id is None:
            raise MalformedArtifactError(
                f"Node at index {index}: 'children' must contain node ids"
            )
        children.append(child_id)
    return MindMapNode(id=node_id, label=label, details=details, children=children)


def _as_id(raw: Any) -> str | None:
    # Models sometimes emit numeric ids; bool is an int subclass and is rejected.
    if isinstance(raw, str) and raw:
        return raw
    if isinstance(raw, int) and not isinstance(raw, bool):
        return str(raw)
    return None
