from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Literal

Role = Literal["user", "assistant"]


@dataclass(frozen=True)
class ConversationMessage:
    role: Role
    content: str

    def to_dict(self) -> dict[str, object]:
        return {"role": self.role, "content": self.content}


@dataclass(frozen=True)
class ReferenceDocument:
    """A previously ingested document folded into the prompt verbatim."""

    filename: str
    content: str


@dataclass(frozen=True)
class Prompt:
    """System instruction block followed by the conversation to send."""

    system: str
    messages: list[ConversationMessage] = field(default_factory=list)

    def to_messages(self) -> list[dict[str, object]]:
        return [{"role": "system", "content": self.system}] + [
            message.to_dict() for message in self.messages
        ]


@dataclass(frozen=True)
class Flashcard:
    question: str
    answer: str


@dataclass(frozen=True)
class MindMapNode:
    id: str
    label: str
    details: str = ""
    children: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class MindMap:
    """Topic graph. Child ids may dangle and the graph may contain cycles.

    The traversal helpers never follow a dangling id and visit each node once,
    so callers can render or count the map without guarding against either.
    """

    topic: str
    nodes: list[MindMapNode] = field(default_factory=list)

    def node(self, node_id: str) -> MindMapNode | None:
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None

    def root(self) -> MindMapNode | None:
        """Node '1' when present, otherwise the first node."""
        return self.node("1") or (self.nodes[0] if self.nodes else None)

    def children_of(self, node: MindMapNode) -> list[MindMapNode]:
        """Resolved children of *node*; dangling ids are skipped."""
        resolved = (self.node(child_id) for child_id in node.children)
        return [child for child in resolved if child is not None]

    def walk(self) -> Iterator[tuple[MindMapNode, int]]:
        """Depth-first ``(node, depth)`` from the root, visiting each node once."""
        root = self.root()
        if root is None:
            return
        visited: set[str] = set()
        stack: list[tuple[MindMapNode, int]] = [(root, 0)]
        while stack:
            node, depth = stack.pop()
            if node.id in visited:
                continue
            visited.add(node.id)
            yield node, depth
            for child in reversed(self.children_of(node)):
                if child.id not in visited:
                    stack.append((child, depth + 1))


@dataclass(frozen=True)
class ArtifactExtraction:
    """Display text with structured payloads removed, plus the parsed payloads."""

    display_text: str
    flashcards: list[Flashcard] | None = None
    mindmap: MindMap | None = None
