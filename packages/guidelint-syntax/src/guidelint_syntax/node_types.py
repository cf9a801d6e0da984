from dataclasses import dataclass
from typing import Iterator

from .languages import Language
from .tokens import Position, Span, Token


@dataclass(frozen=True)
class SyntaxNode:
    """A node of the syntax tree. Nodes are immutable and own their children exclusively.

    `kind` is the grammar's node type (`if_statement`, `declaration`, `start_tag`).
    Punctuation and keywords appear as unnamed children whose kind is their text.
    `role` is the field the node fills in its parent (`body`, `condition`,
    `operator`), and `value` holds the source text of leaves and of literals
    that read as one token.
    """

    kind: str
    span: Span
    children: tuple["SyntaxNode", ...] = ()
    value: str | None = None
    role: str | None = None
    named: bool = True

    @property
    def start(self) -> Position:
        return self.span.start

    @property
    def end(self) -> Position:
        return self.span.end

    @property
    def named_children(self) -> list["SyntaxNode"]:
        return [node for node in self.children if node.named]

    def child(self, role: str) -> "SyntaxNode | None":
        """Return the first child filling the given role"""
        for node in self.children:
            if node.role == role:
                return node
        return None

    def children_of_kind(self, *kinds: str) -> list["SyntaxNode"]:
        return [node for node in self.children if node.kind in kinds]

    def iter(self) -> Iterator["SyntaxNode"]:
        """Pre-order iteration over this node and all of its descendants"""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def text(self, source: str) -> str:
        return source[self.span.start.offset : self.span.end.offset]


@dataclass(frozen=True)
class ParseResult:
    """Result of tokenizing and parsing one source text"""

    tree: SyntaxNode
    tokens: tuple[Token, ...]
    source: str
    language: Language
