"""Tokens and lexical errors read off a tree-sitter concrete syntax tree."""

import re
from bisect import bisect_right
from types import ModuleType
from typing import Iterator, NamedTuple

from tree_sitter import Node

from .errors import LexError
from .tokens import Position, Span, Token, TokenKind

_GAP = re.compile(r"\s+|[\w$@#-]+|\S")
_WORDS = re.compile(r"\s+|\S+")
_WORD_START = re.compile(r"[^\W\d]|\$|[@#][\w-]|-+[^\W\d]")


class Delimiter(NamedTuple):
    """A literal or comment that must be closed before the end of input"""

    opener: str
    closer: str
    description: str
    multiline: bool = True
    escapes: bool = False


class SourceText:
    """Maps tree-sitter byte offsets onto character positions of the source.

    `parsed` is the text handed to tree-sitter. It may differ from `text` in
    content but never in length or line structure.
    """

    def __init__(self, text: str, parsed: str | None = None):
        self.text = text
        self.parsed = text if parsed is None else parsed
        self.data = self.parsed.encode("utf-8")
        self._chars: list[int] | None = None
        if len(self.data) != len(self.parsed):
            chars = []
            for index, char in enumerate(self.parsed):
                chars.extend([index] * len(char.encode("utf-8")))
            chars.append(len(self.parsed))
            self._chars = chars
        self.line_starts = [0]
        self.line_starts.extend(index + 1 for index, char in enumerate(text) if char == "\n")

    def offset(self, byte: int) -> int:
        return byte if self._chars is None else self._chars[byte]

    def position(self, offset: int) -> Position:
        line = bisect_right(self.line_starts, offset)
        return Position(line, offset - self.line_starts[line - 1] + 1, offset)

    def span(self, node: Node) -> Span:
        return Span(
            self.position(self.offset(node.start_byte)),
            self.position(self.offset(node.end_byte)),
        )

    def slice(self, node: Node) -> str:
        return self.text[self.offset(node.start_byte) : self.offset(node.end_byte)]


def iter_leaves(root: Node, atomic=frozenset()) -> Iterator[Node]:
    """Yield leaf nodes in document order, treating `atomic` node types as leaves"""
    stack = [root]
    while stack:
        node = stack.pop()
        if node.is_missing or node.start_byte == node.end_byte:
            continue
        if node.child_count == 0 or node.type in atomic:
            yield node
        else:
            stack.extend(reversed(node.children))


def _word_kind(text: str) -> TokenKind:
    if text[0].isdigit():
        return TokenKind.NUMBER
    if _WORD_START.match(text):
        return TokenKind.IDENTIFIER
    return TokenKind.PUNCTUATION


def _split(text: str, offset: int, source: SourceText, pattern: re.Pattern, kind: TokenKind | None) -> Iterator[Token]:
    for match in pattern.finditer(text):
        piece = match.group(0)
        if piece.isspace():
            piece_kind = TokenKind.WHITESPACE
        else:
            piece_kind = kind or _word_kind(piece)
        start = source.position(offset + match.start())
        yield Token(piece_kind, piece, start.line, start.column, start.offset)


def read_tokens(root: Node, source: SourceText, grammar: ModuleType) -> tuple[Token, ...]:
    """Build the lossless token sequence: the tree's leaves plus the text between them"""
    text = source.text
    gap = _WORDS if grammar.GAP_KIND else _GAP
    tokens: list[Token] = []
    cursor = 0
    for leaf in iter_leaves(root, grammar.ATOMIC.keys()):
        start, end = source.offset(leaf.start_byte), source.offset(leaf.end_byte)
        if end <= cursor:
            continue
        start = max(start, cursor)
        if start > cursor:
            tokens.extend(_split(text[cursor:start], cursor, source, gap, grammar.GAP_KIND))
        piece = text[start:end]
        if leaf.type in grammar.SPLIT:
            tokens.extend(_split(piece, start, source, _WORDS, grammar.ATOMIC[leaf.type]))
        else:
            kind = grammar.ATOMIC.get(leaf.type) or _word_kind(piece)
            position = source.position(start)
            tokens.append(Token(kind, piece, position.line, position.column, start))
        cursor = end
    if cursor < len(text):
        tokens.extend(_split(text[cursor:], cursor, source, gap, grammar.GAP_KIND))
    return tuple(tokens)


def error_nodes(root: Node, grammar: ModuleType) -> Iterator[Node]:
    """Yield ERROR, MISSING and grammar-specific error nodes in document order"""
    stack = [root]
    while stack:
        node = stack.pop()
        if node.is_missing or node.type == "ERROR" or node.type in grammar.ERROR_NODES:
            yield node
            continue
        if node.has_error or grammar.ERROR_NODES:
            stack.extend(reversed(node.children))


def unterminated(text: str, offset: int, delimiters) -> Delimiter | None:
    """Return the delimiter opening at `offset` if it is never closed"""
    for delimiter in delimiters:
        if not text.startswith(delimiter.opener, offset):
            continue
        index = offset + len(delimiter.opener)
        while index < len(text):
            if delimiter.escapes and text[index] == "\\":
                index += 2
                continue
            if text.startswith(delimiter.closer, index):
                return None
            if not delimiter.multiline and text[index] in "\r\n":
                return delimiter
            index += 1
        return delimiter
    return None


def _error_starts(error: Node, openers: frozenset) -> Iterator[Node]:
    yield error
    for leaf in iter_leaves(error):
        if leaf.type == "ERROR":
            yield leaf
        elif leaf.type in openers and (leaf.prev_sibling is None or leaf.parent.type == "ERROR"):
            yield leaf


def find_lex_error(root: Node, source: SourceText, grammar: ModuleType) -> LexError | None:
    """Locate an unterminated string, comment or tag, if the tree holds one"""
    closers = {delimiter.closer: delimiter for delimiter in grammar.DELIMITERS}
    openers = frozenset(delimiter.opener for delimiter in grammar.DELIMITERS)
    for node in error_nodes(root, grammar):
        if node.is_missing:
            delimiter = closers.get(node.type)
            if delimiter is not None:
                position = source.position(source.offset((node.parent or node).start_byte))
                return LexError(f"unterminated {delimiter.description}", position.line, position.column)
        elif node.type == "ERROR":
            for start in _error_starts(node, openers):
                offset = source.offset(start.start_byte)
                delimiter = unterminated(source.parsed, offset, grammar.DELIMITERS)
                if delimiter is not None:
                    position = source.position(offset)
                    return LexError(f"unterminated {delimiter.description}", position.line, position.column)
    return None
