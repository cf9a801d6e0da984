from dataclasses import dataclass
from enum import Enum


class TokenKind(str, Enum):
    IDENTIFIER = "identifier"
    STRING = "string"
    PUNCTUATION = "punctuation"
    NUMBER = "number"
    COMMENT = "comment"
    WHITESPACE = "whitespace"
    REGEX = "regex"
    TEXT = "text"


TRIVIA = frozenset({TokenKind.WHITESPACE, TokenKind.COMMENT})


@dataclass(frozen=True, order=True)
class Position:
    """A point in the source. Lines and columns are 1-based, offset is a 0-based character index."""

    line: int
    column: int
    offset: int


@dataclass(frozen=True)
class Span:
    start: Position
    end: Position  # exclusive

    def contains(self, offset: int) -> bool:
        return self.start.offset <= offset < self.end.offset


@dataclass(frozen=True)
class Token:
    """A lexical token. Concatenating the text of all tokens gives back the source."""

    kind: TokenKind
    text: str
    line: int
    column: int
    offset: int

    @property
    def start(self) -> Position:
        return Position(self.line, self.column, self.offset)

    @property
    def end(self) -> Position:
        newlines = self.text.count("\n")
        if newlines:
            column = len(self.text) - self.text.rfind("\n")
        else:
            column = self.column + len(self.text)
        return Position(self.line + newlines, column, self.offset + len(self.text))

    @property
    def end_offset(self) -> int:
        return self.offset + len(self.text)

    @property
    def is_trivia(self) -> bool:
        return self.kind in TRIVIA

    def is_punct(self, *texts: str) -> bool:
        return self.kind == TokenKind.PUNCTUATION and self.text in texts
