class GuidelintError(Exception):
    """Base class for every error raised by guidelint"""


class SourceError(GuidelintError):
    """An error tied to a location in a source file"""

    def __init__(self, message: str, line: int, column: int):
        super().__init__(f"{message} (line {line}, column {column})")
        self.message = message
        self.line = line
        self.column = column


class LexError(SourceError):
    """Raised when the source cannot be split into tokens (unterminated literal or comment)"""


class ParseError(SourceError):
    """Raised when the token stream is not valid in the language grammar"""
