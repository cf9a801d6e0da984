"""
guidelint syntax - tokenizers and parsers for JavaScript, CSS and HTML

Sources are parsed with tree-sitter grammars. Every grammar shares the Token
and SyntaxNode model; tokenization is lossless and parsing is deterministic.
"""

from .ast_walker import ASTWalker
from .errors import GuidelintError, LexError, ParseError, SourceError
from .languages import Language, detect_language
from .node_types import ParseResult, SyntaxNode
from .parser import SourceParser, parse_tokens, tokenize
from .tokens import Position, Span, Token, TokenKind

__version__ = "0.1.0"

__all__ = [
    "ASTWalker",
    "GuidelintError",
    "Language",
    "LexError",
    "ParseError",
    "ParseResult",
    "Position",
    "SourceError",
    "SourceParser",
    "Span",
    "SyntaxNode",
    "Token",
    "TokenKind",
    "detect_language",
    "parse_tokens",
    "tokenize",
]
