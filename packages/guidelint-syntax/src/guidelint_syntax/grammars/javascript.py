"""JavaScript grammar, backed by tree-sitter-javascript."""

import tree_sitter_javascript as tsjs
from tree_sitter import Language

from ..lexer import Delimiter
from ..tokens import TokenKind

LANGUAGE = Language(tsjs.language())

# Node types read as a single token
ATOMIC = {
    "string": TokenKind.STRING,
    "template_string": TokenKind.STRING,
    "regex": TokenKind.REGEX,
    "number": TokenKind.NUMBER,
    "comment": TokenKind.COMMENT,
    "html_comment": TokenKind.COMMENT,
    "hash_bang_line": TokenKind.COMMENT,
}
SPLIT = frozenset()
GAP_KIND = None

DELIMITERS = (
    Delimiter("'", "'", "string literal", multiline=False, escapes=True),
    Delimiter('"', '"', "string literal", multiline=False, escapes=True),
    Delimiter("`", "`", "template literal", escapes=True),
    Delimiter("/*", "*/", "comment"),
)
ERROR_NODES = {}
