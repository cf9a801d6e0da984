"""HTML grammar, backed by tree-sitter-html."""

import tree_sitter_html as tshtml
from tree_sitter import Language

from ..lexer import Delimiter
from ..tokens import TokenKind

LANGUAGE = Language(tshtml.language())

ATOMIC = {
    "quoted_attribute_value": TokenKind.STRING,
    "attribute_value": TokenKind.TEXT,
    "text": TokenKind.TEXT,
    "raw_text": TokenKind.TEXT,
    "entity": TokenKind.TEXT,
    "comment": TokenKind.COMMENT,
}
# Character data is split on whitespace like the text between tags
SPLIT = frozenset({"text"})
GAP_KIND = TokenKind.TEXT

DELIMITERS = (
    Delimiter("<!--", "-->", "comment"),
    Delimiter('"', '"', "attribute value"),
    Delimiter("'", "'", "attribute value"),
    Delimiter("<", ">", "tag"),
)
ERROR_NODES = {"erroneous_end_tag": "unexpected end tag"}

ELEMENTS = frozenset({"element", "script_element", "style_element"})
VOID_ELEMENTS = frozenset({
    "area", "base", "br", "col", "embed", "hr", "img", "input",
    "link", "meta", "param", "source", "track", "wbr",
})
