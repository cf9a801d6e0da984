"""CSS grammar, backed by tree-sitter-css."""

import re

import tree_sitter_css as tscss
from tree_sitter import Language

from ..lexer import Delimiter
from ..tokens import TokenKind

LANGUAGE = Language(tscss.language())

ATOMIC = {
    "string_value": TokenKind.STRING,
    "integer_value": TokenKind.NUMBER,
    "float_value": TokenKind.NUMBER,
    "color_value": TokenKind.IDENTIFIER,
    "comment": TokenKind.COMMENT,
    "js_comment": TokenKind.COMMENT,
}
SPLIT = frozenset()
GAP_KIND = None

DELIMITERS = (
    Delimiter("/*", "*/", "comment"),
    Delimiter("'", "'", "string", multiline=False, escapes=True),
    Delimiter('"', '"', "string", multiline=False, escapes=True),
)
ERROR_NODES = {}

_CUSTOM_PROPERTY = re.compile(r"--[\w-]*\s*:")


def _string_end(source: str, start: int) -> int:
    quote = source[start]
    index = start + 1
    while index < len(source):
        if source[index] == "\\":
            index += 2
            continue
        if source[index] == quote or source[index] == "\n":
            return index + 1
        index += 1
    return len(source)


def _comment_end(source: str, start: int) -> int:
    end = source.find("*/", start + 2)
    return len(source) if end < 0 else end + 2


def _value_end(source: str, start: int) -> int:
    """Offset of the `;` or unmatched `}` that ends a declaration value"""
    depth = 0
    index = start
    while index < len(source):
        char = source[index]
        if char in "'\"":
            index = _string_end(source, index)
            continue
        if source.startswith("/*", index):
            index = _comment_end(source, index)
            continue
        if char in "([{":
            depth += 1
        elif char in ")]}":
            if not depth:
                return index
            depth -= 1
        elif char == ";" and not depth:
            return index
        index += 1
    return len(source)


def mask_custom_properties(source: str) -> str | None:
    """Blank out custom property values that contain braces.

    Custom properties accept any balanced token sequence, including `{}`
    blocks, which the stylesheet grammar reads as nested rules. Every
    non-whitespace character of such a value becomes `x`, so the masked text
    keeps the length and line structure of the source. Returns None when
    there is nothing to mask.
    """
    masked = list(source)
    changed = False
    index = 0
    while index < len(source):
        char = source[index]
        if source.startswith("/*", index):
            index = _comment_end(source, index)
            continue
        if char in "'\"":
            index = _string_end(source, index)
            continue
        match = None
        if index == 0 or source[index - 1] in "{;" or source[index - 1].isspace():
            match = _CUSTOM_PROPERTY.match(source, index)
        if match is None:
            index += 1
            continue
        end = _value_end(source, match.end())
        if "{" in source[match.end() : end]:
            for position in range(match.end(), end):
                if not source[position].isspace():
                    masked[position] = "x"
            changed = True
        index = end
    return "".join(masked) if changed else None
