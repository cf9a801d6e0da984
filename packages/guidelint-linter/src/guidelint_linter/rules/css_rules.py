"""CSS rules: declaration order, values, colours, quoting and punctuation."""

import re
from typing import Iterator, Literal

from pydantic import field_validator
from guidelint_syntax import ASTWalker, SyntaxNode, TokenKind

from ..models import Violation
from .base import CSS, RuleContext, RuleOptions, brace_spacing_problem, check_quotes, lint_rule

_VENDOR_PREFIX = re.compile(r"^-(?:webkit|moz|ms|o)-")

CATEGORIES = ("positioning", "box-model", "typography", "other")

CATEGORY_PROPERTIES = {
    "positioning": {"position", "top", "right", "bottom", "left", "z-index", "inset"},
    "box-model": {
        "display", "float", "clear", "box-sizing", "width", "height",
        "min-width", "max-width", "min-height", "max-height", "order", "gap",
        "row-gap", "column-gap", "align-items", "align-content", "align-self",
        "justify-content", "justify-items", "justify-self", "place-items",
        "place-content", "overflow", "overflow-x", "overflow-y",
    },
    "typography": {
        "color", "font", "line-height", "letter-spacing", "word-spacing",
        "white-space", "word-break", "word-wrap", "overflow-wrap",
        "vertical-align", "hyphens", "direction", "quotes",
    },
}
CATEGORY_FAMILIES = {
    "positioning": ("inset-",),
    "box-model": ("margin", "padding", "border", "flex", "grid"),
    "typography": ("font-", "text-", "list-style"),
}


def _property_name(declaration: SyntaxNode) -> str | None:
    name = ASTWalker.get_child_of_kind(declaration, "property_name")
    return name.value if name is not None else None


def property_category(name: str, overrides: dict[str, str]) -> str | None:
    """Return the ordering category of a property, or None for custom properties"""
    name = name.lower()
    if name.startswith("--"):
        return None
    if name in overrides:
        return overrides[name]
    name = _VENDOR_PREFIX.sub("", name)
    for category, names in CATEGORY_PROPERTIES.items():
        if name in names:
            return category
    for category, prefixes in CATEGORY_FAMILIES.items():
        if name.startswith(prefixes):
            return category
    return "other"


class DeclarationOrderOptions(RuleOptions):
    order: list[str] = list(CATEGORIES)
    properties: dict[str, str] = {}

    @field_validator("order")
    @classmethod
    def _complete_order(cls, value: list[str]) -> list[str]:
        if sorted(value) != sorted(CATEGORIES):
            raise ValueError(f"order must list each of {', '.join(CATEGORIES)} exactly once")
        return value

    @field_validator("properties")
    @classmethod
    def _known_categories(cls, value: dict[str, str]) -> dict[str, str]:
        for prop, category in value.items():
            if category not in CATEGORIES:
                raise ValueError(f"unknown category '{category}' for property '{prop}'")
        return {prop.lower(): category for prop, category in value.items()}


@lint_rule("declaration-order", "C201", CSS, options=DeclarationOrderOptions)
def declaration_order(context: RuleContext) -> Iterator[Violation]:
    """Declarations are grouped: positioning, box model, typography, then the rest"""
    options: DeclarationOrderOptions = context.options
    rank = {category: index for index, category in enumerate(options.order)}
    for block in context.tree.iter():
        if block.kind != "block":
            continue
        ranked = []
        for declaration in block.children_of_kind("declaration"):
            name = _property_name(declaration)
            category = property_category(name, options.properties) if name else None
            if category is not None:
                ranked.append((declaration, name, category))
        violation = _first_out_of_order(context, ranked, rank)
        if violation is not None:
            yield violation


def _first_out_of_order(context: RuleContext, ranked, rank) -> Violation | None:
    for index, (declaration, name, category) in enumerate(ranked):
        for _, later_name, later_category in ranked[index + 1 :]:
            if rank[later_category] < rank[category]:
                return context.report(
                    declaration,
                    f"Property '{name}' ({category}) should come after "
                    f"'{later_name}' ({later_category})",
                )
    return None


_ZERO_LENGTH = re.compile(
    r"[+-]?(?:0+(?:\.0*)?|\.0+)(?:px|em|rem|ex|ch|vw|vh|vmin|vmax|cm|mm|q|in|pt|pc)",
    re.IGNORECASE,
)


@lint_rule("zero-units", "C202", CSS)
def zero_units(context: RuleContext) -> Iterator[Violation]:
    """Zero lengths are written without a unit"""
    for node, ancestors in ASTWalker.walk_with_parents(context.tree):
        if node.kind not in ("integer_value", "float_value"):
            continue
        if ASTWalker.find_parent_of_kind(ancestors, "declaration") is None:
            continue
        if _ZERO_LENGTH.fullmatch(node.value):
            yield context.report(
                node,
                f"Unit is unnecessary on zero value '{node.value}'",
                suggestion="Use 0",
            )


_HEX_COLOR = re.compile(r"#(?:[0-9a-fA-F]{3,4}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})")


class HexColorOptions(RuleOptions):
    case: Literal["lower", "upper"] = "lower"


@lint_rule("hex-color-case", "C203", CSS, options=HexColorOptions)
def hex_color_case(context: RuleContext) -> Iterator[Violation]:
    """Hex colours use the configured letter case"""
    upper = context.options.case == "upper"
    for node in context.tree.iter():
        if node.kind != "color_value" or not _HEX_COLOR.fullmatch(node.value):
            continue
        expected = node.value.upper() if upper else node.value.lower()
        if node.value != expected:
            yield context.report(
                node,
                f"Hex colour '{node.value}' should be {context.options.case}case",
                suggestion=f"Use {expected}",
            )


class CssQuoteOptions(RuleOptions):
    preferred: Literal["single", "double"] = "double"
    avoid_escape: bool = True


@lint_rule("css-quote-style", "C204", CSS, options=CssQuoteOptions)
def css_quote_style(context: RuleContext) -> Iterator[Violation]:
    """Strings use the preferred quote character"""
    literals = ((token, token.text) for token in context.tokens if token.kind == TokenKind.STRING)
    yield from check_quotes(context, literals, context.options.preferred, context.options.avoid_escape)


@lint_rule("brace-spacing", "C205", CSS)
def brace_spacing(context: RuleContext) -> Iterator[Violation]:
    """A rule's opening brace follows its selector after one space"""
    for block in context.tree.iter():
        if block.kind not in ("block", "keyframe_block_list"):
            continue
        problem = brace_spacing_problem(context, block.start.offset)
        if problem:
            yield context.report(block, problem)


@lint_rule("declaration-semicolon", "C206", CSS)
def declaration_semicolon(context: RuleContext) -> Iterator[Violation]:
    """Every declaration, including the last in a block, ends with a semicolon"""
    for node in context.tree.iter():
        if node.kind != "declaration":
            continue
        code = [child for child in node.children if child.kind != "comment"]
        if code and code[-1].kind != ";":
            yield context.report(node.end, "Missing semicolon after declaration", suggestion="Add ';'")


RULES = [
    declaration_order,
    zero_units,
    hex_color_case,
    css_quote_style,
    brace_spacing,
    declaration_semicolon,
]
