"""HTML rules: attribute order and quoting, name case, boolean and void syntax, doctype."""

from fnmatch import fnmatchcase
from typing import Iterator, Literal

from guidelint_syntax import ASTWalker, SyntaxNode
from guidelint_syntax.grammars.html import ELEMENTS, VOID_ELEMENTS

from ..models import Severity, Violation
from .base import HTML, QUOTES, RuleContext, RuleOptions, lint_rule

# Elements whose tag and attribute names are case-sensitive
FOREIGN_ELEMENTS = frozenset({"svg", "math"})

BOOLEAN_ATTRIBUTES = frozenset({
    "allowfullscreen", "async", "autofocus", "autoplay", "checked", "controls",
    "default", "defer", "disabled", "formnovalidate", "hidden", "inert",
    "ismap", "itemscope", "loop", "multiple", "muted", "nomodule",
    "novalidate", "open", "playsinline", "readonly", "required", "reversed",
    "selected",
})


def _start_tag(element: SyntaxNode) -> SyntaxNode | None:
    return ASTWalker.get_child_of_kind(element, "start_tag", "self_closing_tag")


def _tag_name(element: SyntaxNode) -> str:
    """The tag name as written in the start tag"""
    tag = _start_tag(element)
    name = ASTWalker.get_child_of_kind(tag, "tag_name") if tag is not None else None
    return name.value if name is not None else ""


def _attributes(element: SyntaxNode) -> list[SyntaxNode]:
    tag = _start_tag(element)
    return tag.children_of_kind("attribute") if tag is not None else []


def _attribute_name(attribute: SyntaxNode) -> str:
    return ASTWalker.get_child_of_kind(attribute, "attribute_name").value


def _attribute_value(attribute: SyntaxNode) -> tuple[str | None, str]:
    """Return (quote, value). The quote is "" for an unquoted value, None without a value."""
    value = ASTWalker.get_child_of_kind(attribute, "attribute_value", "quoted_attribute_value")
    if value is None:
        return None, ""
    if value.kind == "attribute_value":
        return "", value.value
    raw = value.value
    quote = raw[0]
    return quote, raw[1:-1] if len(raw) > 1 and raw.endswith(quote) else raw[1:]


def _in_foreign_content(ancestors: tuple[SyntaxNode, ...]) -> bool:
    return any(
        _tag_name(ancestor).lower() in FOREIGN_ELEMENTS
        for ancestor in ancestors
        if ancestor.kind in ELEMENTS
    )


class AttributeOrderOptions(RuleOptions):
    order: list[str] = ["id", "class", "data-*"]


@lint_rule("attribute-order", "H301", HTML, options=AttributeOrderOptions)
def attribute_order(context: RuleContext) -> Iterator[Violation]:
    """Attributes follow the order id, class, data-*, then everything else"""
    patterns = context.options.order

    def rank(name: str) -> int:
        for index, pattern in enumerate(patterns):
            if fnmatchcase(name, pattern):
                return index
        return len(patterns)

    for element in context.tree.iter():
        if element.kind not in ELEMENTS:
            continue
        ranked = []
        for attribute in _attributes(element):
            name = _attribute_name(attribute).lower()
            ranked.append((attribute, name, rank(name)))
        for index, (attribute, name, position) in enumerate(ranked):
            later = next(
                (other for _, other, other_rank in ranked[index + 1 :] if other_rank < position),
                None,
            )
            if later is not None:
                yield context.report(attribute, f"Attribute '{name}' should come after '{later}'")
                break


class AttributeQuoteOptions(RuleOptions):
    preferred: Literal["single", "double"] = "double"
    avoid_escape: bool = True


@lint_rule("attribute-quotes", "H302", HTML, options=AttributeQuoteOptions)
def attribute_quotes(context: RuleContext) -> Iterator[Violation]:
    """Attribute values are quoted with the preferred quote character"""
    options: AttributeQuoteOptions = context.options
    quote = QUOTES[options.preferred]
    for attribute in context.tree.iter():
        if attribute.kind != "attribute":
            continue
        used, value = _attribute_value(attribute)
        if used is None or used == quote:
            continue
        name = _attribute_name(attribute)
        if used == "":
            yield context.report(
                attribute,
                f"Value of attribute '{name.lower()}' should be quoted",
                suggestion=f"Use {name}={quote}{value}{quote}",
            )
        elif not (options.avoid_escape and quote in value):
            yield context.report(
                attribute,
                f"Attribute '{name.lower()}' should use {options.preferred} quotes",
            )


@lint_rule("lowercase-names", "H303", HTML)
def lowercase_names(context: RuleContext) -> Iterator[Violation]:
    """Tag and attribute names are written in lowercase"""
    for node, ancestors in ASTWalker.walk_with_parents(context.tree):
        if node.kind in ELEMENTS:
            label, name = "Tag", _tag_name(node)
        elif node.kind == "attribute":
            label, name = "Attribute", _attribute_name(node)
        else:
            continue
        if name == name.lower() or _in_foreign_content(ancestors):
            continue
        yield context.report(
            node,
            f"{label} name '{name}' should be lowercase",
            suggestion=f"Use '{name.lower()}'",
        )


@lint_rule("boolean-attribute", "H304", HTML)
def boolean_attribute(context: RuleContext) -> Iterator[Violation]:
    """Boolean attributes are written without a value"""
    for attribute in context.tree.iter():
        if attribute.kind != "attribute":
            continue
        name = _attribute_name(attribute)
        if name.lower() in BOOLEAN_ATTRIBUTES and _attribute_value(attribute)[0] is not None:
            yield context.report(
                attribute,
                f"Boolean attribute '{name.lower()}' should not have a value",
                suggestion=f"Use '{name}'",
            )


@lint_rule("void-element-slash", "H305", HTML)
def void_element_slash(context: RuleContext) -> Iterator[Violation]:
    """Void elements are not closed with a trailing slash"""
    for element in context.tree.iter():
        if element.kind != "element" or ASTWalker.get_child_of_kind(element, "self_closing_tag") is None:
            continue
        name = _tag_name(element).lower()
        if name in VOID_ELEMENTS:
            yield context.report(
                element,
                f"Void element <{name}> should not use a trailing slash",
                suggestion=f"Write <{name}>",
            )


def _doctype_text(node: SyntaxNode, source: str) -> str:
    """Doctype contents between `<!` and `>`, whitespace collapsed"""
    return " ".join(node.text(source)[2:-1].split())


@lint_rule("doctype", "H306", HTML, Severity.WARNING)
def doctype(context: RuleContext) -> Iterator[Violation]:
    """Documents start with the HTML5 doctype"""
    if not any(node.kind in ELEMENTS and _tag_name(node).lower() == "html" for node in context.tree.iter()):
        return
    first = next((node for node in context.tree.named_children if node.kind != "comment"), None)
    if first is not None and first.kind == "doctype":
        if _doctype_text(first, context.source).lower() == "doctype html":
            return
        message = "Use the HTML5 doctype <!DOCTYPE html>"
    else:
        message = "Document should start with <!DOCTYPE html>"
    yield context.report(first or context.tree, message, suggestion="<!DOCTYPE html>")


RULES = [
    attribute_order,
    attribute_quotes,
    lowercase_names,
    boolean_attribute,
    void_element_slash,
    doctype,
]
