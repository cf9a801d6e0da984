"""JavaScript rules: literals, quoting, equality, bracing, naming, punctuation, comments."""

import re
from typing import Callable, Iterator, Literal

from pydantic import field_validator
from guidelint_syntax import ASTWalker, SyntaxNode, TokenKind

from ..models import Severity, Violation
from .base import (
    JAVASCRIPT,
    RuleContext,
    RuleOptions,
    brace_spacing_problem,
    check_quotes,
    lint_rule,
)

LITERAL_FORMS = {"Object": "{}", "Array": "[]"}


def _constructor_name(node: SyntaxNode) -> str | None:
    """Name of the class a `new` expression instantiates, when it is a plain identifier"""
    constructor = node.child("constructor")
    if constructor is not None and constructor.kind == "identifier":
        return constructor.value
    return None


class LiteralConstructionOptions(RuleOptions):
    constructors: list[str] = ["Object", "Array"]


@lint_rule(
    "literal-construction",
    "J101",
    JAVASCRIPT,
    Severity.WARNING,
    options=LiteralConstructionOptions,
)
def literal_construction(context: RuleContext) -> Iterator[Violation]:
    """Use literal syntax instead of constructing objects and arrays with `new`"""
    constructors = set(context.options.constructors)
    for node in context.tree.iter():
        if node.kind != "new_expression":
            continue
        name = _constructor_name(node)
        if name in constructors:
            literal = LITERAL_FORMS.get(name)
            yield context.report(
                node,
                f"Use literal syntax instead of 'new {name}()'",
                suggestion=f"Replace with {literal}" if literal else None,
            )


class QuoteStyleOptions(RuleOptions):
    preferred: Literal["single", "double"] = "single"
    avoid_escape: bool = True


@lint_rule("quote-style", "J102", JAVASCRIPT, options=QuoteStyleOptions)
def quote_style(context: RuleContext) -> Iterator[Violation]:
    """String literals use the preferred quote character"""
    literals = ((node, node.value) for node in context.tree.iter() if node.kind == "string")
    yield from check_quotes(context, literals, context.options.preferred, context.options.avoid_escape)


class EqualityOptions(RuleOptions):
    allow_null: bool = False


@lint_rule("equality-operator", "J103", JAVASCRIPT, Severity.WARNING, options=EqualityOptions)
def equality_operator(context: RuleContext) -> Iterator[Violation]:
    """Use `===` and `!==` instead of the coercing equality operators"""
    for node in context.tree.iter():
        if node.kind != "binary_expression":
            continue
        operator = node.child("operator")
        if operator is None or operator.kind not in ("==", "!="):
            continue
        if context.options.allow_null and any(child.kind == "null" for child in node.named_children):
            continue
        yield context.report(
            operator,
            f"Expected '{operator.kind}=' and instead saw '{operator.kind}'",
            suggestion=f"Use '{operator.kind}='",
        )


# Owners whose `body` fields are not statement bodies in the bracing sense
UNBRACED_OWNERS = frozenset({"labeled_statement", "switch_case", "switch_default"})
BODY_ROLES = frozenset({"body", "consequence"})
BRACED_BODIES = frozenset({"statement_block", "class_body", "switch_body"})


def _header_line(context: RuleContext, body: SyntaxNode) -> int:
    """Line of the last non-whitespace character before the body"""
    before = context.source[: body.start.offset].rstrip()
    return before.count("\n") + 1


def _bodies(owner: SyntaxNode) -> list[SyntaxNode]:
    if owner.kind == "else_clause":
        statements = [child for child in owner.named_children if child.kind != "comment"]
        return statements[-1:]
    return [child for child in owner.children if child.role in BODY_ROLES]


@lint_rule("brace-placement", "J104", JAVASCRIPT)
def brace_placement(context: RuleContext) -> Iterator[Violation]:
    """Opening braces sit on the header line after one space; multi-line bodies are braced"""
    for owner in context.tree.iter():
        if not owner.named or owner.kind in UNBRACED_OWNERS:
            continue
        for body in _bodies(owner):
            if body.kind in BRACED_BODIES:
                problem = brace_spacing_problem(context, body.start.offset)
                if problem:
                    yield context.report(body, problem)
            elif body.kind == "empty_statement":
                continue
            elif owner.kind == "else_clause" and body.kind == "if_statement":
                continue
            elif _header_line(context, body) != body.start.line:
                yield context.report(
                    body,
                    "Multi-line body must be wrapped in braces",
                    suggestion="Wrap the body in { }, or keep it on the header line",
                )


def _is_camel_case(name: str) -> bool:
    return name[0].isalpha() and not name[0].isupper() and name.isalnum()


def _is_pascal_case(name: str) -> bool:
    return name[0].isalpha() and not name[0].islower() and name.isalnum()


def _is_snake_case(name: str) -> bool:
    return name[0].isalpha() and all(char == "_" or (char.isalnum() and not char.isupper()) for char in name)


def _is_upper_case(name: str) -> bool:
    return name[0].isalpha() and all(char == "_" or (char.isalnum() and not char.islower()) for char in name)


# Letters without case (CJK, Arabic, ...) satisfy either case requirement
NAMING_CONVENTIONS: dict[str, Callable[[str], bool]] = {
    "camelCase": _is_camel_case,
    "PascalCase": _is_pascal_case,
    "snake_case": _is_snake_case,
    "UPPER_CASE": _is_upper_case,
}


class NamingOptions(RuleOptions):
    variables: str = "camelCase"
    functions: str = "camelCase"
    classes: str = "PascalCase"
    constants: str | None = "UPPER_CASE"
    ignore: list[str] = []

    @field_validator("variables", "functions", "classes", "constants")
    @classmethod
    def _known_or_regex(cls, value: str | None) -> str | None:
        if value is not None and value not in NAMING_CONVENTIONS:
            try:
                re.compile(value)
            except re.error as exc:
                raise ValueError(f"not a convention name or valid regex: {exc}") from exc
        return value


def _convention_matches(convention: str, name: str) -> bool:
    predicate = NAMING_CONVENTIONS.get(convention)
    if predicate is None:
        return re.fullmatch(convention, name) is not None
    # leading `_` and `$` are conventional markers, not part of the case style
    bare = name.lstrip("_$")
    return not bare or predicate(bare)


FUNCTION_KINDS = frozenset({
    "function_declaration",
    "generator_function_declaration",
    "function_expression",
    "function",
    "generator_function",
})
FUNCTION_VALUES = FUNCTION_KINDS | {"arrow_function"}
CLASS_KINDS = frozenset({"class_declaration", "class"})


def _identifier(node: SyntaxNode | None) -> SyntaxNode | None:
    return node if node is not None and node.kind == "identifier" else None


def _binding_names(context: RuleContext):
    """Yield (identifier node, kind of binding, accepted conventions) for each declared name"""
    options: NamingOptions = context.options
    constructed = {
        _constructor_name(node) for node in context.tree.iter() if node.kind == "new_expression"
    }

    def function_conventions(name):
        if name in constructed:
            return [options.functions, options.classes]
        return [options.functions]

    for node, ancestors in ASTWalker.walk_with_parents(context.tree):
        if not node.named:
            continue
        if node.kind == "variable_declarator":
            target = _identifier(node.child("name"))
            if target is None:
                continue
            init = node.child("value")
            if init is not None and init.kind in CLASS_KINDS:
                yield target, "Class", [options.classes]
                continue
            if init is not None and init.kind in FUNCTION_VALUES:
                yield target, "Function", function_conventions(target.value)
                continue
            conventions = [options.variables]
            if target.value in constructed:
                conventions.append(options.classes)
            declaration = ancestors[-1] if ancestors else None
            keyword = declaration.child("kind") if declaration is not None else None
            if options.constants and keyword is not None and keyword.kind == "const":
                conventions.append(options.constants)
            yield target, "Variable", conventions
        elif node.kind in FUNCTION_KINDS:
            name = _identifier(node.child("name"))
            if name is not None:
                yield name, "Function", function_conventions(name.value)
        elif node.kind in CLASS_KINDS:
            name = _identifier(node.child("name"))
            if name is not None:
                yield name, "Class", [options.classes]
        elif node.kind == "formal_parameters":
            for param in node.named_children:
                if param.kind == "assignment_pattern":
                    param = param.child("left")
                if _identifier(param) is not None:
                    yield param, "Parameter", [options.variables]
        elif node.kind == "arrow_function":
            param = _identifier(node.child("parameter"))
            if param is not None:
                yield param, "Parameter", [options.variables]


@lint_rule("naming-convention", "J105", JAVASCRIPT, options=NamingOptions)
def naming_convention(context: RuleContext) -> Iterator[Violation]:
    """Bindings follow the configured naming conventions"""
    ignored = set(context.options.ignore)
    for identifier, binding, conventions in _binding_names(context):
        name = identifier.value
        if name in ignored:
            continue
        if any(_convention_matches(convention, name) for convention in conventions):
            continue
        expected = " or ".join(conventions)
        yield context.report(identifier, f"{binding} name '{name}' is not {expected}")


TERMINATED_STATEMENTS = frozenset({
    "expression_statement",
    "variable_declaration",
    "lexical_declaration",
    "return_statement",
    "throw_statement",
    "break_statement",
    "continue_statement",
    "debugger_statement",
    "do_statement",
    "import_statement",
    "export_statement",
})


def _code_children(node: SyntaxNode) -> list[SyntaxNode]:
    return [child for child in node.children if child.kind != "comment"]


def _missing_semicolon(node: SyntaxNode) -> bool:
    if node.kind == "export_statement":
        if node.child("declaration") is not None:
            return False
        value = node.child("value")
        if value is not None and value.kind in FUNCTION_VALUES | CLASS_KINDS:
            return False
    children = _code_children(node)
    return not children or children[-1].kind != ";"


@lint_rule("semicolons", "J106", JAVASCRIPT, Severity.WARNING)
def semicolons(context: RuleContext) -> Iterator[Violation]:
    """Statements end with an explicit semicolon"""
    for node in context.tree.iter():
        if node.named and node.kind in TERMINATED_STATEMENTS and _missing_semicolon(node):
            yield context.report(node.end, "Missing semicolon", suggestion="Add ';'")
        elif node.kind == "class_body":
            # class fields take their semicolon as a sibling
            members = _code_children(node)
            for field, following in zip(members, members[1:]):
                if field.kind == "field_definition" and following.kind != ";":
                    yield context.report(field.end, "Missing semicolon", suggestion="Add ';'")


@lint_rule("leading-comma", "J107", JAVASCRIPT)
def leading_comma(context: RuleContext) -> Iterator[Violation]:
    """Commas go at the end of a line, never at the start"""
    for token in context.tokens:
        if token.is_punct(",") and not context.line_prefix(token.offset).strip():
            yield context.report(
                token,
                "Leading comma",
                suggestion="Move the comma to the end of the previous line",
            )


@lint_rule("comment-placement", "J108", JAVASCRIPT)
def comment_placement(context: RuleContext) -> Iterator[Violation]:
    """Single-line comments go on their own line above the code they describe"""
    for token in context.tokens:
        if token.kind != TokenKind.COMMENT or not token.text.startswith("//"):
            continue
        if context.line_prefix(token.offset).strip():
            yield context.report(
                token,
                "Comment trails code on the same line",
                suggestion="Move the comment to its own line above the code",
            )


BLOCK_OPENERS = ("{", "(", "[", ":")


@lint_rule("blank-line-before-comment", "J109", JAVASCRIPT)
def blank_line_before_comment(context: RuleContext) -> Iterator[Violation]:
    """Own-line comments are preceded by a blank line unless they open a block"""
    previous = None
    for token in context.tokens:
        if token.kind == TokenKind.WHITESPACE:
            continue
        if (
            token.kind == TokenKind.COMMENT
            and previous is not None
            and previous.kind != TokenKind.COMMENT
            and not previous.is_punct(*BLOCK_OPENERS)
            and token.line > previous.end.line
            and token.line - previous.end.line < 2
        ):
            yield context.report(token, "Expected a blank line before this comment")
        previous = token


RULES = [
    literal_construction,
    quote_style,
    equality_operator,
    brace_placement,
    naming_convention,
    semicolons,
    leading_comma,
    comment_placement,
    blank_line_before_comment,
]
