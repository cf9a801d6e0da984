from pathlib import Path

from tree_sitter import Node, Parser, Tree

from .errors import ParseError
from .grammars import css, html, javascript
from .languages import Language, detect_language
from .lexer import SourceText, error_nodes, find_lex_error, iter_leaves, read_tokens
from .node_types import ParseResult, SyntaxNode
from .tokens import Span, Token

GRAMMARS = {
    Language.JAVASCRIPT: javascript,
    Language.CSS: css,
    Language.HTML: html,
}


def _parse_concrete(source: str, language: Language) -> tuple[Tree, SourceText]:
    # one Parser per call; Parser objects are not thread-safe
    parser = Parser(GRAMMARS[language].LANGUAGE)
    text = SourceText(source)
    tree = parser.parse(text.data)
    if language == Language.CSS and tree.root_node.has_error:
        masked = css.mask_custom_properties(source)
        if masked is not None:
            text = SourceText(source, masked)
            tree = parser.parse(text.data)
    return tree, text


def _parse_error(root: Node, text: SourceText, language: Language) -> ParseError | None:
    grammar = GRAMMARS[language]
    node = next(error_nodes(root, grammar), None)
    if node is None:
        return None
    position = text.position(text.offset(node.start_byte))
    if node.is_missing:
        expected = node.type.replace("_", " ") if node.is_named else f"'{node.type}'"
        message = f"expected {expected}"
    elif node.type == "ERROR":
        first = next(iter_leaves(node), None)
        found = text.slice(first).strip() if first is not None else ""
        if len(found) > 20:
            found = found[:17] + "..."
        message = f"unexpected '{found}'" if found else "unexpected end of input"
    else:
        message = f"{grammar.ERROR_NODES[node.type]} '{text.slice(node)}'"
    return ParseError(message, position.line, position.column)


def _build_tree(root: Node, text: SourceText, language: Language) -> SyntaxNode:
    """Convert the concrete tree into SyntaxNodes, children before parents"""
    atomic = GRAMMARS[language].ATOMIC
    pending: list[tuple[Node, str | None, bool]] = [(root, None, False)]
    built: list[SyntaxNode] = []
    while pending:
        node, role, expanded = pending.pop()
        if not expanded:
            pending.append((node, role, True))
            children = node.children
            for index in range(len(children) - 1, -1, -1):
                pending.append((children[index], node.field_name_for_child(index), False))
            continue
        count = node.child_count
        children = tuple(built[len(built) - count :]) if count else ()
        del built[len(built) - count :]
        leaf = node.type in atomic or (not count and node is not root)
        built.append(
            SyntaxNode(
                kind=node.type,
                span=text.span(node),
                children=children,
                value=text.slice(node) if leaf else None,
                role=role,
                named=node.is_named,
            )
        )
    tree = built[0]
    # the root covers the whole source, leading and trailing whitespace included
    whole = Span(text.position(0), text.position(len(text.text)))
    return SyntaxNode(tree.kind, whole, tree.children, tree.value, tree.role, tree.named)


def tokenize(source: str, language: Language) -> tuple[Token, ...]:
    """Split source into a lossless token sequence for the given language"""
    language = Language(language)
    tree, text = _parse_concrete(source, language)
    error = find_lex_error(tree.root_node, text, GRAMMARS[language])
    if error is not None:
        raise error
    return read_tokens(tree.root_node, text, GRAMMARS[language])


def parse_tokens(tokens: tuple[Token, ...], language: Language) -> SyntaxNode:
    """Parse the source a token sequence spells out; equal tokens give equal trees"""
    return SourceParser().parse_string("".join(token.text for token in tokens), language).tree


class SourceParser:
    """Entry point for turning JavaScript, CSS or HTML source into a syntax tree"""

    def parse_string(self, source: str, language: Language) -> ParseResult:
        language = Language(language)
        grammar = GRAMMARS[language]
        tree, text = _parse_concrete(source, language)
        root = tree.root_node
        error = find_lex_error(root, text, grammar)
        if error is not None:
            raise error
        tokens = read_tokens(root, text, grammar)
        error = _parse_error(root, text, language)
        if error is not None:
            raise error
        return ParseResult(
            tree=_build_tree(root, text, language),
            tokens=tokens,
            source=source,
            language=language,
        )

    def parse_file(self, file_path: Path, language: Language | None = None) -> ParseResult:
        language = language or detect_language(file_path)
        if language is None:
            raise ValueError(f"Cannot determine the language of {file_path}")
        with open(file_path, encoding="utf-8", newline="") as handle:
            return self.parse_string(handle.read(), language)
