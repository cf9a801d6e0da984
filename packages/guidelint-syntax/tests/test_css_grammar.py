import pytest
from guidelint_syntax import ASTWalker, Language, SourceError, SourceParser, TokenKind


def parse(source):
    return SourceParser().parse_string(source, Language.CSS).tree


def declarations(tree):
    return [node for node in tree.iter() if node.kind == "declaration"]


def test_rule_set_shape():
    tree = parse("a, b:hover { color: red; }")
    assert tree.kind == "stylesheet"
    rule_set = tree.named_children[0]
    assert rule_set.kind == "rule_set"
    assert rule_set.named_children[0].kind == "selectors"

    block = ASTWalker.get_child_of_kind(rule_set, "block")
    declaration = block.children_of_kind("declaration")[0]
    assert ASTWalker.get_child_of_kind(declaration, "property_name").value == "color"
    assert ASTWalker.get_child_of_kind(declaration, "plain_value").value == "red"
    assert declaration.children[-1].kind == ";"


def test_last_semicolon_may_be_missing():
    declaration = declarations(parse("a { color: red }"))[0]
    assert declaration.children[-1].kind != ";"
    assert (declaration.end.line, declaration.end.column) == (1, 15)


def test_important_flag():
    declaration = declarations(parse("a { color: red !important; }"))[0]
    assert ASTWalker.get_child_of_kind(declaration, "important") is not None


def test_media_statement_with_nested_rule_set():
    statement = parse("@media screen { a { color: red; } }").named_children[0]
    assert statement.kind == "media_statement"
    nested = ASTWalker.get_child_of_kind(statement, "block").named_children[0]
    assert nested.kind == "rule_set"


def test_import_statement():
    statement = parse("@import 'x.css';\na {}").named_children[0]
    assert statement.kind == "import_statement"
    assert ASTWalker.find_all_by_kind(statement, "string_value")[0].value == "'x.css'"


def test_numbers_and_colours_read_as_single_values():
    tree = parse("a { margin: 0px -1.5em 10%; color: #FFF; }")
    numbers = ASTWalker.find_all_by_kind(tree, "integer_value", "float_value")
    assert [node.value for node in numbers] == ["0px", "-1.5em", "10%"]
    assert ASTWalker.find_all_by_kind(tree, "color_value")[0].value == "#FFF"


def test_custom_property_with_braces_is_one_value():
    source = ":root {\n  --theme: { color: red; };\n  --gap: 1px;\n}\n"
    result = SourceParser().parse_string(source, Language.CSS)
    custom = declarations(result.tree)
    assert [ASTWalker.get_child_of_kind(node, "property_name").value for node in custom] == ["--theme", "--gap"]
    assert all(node.children[-1].kind == ";" for node in custom)
    assert "".join(token.text for token in result.tokens) == source
    assert (custom[1].start.line, custom[1].start.column) == (3, 3)


def test_custom_property_masking_skips_comments_and_strings():
    source = "/* --a: { */\na { content: \"--b: {\"; --c: { x: y }; }\n"
    result = SourceParser().parse_string(source, Language.CSS)
    comments = [token.text for token in result.tokens if token.kind == TokenKind.COMMENT]
    assert comments == ["/* --a: { */"]
    strings = [token.text for token in result.tokens if token.kind == TokenKind.STRING]
    assert strings == ['"--b: {"']


@pytest.mark.parametrize(
    "source",
    [
        "a { color: red;",
        "}",
        "a { : red; }",
    ],
)
def test_parse_errors(source):
    with pytest.raises(SourceError) as exc_info:
        parse(source)
    assert exc_info.value.line == 1
