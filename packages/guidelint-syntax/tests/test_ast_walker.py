from guidelint_syntax import ASTWalker, Language, SourceParser


def parse(source, language=Language.JAVASCRIPT):
    return SourceParser().parse_string(source, language).tree


def test_walk_visits_every_node_in_document_order():
    tree = parse("var a = 1;\nvar b = 2;")
    visited = []
    ASTWalker.walk(tree, visited.append)
    assert visited == list(tree.iter())
    assert visited[0] is tree


def test_find_all_by_kind():
    tree = parse("var a = 1;\nvar b = 2;")
    declarators = ASTWalker.find_all_by_kind(tree, "variable_declarator")
    assert [node.child("name").value for node in declarators] == ["a", "b"]


def test_walk_with_parents_reports_ancestors():
    tree = parse("function f() { return 1; }")
    for node, ancestors in ASTWalker.walk_with_parents(tree):
        if node.kind == "return_statement":
            assert [ancestor.kind for ancestor in ancestors] == [
                "program",
                "function_declaration",
                "statement_block",
            ]
            assert ASTWalker.find_parent_of_kind(ancestors, "function_declaration") is ancestors[1]
            assert ASTWalker.find_parent_of_kind(ancestors, "class_body") is None
            break
    else:
        raise AssertionError("return statement not found")


def test_get_child_of_kind_and_text():
    source = "a { color: red; }"
    tree = parse(source, Language.CSS)
    rule_set = tree.named_children[0]
    selectors = ASTWalker.get_child_of_kind(rule_set, "selectors")
    assert ASTWalker.get_text(selectors, source) == "a"


def test_unnamed_children_hold_punctuation_and_keywords():
    statement = parse("return;").named_children[0]
    assert [(child.kind, child.named) for child in statement.children] == [("return", False), (";", False)]


def test_root_spans_the_whole_source():
    tree = parse("\n\nvar a;\n\n")
    assert (tree.start.line, tree.start.column) == (1, 1)
    assert (tree.end.line, tree.end.column) == (5, 1)


def test_dump_outlines_the_named_nodes():
    dump = ASTWalker.dump(parse("<p>hi</p>", Language.HTML))
    lines = dump.splitlines()
    assert lines[0].startswith("document [1:1")
    assert lines[1].startswith("  element [1:1")
    assert lines[2].startswith("    start_tag [1:1")
    assert lines[3].startswith("      tag_name 'p' [1:2")
    assert "    text 'hi' [1:4 - 1:6]" in lines
