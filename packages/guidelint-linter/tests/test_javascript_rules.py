from guidelint_linter import LinterEngine, RuleSettings
from guidelint_linter.rules.javascript_rules import EqualityOptions, NamingOptions, QuoteStyleOptions
from guidelint_syntax import Language


def check(source, rule_id, options=None):
    settings = {rule_id: RuleSettings(options=options)} if options else None
    engine = LinterEngine(select=[rule_id], settings=settings)
    return engine.check_source(source, Language.JAVASCRIPT).violations


def test_literal_construction():
    violations = check("var item = new Object();", "literal-construction")
    assert len(violations) == 1
    assert violations[0].rule_id == "literal-construction"
    assert (violations[0].line, violations[0].column) == (1, 12)


def test_literal_construction_array_and_other_constructors():
    assert len(check("var list = new Array(3);", "literal-construction")) == 1
    assert check("var d = new Date();\nvar o = {};\n", "literal-construction") == []


def test_quote_style_prefers_single_quotes():
    assert len(check('var a = "x";', "quote-style")) == 1
    assert check("var a = 'x';", "quote-style") == []
    assert check("var a = `x`;", "quote-style") == []


def test_quote_style_avoid_escape():
    assert check('var a = "it\'s";', "quote-style") == []
    strict = QuoteStyleOptions(avoid_escape=False)
    assert len(check('var a = "it\'s";', "quote-style", strict)) == 1


def test_quote_style_double():
    violations = check("var a = 'x';", "quote-style", QuoteStyleOptions(preferred="double"))
    assert len(violations) == 1
    assert "double" in violations[0].message


def test_equality_operator():
    violations = check("if (a == b) {}", "equality-operator")
    assert len(violations) == 1
    assert (violations[0].line, violations[0].column) == (1, 7)
    assert check("if (a === b) {}", "equality-operator") == []
    assert len(check("a != b;", "equality-operator")) == 1


def test_equality_operator_allow_null():
    assert len(check("a == null;", "equality-operator")) == 1
    assert check("a == null;", "equality-operator", EqualityOptions(allow_null=True)) == []


def test_braceless_multiline_body():
    violations = check("if (test)\n  return false;", "brace-placement")
    assert len(violations) == 1
    assert violations[0].line == 2


def test_braceless_single_line_body_is_allowed():
    assert check("if (test) return false;", "brace-placement") == []


def test_braced_bodies_pass():
    source = (
        "if (test) {\n  return false;\n} else if (other) {\n  go();\n} else {\n  stop();\n}\n"
        "items.forEach((item) => {\n  use(item);\n});\n"
        "class A {\n  run() {\n    try {\n      x();\n    } catch (e) {\n    } finally {\n    }\n  }\n}\n"
    )
    assert check(source, "brace-placement") == []


def test_brace_on_its_own_line():
    violations = check("function foo()\n{\n}\n", "brace-placement")
    assert len(violations) == 1
    assert "same line" in violations[0].message


def test_brace_spacing_before_brace():
    assert len(check("if (a){}", "brace-placement")) == 1
    assert len(check("while (a)  {}", "brace-placement")) == 1


def test_naming_convention_variables():
    violations = check("var my_var = 1;", "naming-convention")
    assert len(violations) == 1
    assert "my_var" in violations[0].message
    assert check("var myVar = 1;\nfunction doIt(firstArg) {}\nvar _private = 1, $el = 2;\n", "naming-convention") == []


def test_naming_convention_classes_and_constructors():
    assert len(check("class widget {}", "naming-convention")) == 1
    assert check("class Widget {}", "naming-convention") == []
    assert check("function Person() {}\nvar p = new Person();\n", "naming-convention") == []
    assert len(check("function Person() {}", "naming-convention")) == 1


def test_naming_convention_constants():
    assert check("const MAX_SIZE = 10;", "naming-convention") == []
    assert len(check("let MAX_SIZE = 10;", "naming-convention")) == 1
    assert len(check("const MAX_SIZE = 10;", "naming-convention", NamingOptions(constants=None))) == 1


def test_naming_convention_parameters():
    violations = check("function f(first_arg, second = 1) {}", "naming-convention")
    assert [v.message for v in violations] == ["Parameter name 'first_arg' is not camelCase"]


def test_naming_convention_accepts_non_ascii_letters():
    source = "var \u00e9 = 1;\nvar na\u00efve = 2;\nclass \u00d1and\u00fa {}\nvar \u5909\u6570 = 3;\n"
    assert check(source, "naming-convention") == []
    violations = check("var \u00c9mile = 1;\n", "naming-convention")
    assert [v.message for v in violations] == ["Variable name '\u00c9mile' is not camelCase"]


def test_naming_convention_arrow_parameter():
    violations = check("var f = bad_name => bad_name;\n", "naming-convention")
    assert [v.message for v in violations] == ["Parameter name 'bad_name' is not camelCase"]


def test_naming_convention_custom_regex():
    options = NamingOptions(variables="[a-z]+")
    violations = check("var abc = 1;\nvar aBc = 2;\n", "naming-convention", options)
    assert [v.line for v in violations] == [2]


def test_semicolons():
    violations = check("var a = 1\nfoo()\n", "semicolons")
    assert [(v.line, v.column) for v in violations] == [(1, 10), (2, 6)]
    assert check("var a = 1;\nfoo();\n", "semicolons") == []


def test_leading_comma():
    violations = check("var a = 1\n  , b = 2;\n", "leading-comma")
    assert [(v.line, v.column) for v in violations] == [(2, 3)]
    assert check("var a = 1,\n  b = 2;\n", "leading-comma") == []


def test_comment_placement():
    violations = check("var a = 1; // one\n// own line\nvar b = 2;\n", "comment-placement")
    assert [(v.line, v.column) for v in violations] == [(1, 12)]


def test_blank_line_before_comment():
    violations = check("var a = 1;\n// c\nvar b = 2;\n", "blank-line-before-comment")
    assert [(v.line, v.column) for v in violations] == [(2, 1)]


def test_blank_line_before_comment_exceptions():
    assert check("var a = 1;\n\n// c\nvar b = 2;\n", "blank-line-before-comment") == []
    assert check("function f() {\n  // first\n  return 1;\n}\n", "blank-line-before-comment") == []
    assert check("// a\n// b\nvar x;\n", "blank-line-before-comment") == []
    assert check("var a = 1; // trailing\n", "blank-line-before-comment") == []


def test_braceless_bodies_of_switch_cases_are_not_flagged():
    source = "switch (a) {\n  case 1:\n    go();\n    break;\n  default:\n    stop();\n}\n"
    assert check(source, "brace-placement") == []


def test_semicolons_on_class_fields_and_exports():
    violations = check("class A {\n  x = 1\n  y = 2;\n}\n", "semicolons")
    assert [(v.line, v.column) for v in violations] == [(2, 8)]
    violations = check("export default foo\nexport function f() {}\n", "semicolons")
    assert [(v.line, v.column) for v in violations] == [(1, 19)]


def test_regex_after_control_statement_header():
    source = "if (a) /x/.test(b);\nwhile (a) /x/g.exec(b);\n"
    result = LinterEngine().check_source(source, Language.JAVASCRIPT)
    assert result.violations == []
