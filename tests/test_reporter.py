import json

from guidelint_cli.reporter import OutputFormat, Reporter
from guidelint_linter import CheckResult, LintRun, Severity, Violation
from guidelint_syntax import Language


def make_run(cancelled=False):
    violation = Violation("quote-style", 2, 9, "Strings must use single quotes", Severity.STYLE, "Use '...'")
    return LintRun(
        results=[
            CheckResult("a.js", Language.JAVASCRIPT, [violation]),
            CheckResult("b.css", Language.CSS, []),
        ],
        cancelled=cancelled,
    )


def test_text_output():
    output = Reporter().render(make_run())
    assert output.splitlines() == [
        "STYLE: a.js:2:9 [quote-style] Strings must use single quotes",
        "",
        "Checked 2 files: 1 issues found in 1 files",
    ]


def test_text_output_cancelled():
    output = Reporter(OutputFormat.TEXT).render(make_run(cancelled=True))
    assert output.rstrip().endswith("(run cancelled)")


def test_json_output():
    report = json.loads(Reporter(OutputFormat.JSON).render(make_run()))
    assert report["total_files"] == 2
    assert report["total_issues"] == 1
    assert report["passed"] is False
    issue = report["files"][0]["issues"][0]
    assert issue == {
        "severity": "STYLE",
        "file_path": "a.js",
        "line_number": 2,
        "column": 9,
        "rule_id": "quote-style",
        "message": "Strings must use single quotes",
        "suggestion": "Use '...'",
    }
    assert report["files"][1] == {"file_path": "b.css", "language": "css", "passed": True, "issues": []}


def test_render_accepts_plain_results():
    output = Reporter().render([CheckResult("b.css", Language.CSS, [])])
    assert output == "Checked 1 files: 0 issues found in 0 files\n"


def test_status():
    assert Reporter.status(make_run()) == 1
    assert Reporter.status([CheckResult("b.css", Language.CSS, [])]) == 0
    assert Reporter.status([]) == 0
    assert Reporter.status(LintRun([], cancelled=True)) == 1
