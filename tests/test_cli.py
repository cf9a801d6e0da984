import json

from typer.testing import CliRunner

from guidelint_cli.main import app

runner = CliRunner()


def test_cli_lint_help():
    result = runner.invoke(app, ["lint", "--help"])
    assert result.exit_code == 0
    assert "Run linter on JavaScript, CSS and HTML files" in result.stdout


def test_cli_lint_clean_file(tmp_path):
    file_path = tmp_path / "clean.js"
    file_path.write_text("var item = {};\n")

    result = runner.invoke(app, ["lint", str(file_path)])
    assert result.exit_code == 0
    assert "Checked 1 files: 0 issues found in 0 files" in result.stdout


def test_cli_lint_reports_violations(tmp_path):
    file_path = tmp_path / "bad.js"
    file_path.write_text("var item = new Object();\n")

    result = runner.invoke(app, ["lint", str(file_path)])
    assert result.exit_code == 1
    assert "WARNING" in result.stdout
    assert f"{file_path}:1:12 [literal-construction]" in result.stdout


def test_cli_lint_directory_json(tmp_path):
    (tmp_path / "style.css").write_text("a {\n  color: red;\n  position: absolute;\n}\n")
    (tmp_path / "page.html").write_text("<p>hi</p>\n")

    result = runner.invoke(app, ["lint", str(tmp_path), "--format", "json"])
    assert result.exit_code == 1
    report = json.loads(result.stdout)
    assert report["total_files"] == 2
    assert report["passed"] is False
    by_name = {entry["file_path"].rsplit("/", 1)[-1]: entry for entry in report["files"]}
    assert by_name["page.html"]["passed"] is True
    assert [issue["rule_id"] for issue in by_name["style.css"]["issues"]] == ["declaration-order"]


def test_cli_lint_no_files_is_a_pass(tmp_path):
    result = runner.invoke(app, ["lint", str(tmp_path)])
    assert result.exit_code == 0


def test_cli_lint_missing_path(tmp_path):
    result = runner.invoke(app, ["lint", str(tmp_path / "missing")])
    assert result.exit_code == 2
    assert "Path does not exist" in result.output


def test_cli_lint_missing_config(tmp_path):
    file_path = tmp_path / "clean.js"
    file_path.write_text("var item = {};\n")

    result = runner.invoke(app, ["lint", str(file_path), "--config", str(tmp_path / "nope.toml")])
    assert result.exit_code == 2
    assert "Config file not found" in result.output


def test_cli_lint_with_config(tmp_path):
    file_path = tmp_path / "indented.js"
    file_path.write_text("if (a) {\n  b();\n}\n")
    config_path = tmp_path / ".guidelint.toml"
    config_path.write_text('[tool.guidelint.rules.indentation]\nwidth = 4\n')

    result = runner.invoke(app, ["lint", str(file_path), "--config", str(config_path)])
    assert result.exit_code == 1
    assert "[indentation]" in result.stdout


def test_cli_rules():
    result = runner.invoke(app, ["rules"])
    assert result.exit_code == 0
    assert "quote-style" in result.stdout
    assert "H301" in result.stdout


def test_cli_rules_json():
    result = runner.invoke(app, ["rules", "--format", "json"])
    assert result.exit_code == 0
    infos = json.loads(result.stdout)
    assert {"rule_id", "code", "languages", "severity", "description"} <= set(infos[0])


def test_cli_tree(tmp_path):
    file_path = tmp_path / "page.html"
    file_path.write_text("<p>hi</p>\n")

    result = runner.invoke(app, ["tree", str(file_path)])
    assert result.exit_code == 0
    assert result.stdout.startswith("document [1:1")
    assert "tag_name 'p'" in result.stdout


def test_cli_tree_parse_error(tmp_path):
    file_path = tmp_path / "broken.css"
    file_path.write_text("a { color: red; }\n}\n")

    result = runner.invoke(app, ["tree", str(file_path)])
    assert result.exit_code == 1
    assert "line 2" in result.output
