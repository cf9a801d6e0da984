import json
import logging
import os
import sys
from pathlib import Path
from typing import Optional

import typer
from guidelint_syntax import ASTWalker, GuidelintError, SourceParser
from guidelint_linter import LintRunner, discover_files, registry

from .config import LintConfig
from .converters import rule_to_rule_info
from .reporter import OutputFormat, Reporter

app = typer.Typer(help="guidelint - check JavaScript, CSS and HTML against a coding style guide")

logger = logging.getLogger(__name__)


@app.callback()
def main():
    """Configure logging from GUIDELINT_LOG_LEVEL (default WARNING)"""
    level = os.environ.get("GUIDELINT_LOG_LEVEL", "WARNING").upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


@app.command()
def lint(
    paths: list[Path] = typer.Argument(..., help="Files, directories or glob patterns to check"),
    config_file: Optional[Path] = typer.Option(None, "--config", help="Path to config file"),
    output_format: OutputFormat = typer.Option(OutputFormat.TEXT, "--format", help="Output format"),
):
    """Run linter on JavaScript, CSS and HTML files"""
    try:
        config = LintConfig(config_file)
        engine = config.create_engine()
        files = discover_files(paths, exclude=config.exclude)
    except GuidelintError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=2)

    logger.debug("Linting %d files with %d rules", len(files), len(engine.rules))
    run = LintRunner(engine, jobs=config.jobs).run(files)
    reporter = Reporter(output_format)
    reporter.write(run, sys.stdout)
    raise typer.Exit(code=reporter.status(run))


@app.command()
def rules(
    output_format: OutputFormat = typer.Option(OutputFormat.TEXT, "--format", help="Output format"),
):
    """List the available rules"""
    all_rules = registry.get_all_rules()
    if output_format == OutputFormat.JSON:
        infos = [rule_to_rule_info(rule).model_dump(mode="json") for rule in all_rules]
        typer.echo(json.dumps(infos, indent=2))
        return
    for rule in all_rules:
        languages = ",".join(sorted(language.value for language in rule.languages))
        typer.echo(f"{rule.code}  {rule.rule_id:<26} {rule.severity.value:<8} {languages:<20} {rule.description}")


@app.command()
def tree(
    file: Path = typer.Argument(..., help="File to parse"),
):
    """Print the syntax tree of a file"""
    try:
        result = SourceParser().parse_file(file)
    except GuidelintError as exc:
        typer.echo(f"{file}: {exc}", err=True)
        raise typer.Exit(code=1)
    except (OSError, UnicodeDecodeError, ValueError) as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=2)
    typer.echo(ASTWalker.dump(result.tree))


if __name__ == "__main__":
    app()
