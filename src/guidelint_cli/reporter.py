from enum import Enum
from typing import Sequence, TextIO

from guidelint_linter import CheckResult, LintRun

from .converters import lint_run_to_report


class OutputFormat(str, Enum):
    TEXT = "text"
    JSON = "json"


class Reporter:
    """Formats check results and decides the process exit status"""

    def __init__(self, output_format: OutputFormat = OutputFormat.TEXT):
        self.output_format = OutputFormat(output_format)

    def render(self, results: LintRun | Sequence[CheckResult]) -> str:
        run = results if isinstance(results, LintRun) else LintRun(list(results))
        if self.output_format == OutputFormat.JSON:
            return lint_run_to_report(run).model_dump_json(indent=2) + "\n"
        return self._render_text(run)

    def write(self, results: LintRun | Sequence[CheckResult], sink: TextIO) -> None:
        sink.write(self.render(results))

    @staticmethod
    def status(results: LintRun | Sequence[CheckResult]) -> int:
        """0 when every file passed, 1 otherwise. A cancelled run never passes."""
        run = results if isinstance(results, LintRun) else LintRun(list(results))
        return 0 if run.passed else 1

    def _render_text(self, run: LintRun) -> str:
        lines = []
        for result in run.results:
            for violation in result.violations:
                lines.append(
                    f"{violation.severity.value}: {result.file_path}:{violation.line}:{violation.column} "
                    f"[{violation.rule_id}] {violation.message}"
                )
        failed = sum(1 for result in run.results if not result.passed)
        summary = (
            f"Checked {len(run.results)} files: {run.violation_count} issues found in {failed} files"
        )
        if run.cancelled:
            summary += " (run cancelled)"
        if lines:
            lines.append("")
        lines.append(summary)
        return "\n".join(lines) + "\n"
