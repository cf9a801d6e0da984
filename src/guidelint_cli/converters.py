from pathlib import Path

from guidelint_linter import CheckResult, LintRun, Rule, Violation

from .models import FileReport, LintIssue, LintReport, RuleInfo


def violation_to_lint_issue(violation: Violation, file_path: Path | str) -> LintIssue:
    """Convert an internal dataclass violation to an external Pydantic issue"""
    return LintIssue(
        severity=violation.severity,
        file_path=str(file_path),
        line_number=violation.line,
        column=violation.column,
        rule_id=violation.rule_id,
        message=violation.message,
        suggestion=violation.suggestion,
    )


def check_result_to_file_report(result: CheckResult) -> FileReport:
    return FileReport(
        file_path=str(result.file_path),
        language=result.language.value if result.language is not None else None,
        passed=result.passed,
        issues=[violation_to_lint_issue(v, result.file_path) for v in result.violations],
    )


def lint_run_to_report(run: LintRun) -> LintReport:
    files = [check_result_to_file_report(result) for result in run.results]
    return LintReport(
        files=files,
        total_files=len(files),
        total_issues=sum(len(report.issues) for report in files),
        passed=run.passed,
        cancelled=run.cancelled,
    )


def rule_to_rule_info(rule: Rule) -> RuleInfo:
    return RuleInfo(
        rule_id=rule.rule_id,
        code=rule.code,
        languages=sorted(language.value for language in rule.languages),
        severity=rule.severity,
        description=rule.description,
    )
