"""
guidelint linter - style rules and the engine that applies them

Rules are plain function values collected in a registry; the engine runs the
enabled ones over each file's syntax tree and source text.
"""

from .discovery import DEFAULT_EXCLUDES, SourceFile, discover_files
from .engine import LinterEngine, RuleSettings
from .errors import DiscoveryError, RuleConflictError, RuleExecutionError
from .models import CheckResult, LintRun, Severity, Violation
from .registry import RuleRegistry, registry
from .rules.base import Rule, RuleContext, RuleOptions, lint_rule
from .runner import CancellationToken, LintRunner

__all__ = [
    "DEFAULT_EXCLUDES",
    "CancellationToken",
    "CheckResult",
    "DiscoveryError",
    "LintRun",
    "LintRunner",
    "LinterEngine",
    "Rule",
    "RuleConflictError",
    "RuleContext",
    "RuleExecutionError",
    "RuleOptions",
    "RuleRegistry",
    "RuleSettings",
    "Severity",
    "SourceFile",
    "Violation",
    "discover_files",
    "lint_rule",
    "registry",
]
