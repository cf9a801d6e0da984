import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Mapping

from guidelint_syntax import (
    Language,
    LexError,
    ParseError,
    SourceParser,
    SyntaxNode,
    Token,
    detect_language,
)

from .errors import RuleExecutionError
from .models import CheckResult, Severity, Violation
from .registry import RuleRegistry, registry as default_registry
from .rules.base import Rule, RuleContext, RuleOptions

logger = logging.getLogger(__name__)

RULE_EXECUTION_ERROR = "rule-execution-error"
LEX_ERROR = "lex-error"
PARSE_ERROR = "parse-error"
READ_ERROR = "read-error"


@dataclass(frozen=True)
class RuleSettings:
    """Per-rule configuration, already validated against the rule's options model"""

    enabled: bool = True
    severity: Severity | None = None
    options: RuleOptions | None = None


class LinterEngine:
    """Core engine: runs the enabled rules over one file's tree and text"""

    def __init__(
        self,
        registry: RuleRegistry | None = None,
        settings: Mapping[str, RuleSettings] | None = None,
        select: Iterable[str] = ("ALL",),
        ignore: Iterable[str] = (),
    ):
        self.registry = registry or default_registry
        self.settings = dict(settings or {})
        self.parser = SourceParser()
        enabled = self.registry.get_enabled_rules(select, ignore)
        self.rules = [rule for rule in enabled if self._settings_for(rule).enabled]

    def _settings_for(self, rule: Rule) -> RuleSettings:
        return self.settings.get(rule.rule_id) or RuleSettings()

    def rules_for(self, language: Language) -> list[Rule]:
        return [rule for rule in self.rules if rule.applies_to(language)]

    def check(
        self,
        tree: SyntaxNode,
        source: str,
        language: Language,
        file_path: Path | str = "",
        tokens: tuple[Token, ...] | None = None,
    ) -> CheckResult:
        """Apply every enabled rule for the language; the tree is never modified"""
        language = Language(language)
        violations: list[Violation] = []
        lines = source.split("\n")
        for rule in self.rules_for(language):
            settings = self._settings_for(rule)
            context = RuleContext(
                tree=tree,
                source=source,
                language=language,
                options=settings.options or rule.default_options(),
                rule_id=rule.rule_id,
                severity=settings.severity or rule.severity,
                token_cache=tokens,
            )
            try:
                found = list(rule.check(context))
                for violation in found:
                    _check_location(rule, violation, lines)
            except Exception as exc:
                error = exc if isinstance(exc, RuleExecutionError) else RuleExecutionError(rule.rule_id, repr(exc))
                logger.debug("Rule %s failed on %s", rule.rule_id, file_path or "<source>", exc_info=True)
                violations.append(
                    Violation(
                        rule_id=RULE_EXECUTION_ERROR,
                        line=1,
                        column=1,
                        message=str(error),
                        severity=Severity.ERROR,
                    )
                )
                continue
            violations.extend(found)

        violations.sort(key=lambda violation: (violation.line, violation.column))
        return CheckResult(file_path=file_path, language=language, violations=violations)

    def check_source(self, source: str, language: Language, file_path: Path | str = "") -> CheckResult:
        """Tokenize, parse and check a source text"""
        language = Language(language)
        try:
            parsed = self.parser.parse_string(source, language)
        except LexError as exc:
            logger.debug("Lex error in %s: %s", file_path or "<source>", exc)
            return _file_error(file_path, language, LEX_ERROR, exc.message, exc.line, exc.column)
        except ParseError as exc:
            logger.debug("Parse error in %s: %s", file_path or "<source>", exc)
            return _file_error(file_path, language, PARSE_ERROR, exc.message, exc.line, exc.column)
        return self.check(parsed.tree, source, language, file_path, tokens=parsed.tokens)

    def check_file(self, file_path: Path, language: Language | None = None) -> CheckResult:
        """Read a UTF-8 file and check it. Line endings are preserved as written."""
        file_path = Path(file_path)
        language = language or detect_language(file_path)
        if language is None:
            return _file_error(file_path, None, READ_ERROR, "Unknown file type", 1, 1)
        logger.debug("Checking %s as %s", file_path, Language(language).value)
        try:
            with open(file_path, encoding="utf-8", newline="") as handle:
                source = handle.read()
        except (OSError, UnicodeDecodeError) as exc:
            logger.debug("Cannot read %s: %s", file_path, exc)
            return _file_error(file_path, language, READ_ERROR, f"Cannot read file: {exc}", 1, 1)
        return self.check_source(source, language, file_path)


def _check_location(rule: Rule, violation: Violation, lines: list[str]) -> None:
    line, column = violation.line, violation.column
    if not (1 <= line <= len(lines) and 1 <= column <= len(lines[line - 1]) + 1):
        raise RuleExecutionError(
            rule.rule_id, f"reported location {line}:{column} outside the source"
        )


def _file_error(
    file_path: Path | str,
    language: Language | None,
    rule_id: str,
    message: str,
    line: int,
    column: int,
) -> CheckResult:
    violation = Violation(rule_id=rule_id, line=line, column=column, message=message, severity=Severity.ERROR)
    return CheckResult(file_path=file_path, language=language, violations=[violation])
