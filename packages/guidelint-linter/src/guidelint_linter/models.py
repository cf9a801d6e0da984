from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from guidelint_syntax import Language


class Severity(str, Enum):
    """Issue severity levels, most severe first"""

    ERROR = "ERROR"
    WARNING = "WARNING"
    INFO = "INFO"
    STYLE = "STYLE"


@dataclass(frozen=True)
class Violation:
    """A single deviation from a rule, located by 1-based line and column"""

    rule_id: str
    line: int
    column: int
    message: str
    severity: Severity
    suggestion: str | None = None


@dataclass
class CheckResult:
    """All violations found in one file, ordered by location"""

    file_path: Path | str
    language: Language | None
    violations: list[Violation] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return not self.violations


@dataclass
class LintRun:
    """Aggregated results of checking a set of files"""

    results: list[CheckResult]
    cancelled: bool = False

    @property
    def passed(self) -> bool:
        return not self.cancelled and all(result.passed for result in self.results)

    @property
    def violation_count(self) -> int:
        return sum(len(result.violations) for result in self.results)
