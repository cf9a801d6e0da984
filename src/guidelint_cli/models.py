from typing import List, Optional

from pydantic import BaseModel
from guidelint_linter import Severity


class LintIssue(BaseModel):
    severity: Severity
    file_path: str
    line_number: int
    column: int
    rule_id: str
    message: str
    suggestion: Optional[str] = None


class FileReport(BaseModel):
    file_path: str
    language: Optional[str] = None
    passed: bool
    issues: List[LintIssue] = []


class LintReport(BaseModel):
    files: List[FileReport] = []
    total_files: int = 0
    total_issues: int = 0
    passed: bool = True
    cancelled: bool = False


class RuleInfo(BaseModel):
    rule_id: str
    code: str
    languages: List[str]
    severity: Severity
    description: str
