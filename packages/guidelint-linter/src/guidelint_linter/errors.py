from guidelint_syntax import GuidelintError


class RuleConflictError(GuidelintError):
    """Raised when two rules are registered under the same identifier or code"""


class RuleExecutionError(GuidelintError):
    """A rule raised while checking a file, or reported a location outside the source"""

    def __init__(self, rule_id: str, reason: str):
        super().__init__(f"Rule '{rule_id}' failed: {reason}")
        self.rule_id = rule_id
        self.reason = reason


class DiscoveryError(GuidelintError):
    """Raised when a path named on the command line cannot be found"""
