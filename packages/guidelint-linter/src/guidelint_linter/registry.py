import logging
from typing import Iterable

from guidelint_syntax import Language

from .errors import RuleConflictError
from .rules.base import Rule

logger = logging.getLogger(__name__)


class RuleRegistry:
    """Registry for managing and loading linting rules"""

    def __init__(self, load_builtins: bool = True):
        self._rules: dict[str, Rule] = {}
        self._codes: dict[str, str] = {}
        if load_builtins:
            self._load_builtin_rules()

    def register(self, rule: Rule) -> None:
        if rule.rule_id in self._rules:
            raise RuleConflictError(f"Rule '{rule.rule_id}' is already registered")
        if rule.code in self._codes:
            raise RuleConflictError(
                f"Code {rule.code} of rule '{rule.rule_id}' is already used by '{self._codes[rule.code]}'"
            )
        self._rules[rule.rule_id] = rule
        self._codes[rule.code] = rule.rule_id
        logger.debug("Registered rule %s (%s)", rule.rule_id, rule.code)

    def __contains__(self, rule_id: str) -> bool:
        return rule_id in self._rules

    def get(self, rule_id: str) -> Rule:
        """Look up a rule by id or code. Raises KeyError for unknown rules."""
        if rule_id in self._codes:
            rule_id = self._codes[rule_id]
        return self._rules[rule_id]

    def get_all_rules(self) -> list[Rule]:
        return list(self._rules.values())

    def rules_for(self, language: Language) -> list[Rule]:
        """Rules applicable to a language, in registration order"""
        return [rule for rule in self._rules.values() if rule.applies_to(language)]

    def get_enabled_rules(
        self, select: Iterable[str] = ("ALL",), ignore: Iterable[str] = ()
    ) -> list[Rule]:
        """Filter rules by selectors: a rule id, a code prefix such as `J` or `C2`, or `ALL`"""
        select, ignore = list(select), list(ignore)
        return [
            rule
            for rule in self._rules.values()
            if _matches(rule, select) and not _matches(rule, ignore)
        ]

    def _load_builtin_rules(self) -> None:
        from .rules import BUILTIN_RULES

        for rule in BUILTIN_RULES:
            self.register(rule)


def _matches(rule: Rule, selectors: list[str]) -> bool:
    for selector in selectors:
        if selector == "ALL" or selector == rule.rule_id:
            return True
        if selector and rule.code.startswith(selector.upper()):
            return True
    return False


registry = RuleRegistry()
