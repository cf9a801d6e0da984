from . import css_rules, html_rules, javascript_rules, text_rules
from .base import Rule, RuleContext, RuleOptions, lint_rule

BUILTIN_RULES: list[Rule] = [
    *text_rules.RULES,
    *javascript_rules.RULES,
    *css_rules.RULES,
    *html_rules.RULES,
]

__all__ = ["BUILTIN_RULES", "Rule", "RuleContext", "RuleOptions", "lint_rule"]
