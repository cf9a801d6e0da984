import inspect
from bisect import bisect_right
from dataclasses import dataclass, field
from functools import cached_property
from typing import Callable, Iterable, Iterator, Sequence

from pydantic import BaseModel, ConfigDict
from guidelint_syntax import Language, Position, SyntaxNode, Token, TokenKind, tokenize

from ..models import Severity, Violation

ALL_LANGUAGES = frozenset(Language)
JAVASCRIPT = frozenset({Language.JAVASCRIPT})
CSS = frozenset({Language.CSS})
HTML = frozenset({Language.HTML})


def _kebab(name: str) -> str:
    return name.replace("_", "-")


class RuleOptions(BaseModel):
    """Base for per-rule options. Configuration keys are the hyphenated field names."""

    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
        alias_generator=_kebab,
        populate_by_name=True,
    )


@dataclass(frozen=True)
class RuleContext:
    """Everything a rule may look at while checking one file"""

    tree: SyntaxNode
    source: str
    language: Language
    options: RuleOptions
    rule_id: str
    severity: Severity
    token_cache: tuple[Token, ...] | None = field(default=None, repr=False, compare=False)

    @cached_property
    def tokens(self) -> tuple[Token, ...]:
        if self.token_cache is not None:
            return self.token_cache
        return tokenize(self.source, self.language)

    @cached_property
    def lines(self) -> list[str]:
        """Source lines without their line breaks (a trailing `\\r` is kept)"""
        return self.source.split("\n")

    @cached_property
    def _line_starts(self) -> list[int]:
        starts = [0]
        for index, char in enumerate(self.source):
            if char == "\n":
                starts.append(index + 1)
        return starts

    @cached_property
    def _token_offsets(self) -> list[int]:
        return [token.offset for token in self.tokens]

    def position_at(self, offset: int) -> Position:
        line = bisect_right(self._line_starts, offset)
        return Position(line, offset - self._line_starts[line - 1] + 1, offset)

    def token_at(self, offset: int) -> Token | None:
        """Return the token covering a character offset"""
        index = bisect_right(self._token_offsets, offset) - 1
        if index < 0:
            return None
        token = self.tokens[index]
        return token if offset < token.end_offset else None

    def line_prefix(self, offset: int) -> str:
        """Text between the start of the line and `offset`"""
        return self.source[self.source.rfind("\n", 0, offset) + 1 : offset]

    def report(
        self,
        at: SyntaxNode | Token | Position,
        message: str,
        suggestion: str | None = None,
    ) -> Violation:
        """Create a violation with this rule's id and effective severity"""
        position = at if isinstance(at, Position) else at.start
        return Violation(
            rule_id=self.rule_id,
            line=position.line,
            column=position.column,
            message=message,
            severity=self.severity,
            suggestion=suggestion,
        )


CheckFunction = Callable[[RuleContext], Iterable[Violation]]


@dataclass(frozen=True)
class Rule:
    """A named check over one file's tree and text"""

    rule_id: str
    code: str
    description: str
    languages: frozenset[Language]
    severity: Severity
    check: CheckFunction = field(compare=False)
    options: type[RuleOptions] = RuleOptions

    def applies_to(self, language: Language) -> bool:
        return Language(language) in self.languages

    def default_options(self) -> RuleOptions:
        return self.options()


def lint_rule(
    rule_id: str,
    code: str,
    languages: frozenset[Language],
    severity: Severity = Severity.STYLE,
    options: type[RuleOptions] = RuleOptions,
) -> Callable[[CheckFunction], Rule]:
    """Turn a check function into a Rule; the docstring's first line is the description"""

    def decorator(check: CheckFunction) -> Rule:
        doc = inspect.getdoc(check) or ""
        return Rule(
            rule_id=rule_id,
            code=code,
            description=doc.splitlines()[0] if doc else "",
            languages=languages,
            severity=severity,
            check=check,
            options=options,
        )

    return decorator


def multiline_spans(tokens: Sequence[Token], kinds: Iterable[TokenKind]) -> list[tuple[int, int]]:
    """Offset ranges of tokens of the given kinds that span more than one line"""
    wanted = frozenset(kinds)
    return [
        (token.offset, token.end_offset)
        for token in tokens
        if token.kind in wanted and "\n" in token.text
    ]


def brace_spacing_problem(context: RuleContext, brace_offset: int) -> str | None:
    """Check that an opening brace sits on its header line after exactly one space"""
    before = context.line_prefix(brace_offset)
    if not before.strip():
        return "Opening brace should be on the same line as its statement"
    gap = before[len(before.rstrip(" \t")) :]
    if gap != " ":
        return "Expected exactly one space before '{'"
    return None


QUOTES = {"single": "'", "double": '"'}


def check_quotes(
    context: RuleContext,
    literals: Iterable[tuple[SyntaxNode | Token, str]],
    preferred: str,
    avoid_escape: bool,
) -> Iterator[Violation]:
    """Report quoted literals, given as (location, raw text), not using the preferred quote"""
    quote = QUOTES[preferred]
    for at, raw in literals:
        if raw[0] == quote or raw[0] not in "'\"":
            continue
        if avoid_escape and quote in raw[1:-1]:
            continue
        yield context.report(
            at,
            f"Strings must use {preferred} quotes",
            suggestion=f"Use {quote}...{quote}",
        )
