"""Rules that look at raw text and apply to every language."""

import re
from typing import Iterator, Literal

from pydantic import Field
from guidelint_syntax import TokenKind

from ..models import Violation
from .base import ALL_LANGUAGES, RuleContext, RuleOptions, lint_rule, multiline_spans

_INDENT = re.compile(r"[ \t]*")


@lint_rule("trailing-newline", "T001", ALL_LANGUAGES)
def trailing_newline(context: RuleContext) -> Iterator[Violation]:
    """Files end with exactly one newline character"""
    source = context.source
    if not source:
        return
    if not source.endswith("\n"):
        yield context.report(
            context.position_at(len(source) - 1),
            "File does not end with a newline",
            suggestion="Add a single newline at the end of the file",
        )
        return
    content = source.rstrip("\r\n")
    surplus = source[len(content) :]
    if surplus in ("\n", "\r\n"):
        return
    first_extra = len(content) + (2 if surplus.startswith("\r\n") else 1)
    yield context.report(
        context.position_at(first_extra),
        "File ends with more than one newline",
        suggestion="Remove the blank lines at the end of the file",
    )


@lint_rule("trailing-whitespace", "T002", ALL_LANGUAGES)
def trailing_whitespace(context: RuleContext) -> Iterator[Violation]:
    """Lines carry no spaces or tabs before the line break"""
    literals = multiline_spans(context.tokens, [TokenKind.STRING])
    offset = 0
    for number, line in enumerate(context.lines, start=1):
        content = line[:-1] if line.endswith("\r") else line
        stripped = content.rstrip(" \t")
        if len(stripped) < len(content):
            at = offset + len(stripped)
            if not any(start <= at < end for start, end in literals):
                yield context.report(
                    context.position_at(at),
                    "Trailing whitespace",
                    suggestion="Remove the whitespace at the end of the line",
                )
        offset += len(line) + 1


class IndentationOptions(RuleOptions):
    style: Literal["spaces", "tabs"] = "spaces"
    width: int = Field(default=2, ge=1)


@lint_rule("indentation", "T003", ALL_LANGUAGES, options=IndentationOptions)
def indentation(context: RuleContext) -> Iterator[Violation]:
    """Leading whitespace uses the configured style and width"""
    options: IndentationOptions = context.options
    offset = 0
    for line in context.lines:
        line_start = offset
        offset += len(line) + 1
        indent = _INDENT.match(line).group(0)
        if not indent or not line[len(indent) :].strip():
            continue
        token = context.token_at(line_start)
        if token is not None and token.offset < line_start and token.kind != TokenKind.WHITESPACE:
            # continuation of a comment, template or raw text block
            continue

        at = context.position_at(line_start)
        if options.style == "spaces":
            if "\t" in indent:
                yield context.report(at, "Indentation uses tabs, expected spaces")
            elif len(indent) % options.width:
                yield context.report(
                    at,
                    f"Indentation of {len(indent)} spaces is not a multiple of {options.width}",
                )
        elif " " in indent:
            yield context.report(at, "Indentation uses spaces, expected tabs")


RULES = [trailing_newline, trailing_whitespace, indentation]
