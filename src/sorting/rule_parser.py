"""Rule text parser.

Turns a "by" string such as::

    {td.name} .text, >data-rank, {div label, span.alt} >.dataset.row

into an ordered list of ``Rule`` objects (index 0 has highest precedence),
and renders rule lists back into that form.

Grammar (one clause per comma, commas inside ``{...}`` do not split)::

    clause  := [ "{" selector "}" ] [ ">" ] keyExpr
    keyExpr := attributeName | "." segment ( "." segment )*

Parsing is purely syntactic: attribute or property existence is checked
lazily at comparison time. By default malformed input is recovered on a
best-effort basis (recoveries are logged at DEBUG level); ``strict=True``
raises ``RuleSyntaxError`` for the same cases instead.
"""

from __future__ import annotations

import logging
import re
from typing import Iterable, List, Optional

from .errors import RuleSyntaxError
from .rule_schema import FALLBACK_KEY, Rule, RuleKey

__all__ = ["parse_rules", "format_rules", "split_clauses"]

logger = logging.getLogger(__name__)

# A comma separates clauses unless the next brace after it is a closing one.
CLAUSE_SPLIT_RE = re.compile(r",\s*(?![^{}]*\})")
WS_RE = re.compile(r"\s")
# Best-effort: a key expression ends at the first character rule text reserves.
KEY_END_RE = re.compile(r"[\s{},]")


def split_clauses(text: str) -> List[str]:
    return CLAUSE_SPLIT_RE.split(text)


def _recover(strict: bool, message: str, clause: str, index: int) -> None:
    if strict:
        raise RuleSyntaxError(message, clause=clause, index=index)
    logger.debug("Recovered malformed rule clause %d (%r): %s", index, clause, message)


def _parse_key(key_expr: str, *, strict: bool, clause: str, index: int) -> RuleKey:
    if not key_expr:
        return FALLBACK_KEY
    if "}" in key_expr:
        _recover(strict, "unexpected '}' without a matching '{'", clause, index)
    if WS_RE.search(key_expr):
        _recover(strict, "whitespace inside key expression", clause, index)
    key_expr = KEY_END_RE.split(key_expr, maxsplit=1)[0]
    if not key_expr:
        return FALLBACK_KEY
    if not key_expr.startswith("."):
        return key_expr
    raw_segments = key_expr[1:].split(".")
    segments = tuple(seg for seg in raw_segments if seg)
    if len(segments) != len(raw_segments):
        _recover(strict, "empty property path segment", clause, index)
    return segments or FALLBACK_KEY


def _parse_clause(clause: str, *, strict: bool, index: int) -> Rule:
    text = clause.strip()
    selector: Optional[str] = None
    key_expr = text
    if text.startswith("{"):
        close = text.find("}")
        if close == -1:
            _recover(strict, "unmatched '{'", clause, index)
            selector, key_expr = text[1:].strip(), ""
        else:
            selector, key_expr = text[1:close].strip(), text[close + 1 :].strip()
        if "{" in selector:
            _recover(strict, "'{' inside selector", clause, index)
            selector = selector.replace("{", "").strip()
        if not selector:
            _recover(strict, "empty selector", clause, index)
            selector = None
    elif "{" in text:
        _recover(strict, "selector must come first in a clause", clause, index)

    descending = key_expr.startswith(">")
    if descending:
        key_expr = key_expr[1:].strip()
        if key_expr.startswith(">"):
            _recover(strict, "repeated '>'", clause, index)
            key_expr = key_expr.lstrip(">").strip()

    key = _parse_key(key_expr, strict=strict, clause=clause, index=index)
    return Rule(key=key, selector=selector, descending=descending)


def parse_rules(text: Optional[str], *, strict: bool = False) -> List[Rule]:
    """Parse a comma separated rule string.

    Parameters
    ----------
    text : str | None
        Rule text. ``None`` or blank text yields an empty list; callers fall
        back to ``default_rules()``.
    strict : bool, default False
        Raise ``RuleSyntaxError`` on malformed clauses instead of recovering.
    """
    if not text or not text.strip():
        return []
    rules: List[Rule] = []
    for index, clause in enumerate(split_clauses(text.strip())):
        if not clause.strip():
            _recover(strict, "empty clause", clause, index)
            continue
        rules.append(_parse_clause(clause, strict=strict, index=index))
    return rules


def format_rules(rules: Iterable[Rule]) -> str:
    return ", ".join(rule.to_text() for rule in rules)
