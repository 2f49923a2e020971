"""Multi-key rule comparator.

Builds a pairwise comparison function (negative / zero / positive) from an
ordered rule list. Rules are evaluated per pair, head first; a rule whose
values tie hands over to the remaining rules.

Ordering policy
---------------
 - Effective direction of a rule is ``reverse XOR rule.descending``.
 - Missing values (``MISSING`` / ``None``) always sort last, whatever the
   direction. Two missing values tie.
 - Otherwise ``first < second`` decides "lesser"; every other outcome
   (greater, equal-but-not-identical, unorderable types) counts as
   "greater".
 - ``random`` short-circuits everything with a coin flip per call (a shuffle,
   not a consistent order).
 - A custom ``comparator`` replaces rule evaluation; only ``reverse`` is
   applied on top of it.

Use ``functools.cmp_to_key`` with a stable sort to apply the result.
"""

from __future__ import annotations

import random as _random
from dataclasses import dataclass
from typing import Any, Callable, Optional, Sequence

from .rule_schema import Rule
from .value_lookup import is_missing

__all__ = [
    "CompareFn",
    "Lookup",
    "CompareOptions",
    "compare_by_rules",
    "build_comparator",
]

CompareFn = Callable[[Any, Any], float]
Lookup = Callable[[Any, Rule], Any]


@dataclass(frozen=True)
class CompareOptions:
    random: bool = False
    reverse: bool = False
    comparator: Optional[CompareFn] = None
    seed: Optional[int] = None


def _is_lesser(first: Any, second: Any) -> bool:
    try:
        return bool(first < second)
    except (TypeError, ArithmeticError):  # unorderable kinds, signalling Decimal NaN
        return False


def compare_by_rules(
    a: Any, b: Any, rules: Sequence[Rule], lookup: Lookup, reverse: bool = False
) -> int:
    """Compare ``a`` and ``b`` on ``rules`` (highest precedence first)."""
    if not rules:
        return 0
    rule, rest = rules[0], rules[1:]
    lesser = 1 if reverse != rule.descending else -1
    greater = -lesser

    first = lookup(a, rule)
    second = lookup(b, rule)
    first_missing, second_missing = is_missing(first), is_missing(second)

    if (first_missing and second_missing) or (
        not first_missing and not second_missing and _same(first, second)
    ):
        return compare_by_rules(a, b, rest, lookup, reverse)
    # Missing values sink regardless of direction
    if first_missing:
        return 1
    if second_missing:
        return -1
    if _is_lesser(first, second):
        return lesser
    return greater


def _same(first: Any, second: Any) -> bool:
    # strict equality: 1 == "1" never ties, True does not tie with 1
    if type(first) is not type(second) and (isinstance(first, bool) or isinstance(second, bool)):
        return False
    try:
        return bool(first == second)
    except Exception:  # noqa: BLE001 - exotic __eq__ implementations
        return False


def build_comparator(
    rules: Sequence[Rule], lookup: Lookup, options: Optional[CompareOptions] = None
) -> CompareFn:
    """Return a comparison function for the given configuration snapshot."""
    opts = options or CompareOptions()
    rules = tuple(rules)

    if opts.random:
        rng = _random.Random(opts.seed)

        def compare_random(a: Any, b: Any) -> int:
            return -1 if rng.random() < 0.5 else 1

        return compare_random

    custom = opts.comparator
    if custom is not None:
        sign = -1 if opts.reverse else 1

        def compare_custom(a: Any, b: Any) -> float:
            return custom(a, b) * sign

        return compare_custom

    def compare(a: Any, b: Any) -> int:
        return compare_by_rules(a, b, rules, lookup, opts.reverse)

    return compare
