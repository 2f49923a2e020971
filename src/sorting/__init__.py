"""Rule-driven item sorting.

Public surface:
 - ``parse_rules`` / ``format_rules``: rule text <-> ``Rule`` lists
 - ``build_comparator`` / ``compare_by_rules``: multi-key comparison
 - ``ItemSorter``: active configuration + stable sort + completion events
 - adapters (``ObjectAdapter``, ``SoupAdapter``) for reading item values
"""

from __future__ import annotations

from .errors import ContainerNotFoundError, RuleError, RuleSyntaxError, SortingError  # noqa: F401
from .rule_schema import FALLBACK_KEY, Rule, default_rules  # noqa: F401
from .rule_parser import format_rules, parse_rules  # noqa: F401
from .value_lookup import MISSING, ValueResolver, normalize_value  # noqa: F401
from .comparator import CompareOptions, build_comparator, compare_by_rules  # noqa: F401
from .event_bus import EventBus, SortEvent  # noqa: F401
from .sorter import ItemSorter, SortResult  # noqa: F401

__all__ = [
    "SortingError",
    "RuleError",
    "RuleSyntaxError",
    "ContainerNotFoundError",
    "FALLBACK_KEY",
    "Rule",
    "default_rules",
    "parse_rules",
    "format_rules",
    "MISSING",
    "ValueResolver",
    "normalize_value",
    "CompareOptions",
    "build_comparator",
    "compare_by_rules",
    "EventBus",
    "SortEvent",
    "ItemSorter",
    "SortResult",
]
