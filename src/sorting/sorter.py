"""Item sorter service.

Holds the active rule configuration and applies it to item snapshots.

Usage:
    sorter = ItemSorter(SoupAdapter(), by="{td.name}, >data-rank")
    result = sorter.sort(row_tags)
    result.order  # stable, rule-ordered list

Configuration is replaced wholesale (``rules`` / ``by`` setters); every call
to ``sort`` builds a fresh comparator from the configuration current at that
moment, so nothing cached leaks from one sort into the next. The sorter does
not place items anywhere: it returns the decided order and publishes
``SortEvent.SORT_COMPLETED`` for a placement layer to act on.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from functools import cmp_to_key
from typing import Any, Iterable, List, Optional, Sequence, Tuple

from .comparator import CompareFn, CompareOptions, build_comparator
from .event_bus import EventBus, SortEvent
from .rule_parser import format_rules, parse_rules
from .rule_schema import Rule, default_rules
from .value_lookup import ItemAdapter, ValueResolver, WarnSink

__all__ = ["SortResult", "ItemSorter"]

logger = logging.getLogger(__name__)


@dataclass
class SortResult:
    order: List[Any]
    moved: int
    warnings: List[str] = field(default_factory=list)

    def to_mapping(self) -> dict:  # pragma: no cover - trivial
        return {"count": len(self.order), "moved": self.moved, "warnings": list(self.warnings)}


class ItemSorter:
    def __init__(
        self,
        adapter: ItemAdapter,
        *,
        rules: Optional[Iterable[Rule]] = None,
        by: Optional[str] = None,
        reverse: bool = False,
        random: bool = False,
        comparator: Optional[CompareFn] = None,
        seed: Optional[int] = None,
        event_bus: Optional[EventBus] = None,
        warn: Optional[WarnSink] = None,
        max_warnings: int = ValueResolver.DEFAULT_CAPACITY,
    ) -> None:
        self._resolver = ValueResolver(adapter, warn, capacity=max_warnings)
        self.event_bus = event_bus or EventBus()
        self.reverse = reverse
        self.random = random
        self.comparator = comparator
        self.seed = seed
        self._rules: Tuple[Rule, ...] = tuple(default_rules())
        if rules is not None:
            self._rules = self._normalise(rules)
        elif by is not None:
            self._rules = self._normalise(parse_rules(by))

    # ------------------------------------------------------------------
    # Configuration
    @staticmethod
    def _normalise(rules: Iterable[Rule]) -> Tuple[Rule, ...]:
        snapshot = tuple(Rule.from_mapping(r) for r in rules)
        return snapshot or tuple(default_rules())

    @property
    def rules(self) -> Tuple[Rule, ...]:
        return self._rules

    @rules.setter
    def rules(self, rules: Iterable[Rule]) -> None:
        self._rules = self._normalise(rules)
        self.event_bus.publish(SortEvent.RULES_CHANGED, self._rules)

    @property
    def by(self) -> str:
        return format_rules(self._rules)

    @by.setter
    def by(self, text: Optional[str]) -> None:
        self.rules = parse_rules(text)

    @property
    def options(self) -> CompareOptions:
        return CompareOptions(
            random=self.random, reverse=self.reverse, comparator=self.comparator, seed=self.seed
        )

    @property
    def adapter(self) -> ItemAdapter:
        return self._resolver.adapter

    # ------------------------------------------------------------------
    # Sorting
    def lookup(self, item: Any, rule: Rule) -> Any:
        return self._resolver(item, rule)

    def build_comparator(self) -> CompareFn:
        return build_comparator(self._rules, self._resolver, self.options)

    def sort(self, items: Iterable[Any]) -> SortResult:
        """Stable-sort a snapshot of ``items`` and announce the new order."""
        snapshot: Sequence[Any] = list(items)
        self._resolver.clear_warnings()
        compare = self.build_comparator()
        order = sorted(snapshot, key=cmp_to_key(compare))
        moved = sum(1 for before, after in zip(snapshot, order) if before is not after)
        result = SortResult(order=order, moved=moved, warnings=self._resolver.warnings)
        logger.debug(
            "Sorted %d items by %r (moved=%d, warnings=%d)",
            len(order),
            self.by,
            moved,
            len(result.warnings),
        )
        self.event_bus.publish(SortEvent.SORT_COMPLETED, result)
        return result
