"""Value lookup and normalization for rule-based comparison.

Reads the value a ``Rule`` points at off an item through an ``ItemAdapter``
(the collaborator that knows what an item is) and normalizes it into
something the comparator can order.

Lookup never raises. Every resolution failure (selector miss, absent
property, broken nested path, odd value kind) becomes ``MISSING`` plus one
warning routed to the ``warn`` sink, so a sort always completes.

Property traversal is an explicit walk over the path segments producing one
of three step results:

* ``Found(value)``
* ``NotAnObject(segment, previous)`` - the value before ``segment`` is a
  primitive (or None) and cannot hold properties
* ``SegmentMissing(segment, previous)`` - the value exists but has no
  ``segment``
"""

from __future__ import annotations

import enum
import logging
import math
from collections import deque
from dataclasses import dataclass
from datetime import date, datetime, time as dt_time, timedelta
from decimal import Decimal
from fractions import Fraction
from typing import Any, Callable, Deque, List, Optional, Protocol, Sequence, Union

from .rule_schema import Rule

__all__ = [
    "MISSING",
    "Found",
    "NotAnObject",
    "SegmentMissing",
    "StepResult",
    "ItemAdapter",
    "WarnSink",
    "walk_property_path",
    "normalize_value",
    "is_missing",
    "ValueResolver",
]

logger = logging.getLogger(__name__)


class _MissingType:
    """Singleton marker for 'no usable value'."""

    _instance: Optional["_MissingType"] = None

    def __new__(cls) -> "_MissingType":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "<MISSING>"

    def __reduce__(self):  # pragma: no cover - pickling keeps the singleton
        return (_MissingType, ())


MISSING: Any = _MissingType()

WarnSink = Callable[[str], None]

_PRIMITIVES = (str, bytes, bool, int, float, complex, Decimal, Fraction)
_ORDERED_AS_IS = (bool, int, float, str, Decimal, Fraction, datetime, date, dt_time, timedelta)


def is_missing(value: Any) -> bool:
    """True for ``MISSING`` and ``None`` (nullish values sink alike)."""
    return value is MISSING or value is None


@dataclass(frozen=True)
class Found:
    value: Any


@dataclass(frozen=True)
class NotAnObject:
    segment: str
    previous: str


@dataclass(frozen=True)
class SegmentMissing:
    segment: str
    previous: Optional[str]


StepResult = Union[Found, NotAnObject, SegmentMissing]


class ItemAdapter(Protocol):
    """Collaborator contract for reading values off opaque items.

    Absence is returned as ``MISSING``; adapters do not raise for it.
    """

    def resolve(self, item: Any, selector: Optional[str]) -> Any: ...  # pragma: no cover

    def get_attribute(self, element: Any, name: str) -> Any: ...  # pragma: no cover

    def get_property(self, obj: Any, segment: str) -> Any: ...  # pragma: no cover


def walk_property_path(
    root: Any, segments: Sequence[str], get_property: Callable[[Any, str], Any]
) -> StepResult:
    """Walk ``segments`` starting at ``root`` using ``get_property``."""
    first, rest = segments[0], segments[1:]
    value = get_property(root, first)
    if value is MISSING:
        return SegmentMissing(segment=first, previous=None)
    previous = first
    for segment in rest:
        if value is None or isinstance(value, _PRIMITIVES):
            return NotAnObject(segment=segment, previous=previous)
        value = get_property(value, segment)
        if value is MISSING:
            return SegmentMissing(segment=segment, previous=previous)
        previous = segment
    return Found(value)


def _primitive_conversion(value: Any) -> Any:
    for hook, convert in (("__index__", int), ("__float__", float), ("__int__", int)):
        if hasattr(type(value), hook):
            try:
                return convert(value)
            except (TypeError, ValueError, OverflowError):
                continue
    return MISSING


def _is_nan(value: Any) -> bool:
    if isinstance(value, float):
        return math.isnan(value)
    if isinstance(value, Decimal):
        return value.is_nan()
    return False


def normalize_value(value: Any, warn: Optional[WarnSink] = None) -> Any:
    """Normalize a looked-up value into something orderable.

    Policy (a heuristic, not a total order over arbitrary objects):
     - float / Decimal NaN -> MISSING
     - None / bool / numbers / str / date-time values -> unchanged
       (IntEnum and str-based enum members keep their natural order)
     - other Enum members -> member name (diagnostic)
     - sized objects (lists, dicts, tags) -> len(obj)
     - callables -> True (diagnostic; only existence is comparable)
     - objects with a numeric conversion -> converted number
     - anything else -> MISSING (diagnostic)
    """
    emit = warn or logger.warning
    if value is MISSING or value is None:
        return value
    if _is_nan(value):
        return MISSING
    if isinstance(value, _ORDERED_AS_IS):
        return value
    if isinstance(value, enum.Enum):
        emit(
            f'The value being sorted by is an enum member. Using member name: "{value.name}".'
        )
        return value.name
    if hasattr(value, "__len__"):
        try:
            return len(value)
        except TypeError:
            pass
    if callable(value):
        emit('The value being sorted by is a function. Using value "True".')
        return True
    converted = _primitive_conversion(value)
    if converted is MISSING:
        emit(f"The value being sorted by ({type(value).__name__}) has no comparable form.")
        return MISSING
    if _is_nan(converted):
        return MISSING
    return converted


class ValueResolver:
    """Callable ``lookup(item, rule)`` bound to an adapter and a warn sink.

    Warnings are forwarded to ``warn`` (module logger by default) and kept in a
    capped ring buffer so callers can surface them after a sort. Errors raised
    by the adapter (a failing property getter, say) become a warning and
    ``MISSING`` as well.
    """

    DEFAULT_CAPACITY = 200

    def __init__(
        self,
        adapter: ItemAdapter,
        warn: Optional[WarnSink] = None,
        *,
        capacity: int = DEFAULT_CAPACITY,
    ) -> None:
        self.adapter = adapter
        self._sink = warn
        self._warnings: Deque[str] = deque(maxlen=capacity)

    # ------------------------------------------------------------------
    def warn(self, message: str) -> None:
        self._warnings.append(message)
        if self._sink is not None:
            self._sink(message)
        else:
            logger.warning(message)

    @property
    def warnings(self) -> List[str]:
        return list(self._warnings)

    def clear_warnings(self) -> None:
        self._warnings.clear()

    # ------------------------------------------------------------------
    def __call__(self, item: Any, rule: Rule) -> Any:
        try:
            return self._lookup(item, rule)
        except Exception as e:  # noqa: BLE001 - adapter failures fail soft
            self.warn(f"Lookup of '{rule.to_text()}' failed: {type(e).__name__}: {e}")
            return MISSING

    def _lookup(self, item: Any, rule: Rule) -> Any:
        element = self.adapter.resolve(item, rule.selector)
        if element is MISSING or element is None:
            self.warn(f"Selector {rule.selector} did not return an element")
            return MISSING

        if isinstance(rule.key, str):
            value = self.adapter.get_attribute(element, rule.key)
            if value is MISSING or value is None:
                self.warn(f"Element does not have attribute '{rule.key}'")
                return MISSING
            return value

        step = walk_property_path(element, rule.key, self.adapter.get_property)
        if isinstance(step, SegmentMissing):
            if step.previous is None:
                self.warn(f"Element does not have property '{step.segment}'")
            else:
                self.warn(
                    f"Element property '{step.previous}' does not contain nested property '{step.segment}'"
                )
            return MISSING
        if isinstance(step, NotAnObject):
            self.warn(
                f"Cannot access nested property '{step.segment}' on element because "
                f"property '{step.previous}' is not an object"
            )
            return MISSING
        return normalize_value(step.value, self.warn)
