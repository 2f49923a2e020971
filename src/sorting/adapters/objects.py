"""Item adapter for plain Python objects and mappings.

 - ``resolve`` treats the selector as a ``/`` separated chain of keys or
   attribute names leading to a child object (``"meta/author"``).
 - ``get_attribute`` returns string values only; anything else is absent.
 - ``get_property`` reads mapping keys, then sequence indexes for digit
   segments, then attributes.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Optional

from ..value_lookup import MISSING

__all__ = ["ObjectAdapter", "read_member"]


def read_member(obj: Any, segment: str) -> Any:
    """Read ``segment`` off ``obj`` or return ``MISSING``."""
    if isinstance(obj, Mapping):
        return obj[segment] if segment in obj else MISSING
    if isinstance(obj, Sequence) and not isinstance(obj, (str, bytes)) and segment.isdigit():
        index = int(segment)
        return obj[index] if index < len(obj) else MISSING
    try:
        return getattr(obj, segment)
    except AttributeError:
        return MISSING


class ObjectAdapter:
    def resolve(self, item: Any, selector: Optional[str]) -> Any:
        if not selector:
            return item
        current = item
        for part in selector.split("/"):
            part = part.strip()
            if not part:
                continue
            current = read_member(current, part)
            if current is MISSING or current is None:
                return MISSING
        return current

    def get_attribute(self, element: Any, name: str) -> Any:
        value = read_member(element, name)
        return value if isinstance(value, str) else MISSING

    def get_property(self, obj: Any, segment: str) -> Any:
        return read_member(obj, segment)
