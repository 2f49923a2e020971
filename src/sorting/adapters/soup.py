"""BeautifulSoup item adapter.

Lets rules written for browser elements run against parsed HTML:

 - selectors go through ``Tag.select_one`` (soupsieve CSS selectors)
 - attributes read like ``Element.getAttribute``: multi-valued attributes
   (``class``, ``rel``) come back joined with single spaces
 - a small set of DOM-style properties is exposed on tags (``text`` /
   ``innerText``, ``dataset``, ``classList``, ``checked``, ...); unknown
   names fall back to a reflected attribute of the same name

Nested segments below a tag property (``.dataset.row``, ``.classList.0``)
use plain mapping / index access.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional

from bs4 import Tag

from ..value_lookup import MISSING
from .objects import read_member

__all__ = ["SoupAdapter", "element_children", "dataset", "visible_text"]

logger = logging.getLogger(__name__)

BOOLEAN_ATTRIBUTES = {
    "checked": "checked",
    "disabled": "disabled",
    "selected": "selected",
    "hidden": "hidden",
    "required": "required",
    "readOnly": "readonly",
    "multiple": "multiple",
}
VALUE_TAGS = {"input", "option", "button", "param", "data"}


def _attr_text(value: Any) -> str:
    if isinstance(value, (list, tuple)):
        return " ".join(value)
    return value


def _camel(name: str) -> str:
    head, *tail = name.split("-")
    return head + "".join(part[:1].upper() + part[1:] for part in tail)


def element_children(tag: Tag) -> List[Tag]:
    return [child for child in tag.children if isinstance(child, Tag)]


def dataset(tag: Tag) -> Dict[str, str]:
    return {
        _camel(name[5:]): _attr_text(value)
        for name, value in tag.attrs.items()
        if name.startswith("data-")
    }


def visible_text(tag: Tag) -> str:
    return " ".join(tag.get_text(" ").split())


def _value(tag: Tag) -> Any:
    if tag.name == "textarea":
        return tag.get_text()
    if tag.name == "select":
        chosen = tag.find("option", selected=True) or tag.find("option")
        return _value(chosen) if chosen is not None else ""
    if tag.name == "option" and not tag.has_attr("value"):
        return visible_text(tag)
    if tag.name in VALUE_TAGS:
        return _attr_text(tag.get("value", ""))
    return MISSING


TAG_PROPERTIES: Dict[str, Callable[[Tag], Any]] = {
    "text": visible_text,
    "innerText": visible_text,
    "textContent": lambda t: t.get_text(),
    "tagName": lambda t: t.name.upper(),
    "localName": lambda t: t.name,
    "id": lambda t: _attr_text(t.get("id", "")),
    "className": lambda t: _attr_text(t.get("class", "")),
    "classList": lambda t: list(t.get("class", [])),
    "dataset": dataset,
    "attributes": lambda t: dict(t.attrs),
    "children": element_children,
    "childElementCount": lambda t: len(element_children(t)),
    "value": _value,
}


class SoupAdapter:
    """Reads rule values off ``bs4.Tag`` items."""

    def resolve(self, item: Any, selector: Optional[str]) -> Any:
        if not selector:
            return item
        if not isinstance(item, Tag):
            return MISSING
        try:
            found = item.select_one(selector)
        except Exception as e:  # noqa: BLE001 - invalid selector fails soft
            logger.debug("Selector error for %r: %s", selector, e)
            return MISSING
        return MISSING if found is None else found

    def get_attribute(self, element: Any, name: str) -> Any:
        if not isinstance(element, Tag) or not element.has_attr(name):
            return MISSING
        return _attr_text(element[name])

    def get_property(self, obj: Any, segment: str) -> Any:
        if not isinstance(obj, Tag):
            return read_member(obj, segment)
        getter = TAG_PROPERTIES.get(segment)
        if getter is not None:
            return getter(obj)
        if segment in BOOLEAN_ATTRIBUTES:
            return obj.has_attr(BOOLEAN_ATTRIBUTES[segment])
        if obj.has_attr(segment):
            return _attr_text(obj[segment])
        return MISSING
