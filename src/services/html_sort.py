"""HTML placement layer on top of the rule sorter.

Parses a document with BeautifulSoup, sorts the element children of one (or
every) container matched by a CSS selector and moves them into the decided
order, the way a browser would re-append children of a sorted list.

Only element children take part; text nodes (indentation whitespace) stay
where they are.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from bs4 import BeautifulSoup, Tag

from config import settings
from sorting import ItemSorter, SortResult, parse_rules
from sorting.adapters import SoupAdapter
from sorting.adapters.soup import element_children
from sorting.errors import ContainerNotFoundError

__all__ = ["sort_children", "sort_document", "sort_html", "make_sorter"]

logger = logging.getLogger(__name__)


def make_sorter(
    by: Optional[str] = None,
    *,
    reverse: bool = False,
    random: bool = False,
    seed: Optional[int] = None,
    strict: bool = False,
) -> ItemSorter:
    text = settings.DEFAULT_BY if by is None else by
    return ItemSorter(
        SoupAdapter(),
        rules=parse_rules(text, strict=strict),
        reverse=reverse,
        random=random,
        seed=settings.RANDOM_SEED if seed is None else seed,
        max_warnings=settings.MAX_RECORDED_WARNINGS,
    )


def _apply_order(container: Tag, order: List[Tag]) -> None:
    current = element_children(container)
    keep = 0
    while keep < len(order) and order[keep] is current[keep]:
        keep += 1
    # Everything after the first out-of-place element is re-appended in order
    for el in order[keep:]:
        container.append(el)


def sort_children(container: Tag, sorter: ItemSorter) -> SortResult:
    """Sort ``container``'s element children in place."""
    result = sorter.sort(element_children(container))
    if result.moved:
        _apply_order(container, result.order)
    return result


def sort_document(
    soup: BeautifulSoup, container_selector: str, sorter: ItemSorter, *, all_containers: bool = False
) -> List[SortResult]:
    if all_containers:
        containers = soup.select(container_selector)
    else:
        first = soup.select_one(container_selector)
        containers = [first] if first is not None else []
    if not containers:
        raise ContainerNotFoundError(
            f"Container selector matched 0 nodes ({container_selector})",
            context={"selector": container_selector},
        )
    results = [sort_children(container, sorter) for container in containers]
    logger.info(
        "Sorted %d container(s) matching %r by %r", len(results), container_selector, sorter.by
    )
    return results


def sort_html(
    html: str,
    container_selector: str,
    *,
    by: Optional[str] = None,
    reverse: bool = False,
    random: bool = False,
    seed: Optional[int] = None,
    all_containers: bool = False,
    strict: bool = False,
) -> str:
    """Return ``html`` with the matched container's children sorted by ``by``."""
    soup = BeautifulSoup(html, settings.HTML_PARSER)
    sorter = make_sorter(by, reverse=reverse, random=random, seed=seed, strict=strict)
    sort_document(soup, container_selector, sorter, all_containers=all_containers)
    return str(soup)
