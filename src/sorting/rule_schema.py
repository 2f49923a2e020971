"""Sort Rule Schema.

Defines the immutable ``Rule`` entity the parser produces and the comparator
consumes. A rule says *what* to read off an item and in which direction the
read values order:

 - ``key`` as a plain string reads a named attribute (``href``).
 - ``key`` as a tuple of segments walks a (possibly nested) property path
   (``("dataset", "row")``).
 - ``selector`` redirects the read to the first descendant it matches.
 - ``descending`` flips this rule only; the global reverse flag is applied on
   top of it by the comparator.

Serialization:
 - ``to_text`` renders the clause form understood by ``parse_rules``.
 - ``from_mapping`` / ``to_mapping`` round-trip plain dict payloads (after a
   YAML or JSON parse) so rule lists can be stored alongside other settings.

Example (mapping):

    {"key": ["dataset", "row"], "selector": "td.index", "descending": true}

"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from .errors import RuleError

__all__ = [
    "FALLBACK_KEY",
    "RuleKey",
    "Rule",
    "default_rules",
]

# Visible text of an item. Used whenever a clause names no key.
FALLBACK_KEY: Tuple[str, ...] = ("text",)

RuleKey = Union[str, Tuple[str, ...]]

# Characters with a meaning in rule text; never part of a key.
_RESERVED_RE = re.compile(r"[\s,{}]")


@dataclass(frozen=True)
class Rule:
    """One precedence-ordered value extraction plus sort direction."""

    key: RuleKey = FALLBACK_KEY
    selector: Optional[str] = None
    descending: bool = False

    def __post_init__(self) -> None:
        # Everything accepted here must survive to_text() -> parse_rules().
        key = self.key
        if isinstance(key, str):
            if not key:
                raise RuleError("Rule.key cannot be an empty attribute name")
            if key[0] in ".>":
                raise RuleError(f"Rule.key attribute name cannot start with {key[0]!r}: {key!r}")
            if _RESERVED_RE.search(key):
                raise RuleError(f"Rule.key attribute name contains a reserved character: {key!r}")
        elif isinstance(key, (list, tuple)):
            if not key:
                raise RuleError("Rule.key property path cannot be empty")
            if any(not isinstance(seg, str) or not seg for seg in key):
                raise RuleError("All Rule.key path segments must be non-empty strings")
            bad = [seg for seg in key if "." in seg or _RESERVED_RE.search(seg)]
            if bad:
                raise RuleError(f"Rule.key path segment contains a reserved character: {bad[0]!r}")
            # frozen: normalise lists through object.__setattr__
            object.__setattr__(self, "key", tuple(key))
        else:
            raise RuleError(f"Unsupported Rule.key value: {key!r}")
        if self.selector is not None:
            if not isinstance(self.selector, str):
                raise RuleError("Rule.selector must be a string when set")
            if "{" in self.selector or "}" in self.selector:
                raise RuleError(f"Rule.selector cannot contain braces: {self.selector!r}")
            object.__setattr__(self, "selector", self.selector.strip() or None)

    # ------------------------------------------------------------------
    @property
    def is_property(self) -> bool:
        return isinstance(self.key, tuple)

    @property
    def key_text(self) -> str:
        if isinstance(self.key, tuple):
            return "." + ".".join(self.key)
        return self.key

    def to_text(self) -> str:
        prefix = f"{{{self.selector}}} " if self.selector else ""
        return f"{prefix}{'>' if self.descending else ''}{self.key_text}"

    # ------------------------------------------------------------------
    # Construction / Serialization
    def to_mapping(self) -> Mapping[str, Any]:
        data: Dict[str, Any] = {
            "key": list(self.key) if isinstance(self.key, tuple) else self.key
        }
        if self.selector:
            data["selector"] = self.selector
        if self.descending:
            data["descending"] = True
        return data

    @staticmethod
    def from_mapping(payload: Any) -> "Rule":
        if isinstance(payload, Rule):
            return payload
        if not isinstance(payload, Mapping):
            raise RuleError(f"Rule payload must be a mapping, got {type(payload).__name__}")
        key = payload.get("key", FALLBACK_KEY)
        if isinstance(key, list):
            key = tuple(key)
        descending = payload.get("descending", False)
        if not isinstance(descending, bool):
            raise RuleError("Rule 'descending' must be a bool")
        return Rule(key=key, selector=payload.get("selector"), descending=descending)

    @staticmethod
    def many_from_mapping(payload: Sequence[Any]) -> List["Rule"]:
        rules: List[Rule] = []
        for idx, item in enumerate(payload):
            try:
                rules.append(Rule.from_mapping(item))
            except RuleError as e:  # augment path
                raise RuleError(f"Invalid rule at index {idx}: {e}") from e
        return rules


def default_rules() -> List[Rule]:
    return [Rule(key=FALLBACK_KEY)]
