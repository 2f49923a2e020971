import enum
import logging
from decimal import Decimal
from types import SimpleNamespace

from sorting import MISSING, Rule, ValueResolver, normalize_value
from sorting.value_lookup import Found, NotAnObject, SegmentMissing, walk_property_path
from sorting.adapters import read_member


class Color(enum.Enum):
    RED = 1


class Money:
    def __init__(self, cents):
        self.cents = cents

    def __float__(self):
        return self.cents / 100


def test_walk_found():
    obj = {"dataset": {"row": "3"}}
    assert walk_property_path(obj, ("dataset", "row"), read_member) == Found("3")


def test_walk_segment_missing_at_root_and_nested():
    obj = {"dataset": {"row": "3"}}
    assert walk_property_path(obj, ("nope",), read_member) == SegmentMissing("nope", None)
    assert walk_property_path(obj, ("dataset", "col"), read_member) == SegmentMissing(
        "col", "dataset"
    )


def test_walk_not_an_object():
    obj = {"title": "x", "empty": None}
    assert walk_property_path(obj, ("title", "length"), read_member) == NotAnObject(
        "length", "title"
    )
    assert walk_property_path(obj, ("empty", "a"), read_member) == NotAnObject("a", "empty")


def test_normalize_primitives_pass_through():
    for value in (3, 2.5, "abc", True, None, 10**30):
        assert normalize_value(value) == value


def test_normalize_nan_is_missing():
    assert normalize_value(float("nan")) is MISSING


def test_normalize_sized_and_numeric_objects():
    assert normalize_value([1, 2, 3]) == 3
    assert normalize_value({"a": 1}) == 1
    assert normalize_value(Money(250)) == 2.5


def test_normalize_callable_and_enum_warn():
    seen = []
    assert normalize_value(lambda: 1, seen.append) is True
    assert normalize_value(Color.RED, seen.append) == "RED"
    assert 'Using value "True"' in seen[0]
    assert 'Using member name: "RED"' in seen[1]


def test_normalize_opaque_object_is_missing():
    seen = []
    assert normalize_value(object(), seen.append) is MISSING
    assert len(seen) == 1


def test_resolver_attribute_lookup_has_no_coercion(object_adapter):
    lookup = ValueResolver(object_adapter, warn=lambda m: None)
    assert lookup({"href": "/a"}, Rule(key="href")) == "/a"
    assert lookup({"rank": 3}, Rule(key="rank")) is MISSING
    assert lookup({}, Rule(key="href")) is MISSING
    assert lookup.warnings == [
        "Element does not have attribute 'rank'",
        "Element does not have attribute 'href'",
    ]


class Flaky:
    @property
    def score(self):
        raise ValueError("backend unavailable")


def test_resolver_turns_adapter_errors_into_missing(object_adapter):
    seen = []
    lookup = ValueResolver(object_adapter, warn=seen.append)
    assert lookup(Flaky(), Rule(key=("score",))) is MISSING
    assert len(seen) == 1
    assert "Lookup of '.score' failed" in seen[0]
    assert "ValueError: backend unavailable" in seen[0]


def test_normalize_decimal_nan_is_missing():
    assert normalize_value(Decimal("NaN")) is MISSING
    assert normalize_value(Decimal("sNaN")) is MISSING
    assert normalize_value(Decimal("1.5")) == Decimal("1.5")


class Priority(enum.IntEnum):
    LOW = 1
    HIGH = 10


def test_normalize_int_enum_keeps_numeric_order():
    seen = []
    assert normalize_value(Priority.HIGH, seen.append) == 10
    assert normalize_value(Priority.LOW, seen.append) < normalize_value(Priority.HIGH, seen.append)
    assert seen == []


def test_resolver_selector_miss_warns(object_adapter):
    seen = []
    lookup = ValueResolver(object_adapter, warn=seen.append)
    assert lookup({"meta": {}}, Rule(key=("x",), selector="child")) is MISSING
    assert seen == ["Selector child did not return an element"]
    assert lookup.warnings == seen


def test_resolver_selector_redirects_lookup(object_adapter):
    lookup = ValueResolver(object_adapter, warn=lambda m: None)
    item = {"meta": {"author": SimpleNamespace(name="Ann")}}
    assert lookup(item, Rule(key=("name",), selector="meta/author")) == "Ann"


def test_resolver_property_failures_warn(object_adapter):
    seen = []
    lookup = ValueResolver(object_adapter, warn=seen.append)
    item = {"title": "x", "dataset": {}}
    assert lookup(item, Rule(key=("missing",))) is MISSING
    assert lookup(item, Rule(key=("title", "length"))) is MISSING
    assert lookup(item, Rule(key=("dataset", "row"))) is MISSING
    assert seen == [
        "Element does not have property 'missing'",
        "Cannot access nested property 'length' on element because property 'title' is not an object",
        "Element property 'dataset' does not contain nested property 'row'",
    ]


def test_resolver_defaults_to_logging(object_adapter, caplog):
    caplog.set_level(logging.WARNING, logger="sorting.value_lookup")
    lookup = ValueResolver(object_adapter)
    assert lookup({}, Rule(key=("score",))) is MISSING
    assert "Element does not have property 'score'" in caplog.text


def test_resolver_warning_buffer_is_capped(object_adapter):
    lookup = ValueResolver(object_adapter, warn=lambda m: None, capacity=2)
    for _ in range(5):
        lookup({}, Rule(key=("score",)))
    assert len(lookup.warnings) == 2
    lookup.clear_warnings()
    assert lookup.warnings == []
