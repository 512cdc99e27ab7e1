"""Unit tests for composite key canonicalization."""

import enum
from collections import OrderedDict
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from fractions import Fraction

import pytest

from unique_rule.dedup.keys import compute_key, encode_key, encode_value
from unique_rule.errors import KeyEncodingError, UniqueRuleError


class Color(enum.Enum):
    RED = 1


class Size(enum.Enum):
    SMALL = 1


@dataclass
class Point:
    x: int
    y: int


@dataclass
class OtherPoint:
    x: int
    y: int


class TestTypeSensitivity:
    def test_string_and_int_differ(self):
        assert compute_key(["123"]) != compute_key([123])

    def test_int_and_float_differ(self):
        assert compute_key([1]) != compute_key([1.0])

    def test_bool_and_int_differ(self):
        assert compute_key([True]) != compute_key([1])
        assert compute_key([False]) != compute_key([0])

    def test_none_and_empty_string_differ(self):
        assert compute_key([None]) != compute_key([""])

    def test_list_and_tuple_differ(self):
        assert compute_key([[1, 2]]) != compute_key([(1, 2)])

    def test_enums_of_different_types_differ(self):
        assert compute_key([Color.RED]) != compute_key([Size.SMALL])
        assert compute_key([Color.RED]) != compute_key([1])

    def test_dataclasses_of_different_types_differ(self):
        assert compute_key([Point(1, 2)]) != compute_key([OtherPoint(1, 2)])


class TestBoundaries:
    def test_concatenation_does_not_collide(self):
        assert compute_key(["12", "3"]) != compute_key(["1", "23"])

    def test_separator_characters_do_not_collide(self):
        assert compute_key(["a:1", "b"]) != compute_key(["a", "1:b"])

    def test_arity_matters(self):
        assert compute_key(["a"]) != compute_key(["a", None])

    def test_position_matters(self):
        assert compute_key(["a", "b"]) != compute_key(["b", "a"])


class TestStructuralEquality:
    def test_equal_scalars(self):
        assert compute_key(["x", 1, 2.5, None, True]) == compute_key(["x", 1, 2.5, None, True])

    def test_nested_lists(self):
        assert compute_key([[1, [2, 3]]]) == compute_key([[1, [2, 3]]])
        assert compute_key([[1, [2, 3]]]) != compute_key([[1, [3, 2]]])

    def test_mapping_key_order_is_ignored(self):
        assert compute_key([{"a": 1, "b": 2}]) == compute_key([{"b": 2, "a": 1}])

    def test_mapping_values_compared_deeply(self):
        assert compute_key([{"a": {"b": 1}}]) != compute_key([{"a": {"b": "1"}}])

    def test_mapping_type_is_part_of_the_key(self):
        assert compute_key([OrderedDict(a=1)]) != compute_key([{"a": 1}])

    def test_sets(self):
        assert compute_key([{1, 2, 3}]) == compute_key([{3, 2, 1}])
        assert compute_key([{1, 2}]) != compute_key([frozenset({1, 2})])

    def test_dataclass_by_value(self):
        assert compute_key([Point(1, 2)]) == compute_key([Point(1, 2)])
        assert compute_key([Point(1, 2)]) != compute_key([Point(2, 1)])

    def test_plain_object_by_attributes(self):
        class Tag:
            def __init__(self, label):
                self.label = label

        assert compute_key([Tag("a")]) == compute_key([Tag("a")])
        assert compute_key([Tag("a")]) != compute_key([Tag("b")])

    def test_self_reference_terminates(self):
        data = {"name": "loop"}
        data["self"] = data
        assert encode_value(data)

    def test_str_subclass_keeps_value(self):
        class Code(str):
            pass

        assert compute_key([Code("a")]) != compute_key([Code("b")])
        assert compute_key([Code("a")]) != compute_key(["a"])


def test_key_is_hex_digest():
    key = compute_key(["a"])
    assert len(key) == 40
    int(key, 16)


def test_encode_key_is_deterministic():
    assert encode_key(["a", 1]) == encode_key(["a", 1])


class Stamp(datetime):
    pass


class Money(Decimal):
    pass


class Ratio(Fraction):
    pass


class Slotted:
    __slots__ = ("code",)

    def __init__(self, code):
        self.code = code


class TestNativeValues:
    def test_datetime_by_value(self):
        assert compute_key([datetime(2024, 1, 1)]) == compute_key([datetime(2024, 1, 1)])
        assert compute_key([datetime(2024, 1, 1)]) != compute_key([datetime(2025, 6, 30)])

    def test_datetime_subclass_keeps_value(self):
        assert compute_key([Stamp(2024, 1, 1)]) == compute_key([Stamp(2024, 1, 1)])
        assert compute_key([Stamp(2024, 1, 1)]) != compute_key([Stamp(2025, 6, 30)])
        assert compute_key([Stamp(2024, 1, 1)]) != compute_key([datetime(2024, 1, 1)])

    def test_date_and_datetime_differ(self):
        assert compute_key([date(2024, 1, 1)]) != compute_key([datetime(2024, 1, 1)])

    def test_decimal_subclass_keeps_value(self):
        assert compute_key([Money("1.50")]) == compute_key([Money("1.50")])
        assert compute_key([Money("1.50")]) != compute_key([Money("9.99")])

    def test_fraction_subclass_keeps_value(self):
        assert compute_key([Ratio(1, 3)]) != compute_key([Ratio(2, 3)])

    def test_slotted_object_by_value(self):
        assert compute_key([Slotted("a")]) == compute_key([Slotted("a")])
        assert compute_key([Slotted("a")]) != compute_key([Slotted("b")])

    def test_distinct_functions_differ(self):
        def first():
            return 1

        def second():
            return 2

        assert compute_key([first]) != compute_key([second])
        assert compute_key([first]) == compute_key([first])
        assert compute_key([lambda: 1]) != compute_key([lambda: 2])

    def test_modules_differ(self):
        assert compute_key([enum]) != compute_key([pytest])


class TestNesting:
    def test_shared_member_is_not_a_cycle(self):
        shared = [1]
        assert encode_value([shared, shared]) == encode_value([[1], [1]])

    def test_moderate_depth(self):
        nested = None
        for _ in range(200):
            nested = [nested]
        assert compute_key([nested]) == compute_key([nested])

    def test_too_deep_raises(self):
        nested = None
        for _ in range(5000):
            nested = [nested]
        with pytest.raises(KeyEncodingError, match="nested too deeply"):
            compute_key([nested])

    def test_too_deep_is_rule_error(self):
        nested = {}
        for _ in range(5000):
            nested = {"n": nested}
        with pytest.raises(UniqueRuleError):
            encode_value(nested)
