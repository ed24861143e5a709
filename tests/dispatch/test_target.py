"""Tests for target classification and the public method table."""

import array
import inspect
from collections import OrderedDict, deque
from datetime import date, datetime, timedelta
from decimal import Decimal
from fractions import Fraction

import pytest

from reflectcall.dispatch.target import declared_params, public_methods, target_kind

from sample_targets import SAMPLE_METHOD_COUNT, Calculator, Point, Sample


class TestTargetKind:
    """Tests for target_kind."""

    def test_record_instances(self):
        assert target_kind(Sample()) == "record"
        assert target_kind(Point(1, 2)) == "record"
        assert target_kind(Calculator()) == "record"

    def test_nil(self):
        assert target_kind(None) == "nil"

    @pytest.mark.parametrize(
        "value,kind",
        [(1.5, "float"), (b"x", "bytes"), ((1,), "tuple"), ({1}, "set"), (True, "bool")],
    )
    def test_builtin_values(self, value, kind):
        assert target_kind(value) == kind

    @pytest.mark.parametrize(
        "value,kind",
        [
            (Fraction(1, 2), "Fraction"),
            (Decimal("1.5"), "Decimal"),
            (array.array("i", [1, 2]), "array"),
            (deque([1]), "deque"),
            (OrderedDict(a=1), "OrderedDict"),
            (datetime(2024, 1, 1), "datetime"),
            (date(2024, 1, 1), "date"),
            (timedelta(seconds=1), "timedelta"),
            (iter([1]), "list_iterator"),
        ],
    )
    def test_stdlib_values(self, value, kind):
        """Value types from stdlib modules are not records."""
        assert target_kind(value) == kind

    def test_user_defined_container_with_fields(self):
        """A user-defined mapping that carries fields is a record."""
        class Registry(dict):
            def lookup(self, key: str):
                return self.get(key)

        assert target_kind(Registry()) == "record"

    def test_user_defined_value_without_fields(self):
        """A user-defined value type with no fields stays a value."""
        class Label(str):
            __slots__ = ()

        assert target_kind(Label("x")) == "Label"

    def test_lambda_is_function(self):
        assert target_kind(lambda: None) == "function"


class TestPublicMethods:
    """Tests for public_methods."""

    def test_sample_table(self):
        """Only plain public instance methods are listed, sorted by name."""
        table = public_methods(Sample)

        assert list(table) == [
            "example_func",
            "explode",
            "greet",
            "move",
            "reset",
            "short_return",
            "total",
        ]
        assert len(table) == SAMPLE_METHOD_COUNT

    def test_inherited_methods_included(self):
        class Scientific(Calculator):
            def power(self, a: int, b: int) -> int:
                return a ** b

        assert set(public_methods(Scientific)) == {"add", "divmod", "fail", "power"}

    def test_overridden_method_resolves_to_subclass(self):
        class Loud(Calculator):
            def add(self, a: int, b: int) -> int:
                return 0

        assert public_methods(Loud)["add"] is Loud.__dict__["add"]

    def test_no_methods(self):
        assert public_methods(Point) == {}


class TestDeclaredParams:
    """Tests for declared_params."""

    def test_receiver_excluded(self):
        params = declared_params(inspect.signature(Sample().example_func))
        assert [p.name for p in params] == ["int_arg", "string_arg", "slice_arg", "dur"]

    def test_variadic_and_keyword_only_excluded(self):
        class Mixed:
            def run(self, a, *rest, flag=False, **extra):
                return a

        params = declared_params(inspect.signature(Mixed().run))
        assert [p.name for p in params] == ["a"]
