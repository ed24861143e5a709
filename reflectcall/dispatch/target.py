"""
Target resolution - shape check and method lookup on the target's type.

A target must be an instance of a record type: a user-defined class with
fields and methods. Its callable surface is the set of public instance
methods defined on the class (and its bases):
- name does not start with "_"
- the class attribute is a plain function (not staticmethod, classmethod
  or property)

Lookup is exact and case-sensitive. There is no overload resolution.
"""

import array
import collections.abc
import datetime
import inspect
import numbers
import sys
from typing import Any, Callable


# Primitive, array and unstructured value types
VALUE_TYPES = (
    numbers.Number,
    str,
    bytes,
    bytearray,
    memoryview,
    array.array,
    datetime.date,
    datetime.time,
    datetime.timedelta,
    datetime.tzinfo,
    collections.abc.Sequence,
    collections.abc.Set,
    collections.abc.Mapping,
    collections.abc.Iterator,
)


def _is_user_defined(cls: type) -> bool:
    top = cls.__module__.partition(".")[0]
    return top != "builtins" and top not in sys.stdlib_module_names


def _has_fields(target: Any) -> bool:
    if hasattr(target, "__dict__"):
        return True
    return any(getattr(c, "__slots__", ()) for c in type(target).__mro__)


def target_kind(target: Any) -> str:
    """
    Classify a target object.

    Returns "record" for instances of record types. Otherwise one of
    "nil", "type", "module", "function", or the value's type name
    (e.g. "int", "list", "Fraction", "deque").

    Instances of value types (numbers, strings, containers, dates) are
    records only when their class is user-defined and carries fields.
    """
    if target is None:
        return "nil"
    if inspect.isclass(target):
        return "type"
    if inspect.ismodule(target):
        return "module"
    if inspect.isroutine(target):
        return "function"

    cls = type(target)
    if cls.__module__ == "builtins":
        return cls.__name__
    if isinstance(target, VALUE_TYPES):
        if not (_is_user_defined(cls) and _has_fields(target)):
            return cls.__name__
    return "record"


def public_methods(cls: type) -> dict[str, Callable]:
    """
    Build the method table for a record type.

    Args:
        cls: The target's class

    Returns:
        Mapping of method name to the (unbound) function, sorted by name
    """
    table: dict[str, Callable] = {}
    for name in sorted(dir(cls)):
        if name.startswith("_"):
            continue
        attr = inspect.getattr_static(cls, name)
        if inspect.isfunction(attr):
            table[name] = attr
    return table


def declared_params(sig: inspect.Signature) -> list[inspect.Parameter]:
    """
    Positional parameters of a bound method's signature (receiver excluded).

    *args, **kwargs and keyword-only parameters do not occupy a slot.
    """
    return [
        p for p in sig.parameters.values()
        if p.kind in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)
    ]
