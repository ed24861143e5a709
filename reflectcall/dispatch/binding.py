"""
Argument binding for dispatch calls.

Two binding modes share the method's own signature as their schema:

- Plain binding: values are passed through unchanged. Each value must be
  assignable to its parameter's annotation, otherwise TypeError is raised.
  Binding runs inside the dispatcher's fault boundary, so a mismatch
  surfaces as an InvocationFault result, never as an exception.
- Raw binding: each raw JSON payload is decoded into its parameter's
  declared type with a pydantic TypeAdapter. Unannotated parameters
  decode as Any (plain JSON values).

Return values are shaped by the return annotation: `-> None` has no
slots, a fixed-length `tuple[...]` has one slot per element, anything
else is a single slot.
"""

import inspect
import types
from typing import Annotated, Any, Callable, Literal, Sequence, TypeVar, Union, get_args, get_origin

from pydantic import TypeAdapter


def resolved_signature(method: Callable) -> inspect.Signature:
    """Signature with string annotations evaluated."""
    return inspect.signature(method, eval_str=True)


def is_assignable(value: Any, annotation: Any) -> bool:
    """
    Check whether a runtime value fits a parameter annotation.

    Generic containers are checked by their origin only (list[int] accepts
    any list). Annotations that cannot be checked at runtime accept
    everything and leave the outcome to the call itself.
    """
    if annotation is inspect.Parameter.empty or annotation is Any:
        return True
    if annotation is None or annotation is type(None):
        return value is None
    if isinstance(annotation, TypeVar):
        return True

    # NewType
    supertype = getattr(annotation, "__supertype__", None)
    if supertype is not None:
        return is_assignable(value, supertype)

    origin = get_origin(annotation)
    if origin is Annotated:
        return is_assignable(value, get_args(annotation)[0])
    if origin is Union or origin is types.UnionType:
        return any(is_assignable(value, arg) for arg in get_args(annotation))
    if origin is Literal:
        return value in get_args(annotation)
    if origin is not None:
        annotation = origin

    if not isinstance(annotation, type):
        return True

    # bool is an int subclass but not a valid int argument
    if annotation is int and isinstance(value, bool):
        return False
    if annotation is float and isinstance(value, int) and not isinstance(value, bool):
        return True

    try:
        return isinstance(value, annotation)
    except TypeError:
        # Protocols without @runtime_checkable and similar
        return True


def _type_name(annotation: Any) -> str:
    if isinstance(annotation, type):
        return annotation.__name__
    return str(annotation).replace("typing.", "")


def bind_plain(params: Sequence[inspect.Parameter], args: Sequence[Any]) -> list[Any]:
    """
    Bind plain values positionally, without coercion.

    Raises:
        TypeError: If a value is not assignable to its parameter's type
    """
    bound = []
    for k, (param, value) in enumerate(zip(params, args)):
        if not is_assignable(value, param.annotation):
            raise TypeError(
                f"call using {type(value).__name__} as type {_type_name(param.annotation)} "
                f"for param[{k}] {param.name}"
            )
        bound.append(value)
    return bound


def decode_raw(param: inspect.Parameter, payload: Any, strict: bool = True) -> Any:
    """
    Decode one raw JSON payload into the parameter's declared type.

    Args:
        param: The parameter slot, annotation resolved
        payload: JSON text (str or bytes)
        strict: Use pydantic strict validation

    Returns:
        A fresh instance of the declared type

    Raises:
        pydantic.ValidationError: If the payload does not decode into the type
        pydantic.PydanticUserError: If no decoding schema exists for the type
        TypeError: If the payload is not str or bytes
    """
    annotation = param.annotation
    if annotation is inspect.Parameter.empty:
        annotation = Any

    if isinstance(payload, (bytes, bytearray)):
        payload = bytes(payload)
    elif not isinstance(payload, str):
        raise TypeError(f"raw payload must be str or bytes, got {type(payload).__name__}")

    return TypeAdapter(annotation).validate_json(payload, strict=strict)


def return_slots(annotation: Any) -> int:
    """Number of result values declared by a return annotation."""
    if annotation is inspect.Signature.empty:
        return 1
    if annotation is None or annotation is type(None):
        return 0
    if get_origin(annotation) is tuple:
        args = get_args(annotation)
        if args in ((), ((),)):
            return 0
        if Ellipsis in args:
            return 1
        return len(args)
    return 1


def collect_results(value: Any, slots: int) -> list[Any]:
    """
    Spread a method's return value into the result list.

    Raises:
        TypeError: If a multi-slot method did not return a tuple of that size
    """
    if slots == 0:
        return []
    if slots == 1:
        return [value]
    if not isinstance(value, tuple) or len(value) != slots:
        got = len(value) if isinstance(value, tuple) else type(value).__name__
        raise TypeError(f"method declared {slots} return values, returned {got}")
    return list(value)
