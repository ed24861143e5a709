"""
Method dispatch by name.

call_method and call_method_raw share one pipeline:
1. Reject a nil target
2. Reject a target that is not an instance of a record type
3. Look up the public method by name on the target's type
4. Check the argument count against the declared parameters
5. Bind arguments (plain values as-is, or raw payloads decoded)
6. Invoke the method
7. Return its results as a list, one entry per declared return slot

Error handling contract:
- Every failure becomes a single-element list holding a ReflectCallError
- Nothing raised by resolution, binding or the method itself escapes;
  it is converted to InvocationFault at the fault boundary
- No retries and no partial results
"""

import inspect
import logging
import traceback
from dataclasses import dataclass
from typing import Any, Callable, Optional, Sequence

from pydantic import ValidationError

from reflectcall.config import ReflectCallConfig
from reflectcall.dispatch.binding import (
    bind_plain,
    collect_results,
    decode_raw,
    resolved_signature,
    return_slots,
)
from reflectcall.dispatch.target import declared_params, public_methods, target_kind
from reflectcall.errors import (
    ArityMismatchError,
    DecodeError,
    InvalidTargetShapeError,
    InvocationFault,
    MethodNotFoundError,
    NilTargetError,
    ReflectCallError,
)
from reflectcall.utils import echo_payload


logger = logging.getLogger(__name__)


@dataclass
class _Resolved:
    """A bound method together with its resolved call shape."""
    method: Callable
    params: list[inspect.Parameter]
    slots: int


def _resolve(op: str, target: Any, method_name: str, given: int) -> "_Resolved | ReflectCallError":
    """Run gates 1-4. Returns the resolved method or the error to report."""
    kind = target_kind(target)
    if kind == "nil":
        return NilTargetError(f"reflectcall: nil target passed to {op}")

    if kind != "record":
        return InvalidTargetShapeError(
            f"reflectcall: target is not an instance of a record type: {kind}",
            kind=kind,
        )

    cls = type(target)
    methods = public_methods(cls)
    fn = methods.get(method_name)
    if fn is None:
        return MethodNotFoundError(
            f"reflectcall: could not find method {method_name} for type "
            f"{cls.__module__}.{cls.__qualname__} num_methods={len(methods)}",
            method_name=method_name,
            num_methods=len(methods),
        )

    # Bind through the class so instance attributes cannot shadow the method
    method = fn.__get__(target, cls)
    sig = resolved_signature(method)
    params = declared_params(sig)

    if given != len(params):
        return ArityMismatchError(
            f"reflectcall: mismatch in number of params {given} and func inputs {len(params)}",
            given=given,
            expected=len(params),
        )

    return _Resolved(method, params, return_slots(sig.return_annotation))


def _fault(op: str, exc: Exception, config: ReflectCallConfig) -> list[Any]:
    """Convert an exception caught at the fault boundary into a result."""
    stack = traceback.format_exc() if config.capture_stack else ""
    message = f"reflectcall: recovered from fault in {op} :: {exc!r}"
    if stack:
        message = f"{message}\n{stack}"
    logger.warning(f"{op} fault: {exc!r}", exc_info=exc)
    return [InvocationFault(message, cause=exc, stack=stack)]


def _rejected(op: str, target: Any, method_name: str, error: ReflectCallError) -> list[Any]:
    logger.debug(
        f"{op} rejected: {error.message}",
        extra={"method": method_name, "target_type": type(target).__name__},
    )
    return [error]


def call_method(
    target: Any,
    method_name: str,
    *args: Any,
    config: Optional[ReflectCallConfig] = None,
) -> list[Any]:
    """
    Invoke a public method on target by name with plain argument values.

    Arguments are bound positionally and passed unchanged. A value whose
    runtime type does not fit the parameter annotation is reported as an
    InvocationFault, the same as any exception raised by the method.

    Args:
        target: Instance of a record type (user-defined class)
        method_name: Case-sensitive public method name
        *args: One value per declared parameter
        config: Optional dispatch settings

    Returns:
        The method's return values in declared order, or [ReflectCallError]

    Example:
        >>> call_method(account, "deposit", 100)
        [100]
    """
    config = config or ReflectCallConfig()
    try:
        resolved = _resolve("call_method", target, method_name, len(args))
        if isinstance(resolved, ReflectCallError):
            return _rejected("call_method", target, method_name, resolved)

        bound = bind_plain(resolved.params, args)
        logger.debug(
            f"call_method {type(target).__name__}.{method_name} with {len(bound)} args",
            extra={"method": method_name, "target_type": type(target).__name__},
        )
        value = resolved.method(*bound)
        return collect_results(value, resolved.slots)
    except Exception as e:
        return _fault("call_method", e, config)


def call_method_raw(
    target: Any,
    method_name: str,
    raw_args: Sequence[Any],
    config: Optional[ReflectCallConfig] = None,
) -> list[Any]:
    """
    Invoke a public method on target by name with raw JSON payloads.

    Each payload is decoded into the type the method declares for that
    parameter slot. All payloads are decoded before the method runs; the
    first one that fails stops the call with a DecodeError.

    Args:
        target: Instance of a record type (user-defined class)
        method_name: Case-sensitive public method name
        raw_args: One JSON fragment (str or bytes) per declared parameter
        config: Optional dispatch settings

    Returns:
        The method's return values in declared order, or [ReflectCallError]

    Example:
        >>> call_method_raw(account, "deposit", ["100"])
        [100]
    """
    config = config or ReflectCallConfig()
    try:
        raw_args = list(raw_args)
        resolved = _resolve("call_method_raw", target, method_name, len(raw_args))
        if isinstance(resolved, ReflectCallError):
            return _rejected("call_method_raw", target, method_name, resolved)

        bound = []
        for k, (param, payload) in enumerate(zip(resolved.params, raw_args)):
            try:
                bound.append(decode_raw(param, payload, strict=config.strict_decode))
            except (ValidationError, TypeError) as e:
                error = DecodeError(
                    f"reflectcall: error decoding param[{k}] "
                    f"{echo_payload(payload, config.payload_echo_limit)} "
                    f"for func {method_name} :: {e}",
                    index=k,
                    payload=payload,
                )
                return _rejected("call_method_raw", target, method_name, error)

        logger.debug(
            f"call_method_raw {type(target).__name__}.{method_name} with {len(bound)} args",
            extra={"method": method_name, "target_type": type(target).__name__},
        )
        value = resolved.method(*bound)
        return collect_results(value, resolved.slots)
    except Exception as e:
        return _fault("call_method_raw", e, config)
