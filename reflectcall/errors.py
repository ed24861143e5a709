"""
Error classes for reflectcall dispatch.

Every failure of a dispatch call is reported as exactly one of these,
placed as the sole element of the result list:
- NilTargetError: no target object was supplied
- InvalidTargetShapeError: the target is not an instance of a record type
- MethodNotFoundError: the type exposes no public method with that name
- ArityMismatchError: argument count differs from the declared parameters
- DecodeError: a raw payload could not be decoded into its parameter type
- InvocationFault: an exception escaped while binding or calling

Error handling contract:
- call_method / call_method_raw never raise these, they return them
- Callers check the result list with result_error() or unwrap_result()
- There is no retry classification; every failure is terminal for the call
"""


class ReflectCallError(Exception):
    """Base exception for reflectcall."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NilTargetError(ReflectCallError):
    """The target reference is absent (None)."""
    pass


class InvalidTargetShapeError(ReflectCallError):
    """
    The target is not an instance of a record type.

    Classes, modules, functions and instances of builtin types
    (int, str, list, dict, ...) are rejected. `kind` names what was passed.
    """

    def __init__(self, message: str, kind: str):
        super().__init__(message)
        self.kind = kind


class MethodNotFoundError(ReflectCallError):
    """No public method with the given name exists on the target's type."""

    def __init__(self, message: str, method_name: str, num_methods: int):
        super().__init__(message)
        self.method_name = method_name
        self.num_methods = num_methods


class ArityMismatchError(ReflectCallError):
    """Supplied argument count differs from the declared parameter count."""

    def __init__(self, message: str, given: int, expected: int):
        super().__init__(message)
        self.given = given
        self.expected = expected


class DecodeError(ReflectCallError):
    """
    A raw payload could not be decoded into its slot's declared type.

    Raw mode only. `index` is the parameter slot, `payload` the raw input.
    """

    def __init__(self, message: str, index: int, payload):
        super().__init__(message)
        self.index = index
        self.payload = payload


class InvocationFault(ReflectCallError):
    """
    An exception was raised while binding arguments or running the method.

    `cause` is the original exception and `stack` the formatted traceback
    captured at the fault boundary (empty when stack capture is disabled).
    """

    def __init__(self, message: str, cause: BaseException, stack: str = ""):
        super().__init__(message)
        self.cause = cause
        self.stack = stack


class EnvelopeError(ReflectCallError):
    """A call envelope document is not valid JSON or has the wrong shape."""
    pass


class ConfigError(ReflectCallError):
    """Configuration validation error."""
    pass
