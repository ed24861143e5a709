"""
reflectcall - Dynamic method invocation by name

Calls a method on an object when the method is only known as a string,
binding plain values or decoding raw JSON payloads against the method's
own signature. Failures come back as a single error value, never raised.
"""

__version__ = "0.1.0"


__all__ = [
    "call_method",
    "call_method_raw",
    "call_envelope",
    "CallEnvelope",
    "result_error",
    "is_error_result",
    "unwrap_result",
    "public_methods",
    "ReflectCallConfig",
    "load_config",
    "get_reflectcall_home",
]

from .config import ReflectCallConfig, load_config, get_reflectcall_home
from .dispatch import (
    CallEnvelope,
    call_envelope,
    call_method,
    call_method_raw,
    is_error_result,
    public_methods,
    result_error,
    unwrap_result,
)
