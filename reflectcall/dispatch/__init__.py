"""
Dispatch module for reflectcall.

This module provides the dispatch layer that:
1. Resolves a public method by name on a record instance
2. Binds plain values, or decodes raw JSON payloads against the signature
3. Returns the method's results, or a single ReflectCallError in their place
"""

from reflectcall.dispatch.envelope import CallEnvelope, call_envelope
from reflectcall.dispatch.invoke import call_method, call_method_raw
from reflectcall.dispatch.result import is_error_result, result_error, unwrap_result
from reflectcall.dispatch.target import public_methods, target_kind

__all__ = [
    "CallEnvelope",
    "call_envelope",
    "call_method",
    "call_method_raw",
    "is_error_result",
    "public_methods",
    "result_error",
    "target_kind",
    "unwrap_result",
]
