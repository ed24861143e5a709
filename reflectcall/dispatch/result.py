"""
Helpers over the dispatch result-list contract.

A dispatch call returns a list that is either:
- the method's return values, one per declared return slot, or
- exactly one ReflectCallError describing why the call failed

Length alone does not tell the two apart: a method with a single return
slot also yields a one-element list. Check the element's type.
"""

from typing import Any, Optional

from reflectcall.errors import ReflectCallError


def result_error(results: list[Any]) -> Optional[ReflectCallError]:
    """Return the error of a failed dispatch, or None on success."""
    if len(results) == 1 and isinstance(results[0], ReflectCallError):
        return results[0]
    return None


def is_error_result(results: list[Any]) -> bool:
    """True if the result list reports a failed dispatch."""
    return result_error(results) is not None


def unwrap_result(results: list[Any]) -> list[Any]:
    """
    Raise the error of a failed dispatch, otherwise return the results.

    Raises:
        ReflectCallError: The error descriptor held by a failed result
    """
    error = result_error(results)
    if error is not None:
        raise error
    return results
