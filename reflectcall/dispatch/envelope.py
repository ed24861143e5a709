"""
Call envelope - a JSON document carrying a method call.

Shape:
{
  "method": "example_func",      // optional
  "params": [ 2, "x", [5, 6] ]   // one element per parameter
}

The params array is heterogeneous; each element is kept as its own JSON
fragment and decoded later against the target method's signature by
call_method_raw.
"""

import json
from typing import Any, Optional

from pydantic import BaseModel, Field, ValidationError

from reflectcall.config import ReflectCallConfig
from reflectcall.dispatch.invoke import call_method_raw
from reflectcall.errors import EnvelopeError


class CallEnvelope(BaseModel):
    """A method name and its positional params as decoded JSON values."""
    method: Optional[str] = None
    params: list[Any] = Field(default_factory=list)

    @classmethod
    def from_json(cls, document: str | bytes) -> "CallEnvelope":
        """
        Parse an envelope document.

        Raises:
            EnvelopeError: If the document is not JSON or not envelope-shaped
        """
        try:
            return cls.model_validate_json(document)
        except ValidationError as ve:
            raise EnvelopeError(f"reflectcall: invalid call envelope :: {ve}")

    def raw_params(self) -> list[str]:
        """One JSON fragment per param, in order."""
        return [json.dumps(p) for p in self.params]


def call_envelope(
    target: Any,
    document: str | bytes,
    method_name: Optional[str] = None,
    config: Optional[ReflectCallConfig] = None,
) -> list[Any]:
    """
    Dispatch a call envelope against target in raw mode.

    Args:
        target: Instance of a record type
        document: Envelope JSON
        method_name: Overrides the envelope's "method" when given
        config: Optional dispatch settings

    Returns:
        Same result list as call_method_raw; an unparseable envelope
        yields [EnvelopeError]
    """
    try:
        envelope = CallEnvelope.from_json(document)
    except EnvelopeError as e:
        return [e]

    name = method_name or envelope.method
    if not name:
        return [EnvelopeError("reflectcall: call envelope names no method")]

    return call_method_raw(target, name, envelope.raw_params(), config=config)
