"""Tests for call envelopes."""

import json

import pytest

from reflectcall.dispatch import CallEnvelope, call_envelope
from reflectcall.errors import DecodeError, EnvelopeError, MethodNotFoundError


SAMPLE_JSON = """
  {
    "method": "example_func",
    "params" : [ 2, "examplestring", [5, 6, 7, 8], 10 ]
  }
"""


class TestCallEnvelope:
    """Tests for CallEnvelope parsing."""

    def test_from_json(self):
        envelope = CallEnvelope.from_json(SAMPLE_JSON)

        assert envelope.method == "example_func"
        assert len(envelope.params) == 4

    def test_raw_params_are_fragments(self):
        envelope = CallEnvelope.from_json(SAMPLE_JSON)
        raw = envelope.raw_params()

        assert raw == ["2", '"examplestring"', "[5, 6, 7, 8]", "10"]
        assert [json.loads(r) for r in raw] == envelope.params

    def test_params_default_empty(self):
        assert CallEnvelope.from_json('{"method": "reset"}').params == []

    @pytest.mark.parametrize("document", ["not json", '{"params": 5}', "[1, 2]"])
    def test_invalid_documents(self, document):
        with pytest.raises(EnvelopeError, match="invalid call envelope"):
            CallEnvelope.from_json(document)


class TestCallEnvelopeDispatch:
    """Tests for call_envelope."""

    def test_dispatches_raw(self, sample):
        assert call_envelope(sample, SAMPLE_JSON) == [100, 10, None]

    def test_bytes_document(self, sample):
        assert call_envelope(sample, SAMPLE_JSON.encode()) == [100, 10, None]

    def test_method_override(self, sample):
        document = '{"method": "nope", "params": ["ada"]}'
        assert call_envelope(sample, document, method_name="greet") == ["hello ada"]

    def test_missing_method(self, sample):
        results = call_envelope(sample, '{"params": []}')

        assert len(results) == 1
        assert isinstance(results[0], EnvelopeError)

    def test_invalid_document_is_error_result(self, sample):
        results = call_envelope(sample, "{")
        assert isinstance(results[0], EnvelopeError)

    def test_errors_from_raw_dispatch(self, sample):
        assert isinstance(call_envelope(sample, '{"method": "Nope"}')[0], MethodNotFoundError)

        results = call_envelope(sample, '{"method": "move", "params": [1, 2]}')
        assert isinstance(results[0], DecodeError)
        assert results[0].index == 0
