"""Tests for extracting verdicts from model output."""

import json

import pytest

from claim_verifier.domain.models.verification import VerdictLabel
from claim_verifier.infrastructure.ai.response_parser import (
    ParsedVerdict,
    ParseFailure,
    ParseStrategy,
    parse_verdict,
)

VERDICT = {
    "label": "fake",
    "confidence": 0.82,
    "explanation": "Debunked by several outlets.",
    "sources": [{"title": "Snopes", "url": "https://snopes.com/x"}],
}


def test_whole_response_json():
    """A bare JSON response is parsed directly."""
    result = parse_verdict(json.dumps(VERDICT))

    assert isinstance(result, ParsedVerdict)
    assert result.strategy == ParseStrategy.WHOLE_RESPONSE
    assert result.verdict.label == VerdictLabel.FAKE
    assert result.verdict.confidence == pytest.approx(0.82)
    assert result.verdict.sources[0].url == "https://snopes.com/x"


def test_fenced_code_block():
    """A ```json block inside prose is found."""
    text = f"Here is my analysis:\n```json\n{json.dumps(VERDICT)}\n```\nHope this helps."
    result = parse_verdict(text)

    assert isinstance(result, ParsedVerdict)
    assert result.strategy == ParseStrategy.CODE_BLOCK


def test_targeted_object_prefers_last_match():
    """The last object naming the verdict fields wins."""
    draft = '{"label": "real", "confidence": 0.4, "explanation": "draft"}'
    final = '{"label": "fake", "confidence": 0.9, "explanation": "final"}'
    result = parse_verdict(f"First thought {draft}. On reflection: {final}")

    assert isinstance(result, ParsedVerdict)
    assert result.strategy == ParseStrategy.TARGETED_OBJECT
    assert result.verdict.explanation == "final"


def test_any_object_with_label_and_confidence():
    """Objects without an explanation are accepted as a last resort."""
    result = parse_verdict('Result: {"confidence": 0.7, "label": "real"} done')

    assert isinstance(result, ParsedVerdict)
    assert result.strategy == ParseStrategy.ANY_OBJECT
    assert result.verdict.label == VerdictLabel.REAL
    assert result.verdict.explanation == "Unable to generate explanation."
    assert len(result.verdict.sources) == 2


def test_loose_fields_are_normalized():
    """Unknown labels and out-of-range confidence are repaired."""
    result = parse_verdict('{"label": "satire", "confidence": 7, "explanation": "odd"}')

    assert result.verdict.label == VerdictLabel.UNCERTAIN
    assert result.verdict.confidence == 1.0


def test_zero_confidence_is_kept():
    """A confidence of zero is a value, not a missing field."""
    result = parse_verdict('{"label": "fake", "confidence": 0, "explanation": "x"}')

    assert isinstance(result, ParsedVerdict)
    assert result.verdict.confidence == 0.0


@pytest.mark.parametrize("text", [None, "", "   "])
def test_empty_response(text):
    """Empty output fails without trying any strategy."""
    result = parse_verdict(text)

    assert result == ParseFailure(reason="Empty response", attempted=())


def test_unparseable_response():
    """Prose without a usable object reports every strategy tried."""
    result = parse_verdict('I could not decide. {"note": "no label here"}')

    assert isinstance(result, ParseFailure)
    assert result.attempted == tuple(ParseStrategy)


def test_fenced_block_without_verdict_keys_is_normalized():
    """Any object in a ```json block is accepted and filled in."""
    result = parse_verdict('```json\n{"label": "fake", "explanation": "debunked"}\n```')

    assert isinstance(result, ParsedVerdict)
    assert result.strategy == ParseStrategy.CODE_BLOCK
    assert result.verdict.label == VerdictLabel.FAKE
    assert result.verdict.confidence == 0.5
    assert result.verdict.explanation == "debunked"


def test_fenced_block_with_unrelated_object():
    """A fenced object with no verdict fields becomes an uncertain verdict."""
    result = parse_verdict('Notes:\n```json\n{"summary": "nothing found"}\n```')

    assert isinstance(result, ParsedVerdict)
    assert result.verdict.label == VerdictLabel.UNCERTAIN
    assert result.verdict.confidence == 0.5
    assert result.verdict.explanation == "Unable to generate explanation."


def test_null_confidence_is_accepted():
    """An explicit null confidence is normalized rather than rejected."""
    result = parse_verdict('{"label": "fake", "confidence": null, "explanation": "x"}')

    assert isinstance(result, ParsedVerdict)
    assert result.strategy == ParseStrategy.WHOLE_RESPONSE
    assert result.verdict.label == VerdictLabel.FAKE
    assert result.verdict.confidence == 0.5


def test_missing_confidence_in_prose_is_rejected():
    """Outside a fenced block a confidence key is still required."""
    result = parse_verdict('Verdict: {"label": "fake"} end')

    assert isinstance(result, ParseFailure)
