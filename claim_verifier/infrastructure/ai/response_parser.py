"""Extraction of verdict JSON from free-form model output."""

import json
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple, Union

from ...domain.models.verification import Verdict, normalize_verdict

_CODE_BLOCK = re.compile(r"```json\s*([\s\S]*?)```")
_TARGETED_OBJECT = re.compile(r'\{[^{}]*"label"[^{}]*"confidence"[^{}]*"explanation"[^{}]*\}')
_ANY_OBJECT = re.compile(r"\{[\s\S]*?\}")


class ParseStrategy(str, Enum):
    """Extraction strategies, in the order they are tried."""

    WHOLE_RESPONSE = "whole_response"
    CODE_BLOCK = "code_block"
    TARGETED_OBJECT = "targeted_object"
    ANY_OBJECT = "any_object"


@dataclass(frozen=True)
class ParsedVerdict:
    """A verdict successfully extracted from model output."""

    verdict: Verdict
    strategy: ParseStrategy


@dataclass(frozen=True)
class ParseFailure:
    """Model output from which no verdict could be extracted."""

    reason: str
    attempted: Tuple[ParseStrategy, ...]


ParseResult = Union[ParsedVerdict, ParseFailure]


def _load_object(text: str) -> Optional[Dict[str, Any]]:
    try:
        value = json.loads(text)
    except (json.JSONDecodeError, TypeError):
        return None
    return value if isinstance(value, dict) else None


def _has_verdict_keys(obj: Dict[str, Any]) -> bool:
    # An explicit null confidence counts as present and is normalized later
    return bool(obj.get("label")) and "confidence" in obj


def _any_object(obj: Dict[str, Any]) -> bool:
    return True


def _whole_response(text: str) -> Iterator[Dict[str, Any]]:
    obj = _load_object(text.strip())
    if obj is not None and _has_verdict_keys(obj):
        yield obj


def _code_block(text: str) -> Iterator[Dict[str, Any]]:
    match = _CODE_BLOCK.search(text)
    if match:
        obj = _load_object(match.group(1))
        if obj is not None:
            yield obj


def _last_first(
    pattern: re.Pattern, text: str, accept: Callable[[Dict[str, Any]], bool]
) -> Iterator[Dict[str, Any]]:
    for candidate in reversed(pattern.findall(text)):
        obj = _load_object(candidate)
        if obj is not None and accept(obj):
            yield obj


STRATEGIES: List[Tuple[ParseStrategy, Callable[[str], Iterator[Dict[str, Any]]]]] = [
    (ParseStrategy.WHOLE_RESPONSE, _whole_response),
    (ParseStrategy.CODE_BLOCK, _code_block),
    (ParseStrategy.TARGETED_OBJECT, lambda text: _last_first(_TARGETED_OBJECT, text, _any_object)),
    (ParseStrategy.ANY_OBJECT, lambda text: _last_first(_ANY_OBJECT, text, _has_verdict_keys)),
]


def parse_verdict(text: Optional[str]) -> ParseResult:
    """Extract a verdict from model output.

    Strategies are tried in order: the whole response as JSON, any object
    in a fenced ```json block, the last object naming label, confidence and
    explanation, then the last parseable object with a label and a
    confidence.
    """
    if not text or not text.strip():
        return ParseFailure(reason="Empty response", attempted=())

    attempted: List[ParseStrategy] = []
    for strategy, extract in STRATEGIES:
        attempted.append(strategy)
        for obj in extract(text):
            return ParsedVerdict(verdict=normalize_verdict(obj), strategy=strategy)

    return ParseFailure(
        reason="Failed to parse AI response into structured result.",
        attempted=tuple(attempted),
    )
