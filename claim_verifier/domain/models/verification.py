"""Domain models for verdicts and the sources that back them."""

from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel, Field


class VerdictLabel(str, Enum):
    """Possible verification outcomes."""

    REAL = "real"  # Claim is supported by evidence
    FAKE = "fake"  # Claim is contradicted or shows misinformation patterns
    UNCERTAIN = "uncertain"  # Evidence is mixed or missing


class Source(BaseModel):
    """Represents a source cited by a verdict."""

    title: str = Field(..., description="Title or name of the source")
    url: str = Field(default="", description="URL of the source")

    class Config:
        """Pydantic model configuration."""
        frozen = True


class Verdict(BaseModel):
    """Represents the outcome of verifying a single claim."""

    label: VerdictLabel = Field(..., description="Verification label")
    confidence: float = Field(..., ge=0.0, le=1.0, description="Confidence in the label (0-1)")
    explanation: str = Field(..., description="Human-readable reasoning for the label")
    sources: List[Source] = Field(default_factory=list, description="Sources backing the verdict")

    class Config:
        """Pydantic model configuration."""
        frozen = True  # Immutable model
        json_schema_extra = {
            "example": {
                "label": "fake",
                "confidence": 0.8,
                "explanation": "Fact-checkers have rated similar claims as false.",
                "sources": [{"title": "Snopes - Fact Checking", "url": "https://www.snopes.com"}],
            }
        }

    def to_dict(self) -> Dict[str, Any]:
        """Convert the verdict to a dictionary for API responses."""
        return self.model_dump(mode="json")


DEFAULT_SOURCES: List[Source] = [
    Source(title="Snopes - Fact Checking", url="https://www.snopes.com"),
    Source(title="FactCheck.org", url="https://www.factcheck.org"),
    Source(title="PolitiFact", url="https://www.politifact.com"),
    Source(title="Reuters Fact Check", url="https://www.reuters.com/fact-check"),
    Source(title="AP Fact Check", url="https://apnews.com/hub/ap-fact-check"),
]

MAX_SOURCES = 5


def default_sources(count: int = len(DEFAULT_SOURCES)) -> List[Source]:
    """Get the first ``count`` well-known fact-checking sites."""
    return list(DEFAULT_SOURCES[:count])


def _coerce_label(value: Any) -> VerdictLabel:
    if isinstance(value, VerdictLabel):
        return value
    try:
        return VerdictLabel(value)
    except ValueError:
        return VerdictLabel.UNCERTAIN


def _coerce_confidence(value: Any) -> float:
    if isinstance(value, bool):
        return 0.5
    try:
        confidence = float(value)
    except (TypeError, ValueError):
        return 0.5
    if confidence != confidence:  # NaN
        return 0.5
    return max(0.0, min(1.0, confidence))


def _coerce_source(value: Any) -> Optional[Source]:
    if isinstance(value, Source):
        return value
    if isinstance(value, dict):
        url = str(value.get("url") or "")
        title = str(value.get("title") or url or "Source")
        return Source(title=title, url=url)
    if isinstance(value, str) and value.strip():
        return Source(title=value.strip())
    return None


def normalize_verdict(raw: Mapping[str, Any]) -> Verdict:
    """Build a verdict from loosely-typed fields.

    Unknown labels become ``uncertain``, confidence is clamped to [0, 1]
    (``0.5`` when missing or non-numeric), empty source lists fall back to
    well-known fact-checking sites, and at most ``MAX_SOURCES`` are kept.
    """
    raw_sources = raw.get("sources")
    sources: List[Source] = []
    if isinstance(raw_sources, (list, tuple)):
        sources = [s for s in (_coerce_source(item) for item in raw_sources) if s is not None]
    if not sources:
        sources = default_sources(2)

    explanation = raw.get("explanation")
    if not isinstance(explanation, str) or not explanation.strip():
        explanation = "Unable to generate explanation."

    return Verdict(
        label=_coerce_label(raw.get("label")),
        confidence=_coerce_confidence(raw.get("confidence")),
        explanation=explanation,
        sources=sources[:MAX_SOURCES],
    )
