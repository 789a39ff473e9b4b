"""Test configuration and common fixtures."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from claim_verifier.domain.models.verification import Source, Verdict, VerdictLabel
from claim_verifier.domain.services.admission_gate import AdmissionGate
from claim_verifier.domain.services.fallback_classifier import FallbackClassifier
from claim_verifier.domain.services.result_cache import ResultCache
from claim_verifier.domain.services.verification_aggregator import VerificationAggregator

from helpers import NOW, FakeClock


@pytest.fixture
def clock() -> FakeClock:
    """Provide a controllable clock."""
    return FakeClock()


@pytest.fixture
def ai_verdict() -> Verdict:
    """A verdict as returned by the AI source."""
    return Verdict(
        label=VerdictLabel.FAKE,
        confidence=0.85,
        explanation="No credible reports support this.",
        sources=[Source(title="Reuters", url="https://reuters.com/a")],
    )


@pytest.fixture
def ai_provider(ai_verdict: Verdict) -> MagicMock:
    """Provide a mock AI provider returning ``ai_verdict``."""
    provider = MagicMock()
    provider.is_available = True
    provider.analyze_claim = AsyncMock(return_value=ai_verdict)
    return provider


@pytest.fixture
def fact_check_provider() -> MagicMock:
    """Provide a mock fact-check provider with no matches."""
    provider = MagicMock()
    provider.is_enabled = True
    provider.search_claims = AsyncMock(return_value=[])
    return provider


@pytest.fixture
def aggregator(clock: FakeClock, ai_provider: MagicMock, fact_check_provider: MagicMock) -> VerificationAggregator:
    """Provide an aggregator wired to mock sources and a fake clock."""
    return VerificationAggregator(
        admission_gate=AdmissionGate(clock=clock),
        result_cache=ResultCache(clock=clock),
        fallback_classifier=FallbackClassifier(),
        ai_provider=ai_provider,
        fact_check_provider=fact_check_provider,
        ai_timeout=1.0,
        now=lambda: NOW,
    )
