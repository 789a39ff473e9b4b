"""Service for verifying claims against AI and fact-check evidence sources."""

import asyncio
import logging
import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Callable, List, Optional, Pattern, Sequence, Tuple

from ..errors import AdmissionDeniedError, InvalidClaimError
from ..models.review import FactCheckClaim, Review
from ..models.verification import (
    MAX_SOURCES,
    Source,
    Verdict,
    VerdictLabel,
    default_sources,
    normalize_verdict,
)
from ..ports.ai_provider import AIProvider
from ..ports.fact_check_provider import FactCheckProvider
from .admission_gate import AdmissionGate
from .fallback_classifier import FallbackClassifier
from .result_cache import ResultCache
from .review_prioritizer import ReviewPrioritizer, days_since

logger = logging.getLogger(__name__)

FALSEHOOD_KEYWORDS: Tuple[str, ...] = (
    "false", "fake", "misleading", "incorrect", "debunked", "pants on fire",
    "unsubstantiated", "unproven", "lacks evidence", "no evidence", "baseless",
    "conspiracy", "hoax", "myth", "fabricated", "distorted", "exaggerated",
    "mostly false", "partly false", "half true", "mixture", "mixed",
)

TRUTH_KEYWORDS: Tuple[str, ...] = (
    "true", "correct", "accurate", "verified", "mostly true", "largely true",
    "confirmed", "substantiated", "supported", "factual", "legitimate",
    "authentic", "valid", "real", "genuine",
)

MAX_PUBLISHER_SOURCES = 3


def _compile(keywords: Sequence[str]) -> List[Tuple[str, Pattern[str]]]:
    return [(keyword, re.compile(rf"\b{re.escape(keyword)}\b")) for keyword in keywords]


_FALSEHOOD_PATTERNS = _compile(FALSEHOOD_KEYWORDS)
_TRUTH_PATTERNS = _compile(TRUTH_KEYWORDS)


class VerificationStage(str, Enum):
    """Stages a single verification passes through."""

    ADMITTED = "admitted"
    DENIED = "denied"
    CACHE_CHECKED = "cache_checked"
    SOURCES_DISPATCHED = "sources_dispatched"
    MERGED = "merged"
    CACHED = "cached"
    RETURNED = "returned"


@dataclass
class RatingTally:
    """Counts of falsehood and truth ratings among fact-check reviews."""

    ratings: List[str] = field(default_factory=list)
    sources: List[Source] = field(default_factory=list)
    fake_count: int = 0
    true_count: int = 0

    def add(self, rating: str) -> None:
        """Classify a rating; falsehood keywords are checked first."""
        self.ratings.append(rating)
        for keyword, pattern in _FALSEHOOD_PATTERNS:
            if pattern.search(rating):
                self.fake_count += 1
                logger.debug(f'"{rating}" -> FAKE (matched: {keyword})')
                return
        for keyword, pattern in _TRUTH_PATTERNS:
            if pattern.search(rating):
                self.true_count += 1
                logger.debug(f'"{rating}" -> TRUE (matched: {keyword})')
                return
        logger.debug(f'"{rating}" -> UNMATCHED')


def publisher_sources(fact_checks: Sequence[FactCheckClaim], limit: int = MAX_PUBLISHER_SOURCES) -> List[Source]:
    """Links to the fact-check reviews that name both a publisher and a URL."""
    sources = [
        Source(title=f"{review.publisher_name} - Fact Check", url=review.url)
        for fact_check in fact_checks
        for review in fact_check.reviews
        if review.url and review.publisher_name
    ]
    return sources[:limit]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class VerificationAggregator:
    """Verifies claims by merging evidence from two independent sources.

    The admission gate and result cache are shared with every other caller;
    the evidence sources are optional and are treated as absent evidence
    whenever they are disabled, slow or failing.
    """

    def __init__(
        self,
        admission_gate: AdmissionGate,
        result_cache: ResultCache,
        fallback_classifier: FallbackClassifier,
        ai_provider: Optional[AIProvider] = None,
        fact_check_provider: Optional[FactCheckProvider] = None,
        ai_timeout: Optional[float] = 30.0,
        now: Optional[Callable[[], datetime]] = None,
    ):
        """Initialize the service.

        Args:
            admission_gate: Shared request-rate gate
            result_cache: Shared verdict cache
            fallback_classifier: Classifier used when both sources are absent
            ai_provider: AI reasoning source (optional)
            fact_check_provider: Fact-check database source (optional)
            ai_timeout: Seconds to wait for the AI source, None to wait indefinitely
            now: Wall clock used to age fact-check reviews
        """
        self.gate = admission_gate
        self.cache = result_cache
        self.fallback = fallback_classifier
        self.ai = ai_provider
        self.fact_checks = fact_check_provider
        self.ai_timeout = ai_timeout
        self._now = now or _utcnow
        logger.info("🔧 VerificationAggregator initialized")

    async def verify(self, claim: str) -> Verdict:
        """Verify a claim.

        Args:
            claim: Claim text or article URL

        Returns:
            The verdict for the claim

        Raises:
            InvalidClaimError: If the claim is missing, empty or not a string
            AdmissionDeniedError: If the admission gate refuses the request
        """
        if not isinstance(claim, str) or not claim.strip():
            raise InvalidClaimError()

        if not self.gate.try_admit():
            self._stage(VerificationStage.DENIED, claim)
            raise AdmissionDeniedError(self.gate.retry_after_seconds())
        self._stage(VerificationStage.ADMITTED, claim)

        cached = self.cache.get(claim)
        self._stage(VerificationStage.CACHE_CHECKED, claim)
        if cached is not None:
            self._stage(VerificationStage.RETURNED, claim)
            return cached

        logger.info(f"🔍 Starting verification for: {claim[:100]}...")
        self._stage(VerificationStage.SOURCES_DISPATCHED, claim)
        ai_verdict, fact_checks = await self._gather_evidence(claim)

        verdict = normalize_verdict(self.merge(claim, ai_verdict, fact_checks).model_dump())
        self._stage(VerificationStage.MERGED, claim)

        self.cache.put(claim, verdict)
        self._stage(VerificationStage.CACHED, claim)

        logger.info(
            f"✅ Verdict generated: label={verdict.label.value}, confidence={verdict.confidence:.2f}, "
            f"ai={ai_verdict is not None}, fact_checks={bool(fact_checks)}, cache={self.cache.stats()}"
        )
        self._stage(VerificationStage.RETURNED, claim)
        return verdict

    async def _gather_evidence(
        self, claim: str
    ) -> Tuple[Optional[Verdict], Optional[List[FactCheckClaim]]]:
        """Query both sources concurrently; a failure in one never affects the other."""
        ai_result, fact_check_result = await asyncio.gather(
            self._ask_ai(claim),
            self._search_fact_checks(claim),
            return_exceptions=True,
        )

        if isinstance(ai_result, BaseException):
            logger.error(f"❌ AI analysis failed: {type(ai_result).__name__}: {ai_result}")
            ai_result = None
        if isinstance(fact_check_result, BaseException):
            logger.error(f"❌ Fact-check lookup failed: {type(fact_check_result).__name__}: {fact_check_result}")
            fact_check_result = None

        return ai_result, fact_check_result

    async def _ask_ai(self, claim: str) -> Optional[Verdict]:
        if self.ai is None or not self.ai.is_available:
            logger.debug("AI source disabled")
            return None
        return await asyncio.wait_for(self.ai.analyze_claim(claim), timeout=self.ai_timeout)

    async def _search_fact_checks(self, claim: str) -> Optional[List[FactCheckClaim]]:
        if self.fact_checks is None or not self.fact_checks.is_enabled:
            logger.debug("Fact-check source disabled")
            return None
        return await self.fact_checks.search_claims(claim)

    def merge(
        self,
        claim: str,
        ai_verdict: Optional[Verdict],
        fact_checks: Optional[Sequence[FactCheckClaim]],
    ) -> Verdict:
        """Combine whatever evidence is available into a single verdict."""
        if ai_verdict is not None and fact_checks:
            sources = (list(ai_verdict.sources) + publisher_sources(fact_checks))[:MAX_SOURCES]
            return ai_verdict.model_copy(update={
                "explanation": f"🔍🌐 AI analysis with web search + fact-check database: {ai_verdict.explanation}",
                "sources": sources or default_sources(),
            })

        if ai_verdict is not None:
            return ai_verdict.model_copy(update={
                "explanation": f"🌐 AI analysis with web search: {ai_verdict.explanation}",
                "sources": list(ai_verdict.sources) or default_sources(),
            })

        if fact_checks:
            return self.verdict_from_fact_checks(fact_checks)

        logger.warning("⚠️ No evidence sources available - using keyword fallback")
        return self.fallback.classify(claim)

    def prioritize_reviews(self, fact_checks: Sequence[FactCheckClaim]) -> List[Review]:
        """Order rated reviews from most to least recent."""
        now = self._now()
        heap: ReviewPrioritizer[Review] = ReviewPrioritizer()
        for fact_check in fact_checks:
            for review in fact_check.reviews:
                if review.rating_text:
                    heap.insert(review, days_since(review.review_date, now))
        return list(heap.drain())

    def verdict_from_fact_checks(self, fact_checks: Sequence[FactCheckClaim]) -> Verdict:
        """Derive a verdict from fact-checkers' textual ratings alone."""
        logger.info(f"🔍 Processing {len(fact_checks)} fact-checked claim(s)")

        tally = RatingTally()
        for review in self.prioritize_reviews(fact_checks):
            tally.add(review.rating_text.lower())
            tally.sources.append(
                Source(title=f"{review.publisher_name} - Fact Check", url=review.url or "#")
            )

        logger.info(f"📊 Rating counts - fake: {tally.fake_count}, true: {tally.true_count}")
        ratings = ", ".join(tally.ratings)

        if tally.fake_count > tally.true_count:
            label = VerdictLabel.FAKE
            confidence = min(0.9, 0.6 + 0.1 * tally.fake_count)
            explanation = (
                "🔍 Fact-check database: fact-checkers have rated similar claims as false or misleading. "
                f"Found {tally.fake_count} negative rating(s) vs {tally.true_count} positive rating(s). "
                f"Ratings: {ratings}"
            )
        elif tally.true_count > tally.fake_count:
            label = VerdictLabel.REAL
            confidence = min(0.9, 0.6 + 0.1 * tally.true_count)
            explanation = (
                "✅ Fact-check database: fact-checkers have verified similar claims as true or accurate. "
                f"Found {tally.true_count} positive rating(s) vs {tally.fake_count} negative rating(s). "
                f"Ratings: {ratings}"
            )
        else:
            label = VerdictLabel.UNCERTAIN
            confidence = 0.5
            explanation = (
                "❓ Fact-check database: found mixed or inconclusive ratings from fact-checkers. "
                f"Ratings found: {ratings or 'none'}. Manual verification recommended."
            )

        return Verdict(
            label=label,
            confidence=confidence,
            explanation=explanation,
            sources=tally.sources[:4] + default_sources(2),
        )

    @staticmethod
    def _stage(stage: VerificationStage, claim: str) -> None:
        logger.debug(f"[{stage.value}] {claim[:50]}")
