"""Shared builders for tests."""

from datetime import datetime, timedelta, timezone
from typing import List, Optional

from claim_verifier.domain.models.review import FactCheckClaim, Review

NOW = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)


class FakeClock:
    """Millisecond clock advanced by hand."""

    def __init__(self, start: float = 1_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> None:
        self.now += ms


def make_review(rating: Optional[str], days_ago: Optional[int], publisher: str = "Snopes",
                url: Optional[str] = "https://example.com/review") -> Review:
    """Build a review published ``days_ago`` days before NOW."""
    return Review(
        publisher_name=publisher,
        url=url,
        rating_text=rating,
        review_date=NOW - timedelta(days=days_ago) if days_ago is not None else None,
    )


def make_claims(*reviews: Review) -> List[FactCheckClaim]:
    """Wrap reviews in a single matched claim."""
    return [FactCheckClaim(text="matched claim", reviews=list(reviews))]
