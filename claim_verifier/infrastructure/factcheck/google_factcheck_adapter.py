"""Google Fact Check Tools implementation of the fact-check provider interface."""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

import httpx
from pydantic import BaseModel, Field, TypeAdapter, ValidationError

from ...domain.errors import EvidenceSourceError
from ...domain.models.review import FactCheckClaim, Review
from ...domain.ports.fact_check_provider import FactCheckProvider

logger = logging.getLogger(__name__)


class FactCheckConfig(BaseModel):
    """Configuration for the Google Fact Check adapter."""

    api_key: Optional[str] = Field(default=None, description="Google Fact Check Tools API key")
    base_url: str = Field(
        default="https://factchecktools.googleapis.com/v1alpha1",
        description="Fact Check Tools API base URL",
    )
    timeout: float = Field(default=10.0, description="Request timeout in seconds")
    language_code: str = Field(default="en", description="Language of reviews to search")
    max_claims: int = Field(default=3, description="Maximum matched claims to return")


_DATETIME = TypeAdapter(datetime)


def _parse_date(value: Any) -> Optional[datetime]:
    if not isinstance(value, str) or not value:
        return None
    try:
        return _DATETIME.validate_python(value)
    except ValidationError:
        logger.debug(f"Unparseable date from fact-check API: {value!r}")
        return None


def parse_claims(payload: Dict[str, Any], max_claims: int = 3) -> List[FactCheckClaim]:
    """Convert a ``claims:search`` response body into domain claims."""
    claims = []
    for item in (payload.get("claims") or [])[:max_claims]:
        reviews = [
            Review(
                publisher_name=(review.get("publisher") or {}).get("name") or "Unknown",
                url=review.get("url"),
                title=review.get("title"),
                rating_text=review.get("textualRating"),
                review_date=_parse_date(review.get("reviewDate")),
                language_code=review.get("languageCode"),
            )
            for review in item.get("claimReview") or []
        ]
        claims.append(
            FactCheckClaim(
                text=item.get("text"),
                claimant=item.get("claimant"),
                claim_date=_parse_date(item.get("claimDate")),
                reviews=reviews,
            )
        )
    return claims


class GoogleFactCheckAdapter(FactCheckProvider):
    """Looks up published fact-checks through the Google Fact Check Tools API.

    A missing API key is a valid configuration: the adapter reports itself
    disabled and every search returns None.
    """

    def __init__(self, config: Optional[FactCheckConfig] = None):
        """Initialize the adapter."""
        self._config = config or FactCheckConfig()
        self._client: Optional[httpx.AsyncClient] = None

    async def initialize(self) -> None:
        """Initialize the HTTP client."""
        if not self.is_enabled:
            logger.warning("⚠️ Fact-check API key not configured - database lookup disabled")
            return
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self._config.base_url,
                timeout=self._config.timeout,
            )

    async def search_claims(self, query: str) -> Optional[List[FactCheckClaim]]:
        """Search for fact-checked claims similar to the query."""
        if not self.is_enabled:
            return None
        if not self._client:
            raise EvidenceSourceError(self.provider_name, "Provider not initialized")

        try:
            response = await self._client.get(
                "/claims:search",
                params={
                    "query": query,
                    "key": self._config.api_key,
                    "languageCode": self._config.language_code,
                },
            )
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPError as e:
            raise EvidenceSourceError(self.provider_name, f"Request failed: {e}", cause=e) from e
        except ValueError as e:
            raise EvidenceSourceError(self.provider_name, "Malformed response body", cause=e) from e
        if not isinstance(payload, dict):
            raise EvidenceSourceError(self.provider_name, "Malformed response body")

        claims = parse_claims(payload, self._config.max_claims)
        logger.info(f"📚 Fact-check database returned {len(claims)} claim(s)")
        return claims

    async def shutdown(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    @property
    def provider_name(self) -> str:
        """Get the provider name."""
        return "GoogleFactCheck"

    @property
    def is_enabled(self) -> bool:
        """Check if an API key is configured."""
        return bool(self._config.api_key)

    @property
    def is_available(self) -> bool:
        """Check if the provider is available and ready."""
        return self.is_enabled and self._client is not None
