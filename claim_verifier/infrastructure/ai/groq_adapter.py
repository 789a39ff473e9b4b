"""Groq implementation of the AI provider interface."""

import logging
from typing import Dict, Optional
from urllib.parse import urlparse

from openai import AsyncOpenAI, OpenAIError
from pydantic import BaseModel, Field

from ...domain.errors import EvidenceSourceError
from ...domain.models.verification import Verdict
from ...domain.ports.ai_provider import AIProvider
from .response_parser import ParseFailure, parse_verdict

logger = logging.getLogger(__name__)

MAX_PROMPT_CLAIM_LENGTH = 200


class GroqConfig(BaseModel):
    """Configuration for the Groq adapter."""

    api_key: Optional[str] = Field(default=None, description="Groq API key")
    model: str = Field(default="groq/compound", description="Model to use")
    base_url: str = Field(default="https://api.groq.com/openai/v1", description="OpenAI-compatible endpoint")
    temperature: float = Field(default=0.3, description="Temperature for responses")
    max_tokens: int = Field(default=400, description="Maximum tokens per response")
    timeout: float = Field(default=30.0, description="API timeout in seconds")
    web_search: bool = Field(default=True, description="Enable the model's web search and website tools")


def is_url(text: str) -> bool:
    """Check whether text is an http(s) URL."""
    parsed = urlparse(text.strip())
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def build_prompt(claim: str) -> str:
    """Build the verification prompt for a claim or an article URL."""
    if is_url(claim):
        return (
            f'Analyze this article: "{claim.strip()}"\n\n'
            "Visit the website and respond JSON:\n"
            '{"label": "real/fake/uncertain", "confidence": 0.0-1.0, '
            '"explanation": "article analysis with credibility assessment", '
            '"sources": [{"title": "source", "url": "url"}]}'
        )

    if len(claim) > MAX_PROMPT_CLAIM_LENGTH:
        claim = claim[:MAX_PROMPT_CLAIM_LENGTH] + "..."
    return (
        f'Fact-check: "{claim}"\n\n'
        "Search web and respond JSON:\n"
        '{"label": "real/fake/uncertain", "confidence": 0.0-1.0, '
        '"explanation": "brief reason", '
        '"sources": [{"title": "source", "url": "url"}]}'
    )


class GroqAdapter(AIProvider):
    """Groq compound-model implementation of the AI provider interface."""

    def __init__(self, config: Optional[GroqConfig] = None):
        """Initialize the adapter."""
        self._config = config or GroqConfig()
        self._client: Optional[AsyncOpenAI] = None
        self._initialized = False

    async def initialize(self) -> None:
        """Create the API client."""
        if not self._config.api_key:
            raise ConnectionError("Failed to initialize Groq provider: API key not configured")
        if self._client is None:
            self._client = AsyncOpenAI(
                api_key=self._config.api_key,
                base_url=self._config.base_url,
                timeout=self._config.timeout,
                default_headers={"Groq-Model-Version": "latest"},
            )
        self._initialized = True

    async def analyze_claim(self, claim: str) -> Verdict:
        """Ask the model to fact-check a claim."""
        if not self._client:
            raise EvidenceSourceError(self.provider_name, "Provider not initialized")

        extra_body = None
        if self._config.web_search:
            extra_body = {"compound_custom": {"tools": {"enabled_tools": ["web_search", "visit_website"]}}}

        logger.debug(f"Sending request to Groq ({'URL' if is_url(claim) else 'TEXT'} mode)...")
        try:
            completion = await self._client.chat.completions.create(
                model=self._config.model,
                messages=[{"role": "user", "content": build_prompt(claim)}],
                temperature=self._config.temperature,
                max_tokens=self._config.max_tokens,
                top_p=1,
                stream=False,
                extra_body=extra_body,
            )
        except OpenAIError as e:
            raise EvidenceSourceError(self.provider_name, f"Request failed: {e}", cause=e) from e

        content = completion.choices[0].message.content if completion.choices else None
        if not content:
            raise EvidenceSourceError(self.provider_name, "Invalid response from Groq AI")
        logger.debug(f"Groq response received: {content[:200]}...")

        result = parse_verdict(content)
        if isinstance(result, ParseFailure):
            raise EvidenceSourceError(self.provider_name, result.reason)

        logger.info(f"🤖 AI verdict parsed via {result.strategy.value}: {result.verdict.label.value}")
        return result.verdict

    async def shutdown(self) -> None:
        """Clean up resources and shut down the provider."""
        if self._client:
            await self._client.close()
            self._client = None
        self._initialized = False

    @property
    def provider_name(self) -> str:
        """Get the name of the AI provider."""
        return "Groq"

    @property
    def is_available(self) -> bool:
        """Check if the provider is available and ready."""
        return self._initialized and self._client is not None

    @property
    def capabilities(self) -> Dict[str, bool]:
        """Get the provider's capabilities."""
        return {
            "claim_verification": True,
            "url_analysis": True,
            "web_search": self._config.web_search,
        }
