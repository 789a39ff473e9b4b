"""Protocol for AI evidence providers."""

from typing import Dict, Protocol

from ..models.verification import Verdict


class AIProvider(Protocol):
    """Protocol defining the interface for AI reasoning providers."""

    async def initialize(self) -> None:
        """Initialize the AI provider."""
        ...

    async def shutdown(self) -> None:
        """Clean up resources."""
        ...

    async def analyze_claim(self, claim: str) -> Verdict:
        """Assess a claim and return a verdict.

        Raises:
            EvidenceSourceError: If no verdict could be obtained
        """
        ...

    @property
    def provider_name(self) -> str:
        """Get the provider name."""
        ...

    @property
    def is_available(self) -> bool:
        """Check if the provider is available and ready."""
        ...

    @property
    def capabilities(self) -> Dict[str, bool]:
        """Get the provider's capabilities."""
        ...
