"""Fact-check database provider interface."""

from typing import List, Optional, Protocol

from ..models.review import FactCheckClaim


class FactCheckProvider(Protocol):
    """Protocol for databases of published fact-check reviews."""

    async def initialize(self) -> None:
        """Initialize the provider."""
        ...

    async def search_claims(self, query: str) -> Optional[List[FactCheckClaim]]:
        """Search for previously fact-checked claims matching the query.

        Returns:
            Matched claims, or None when the provider is disabled

        Raises:
            EvidenceSourceError: If the lookup failed
        """
        ...

    async def shutdown(self) -> None:
        """Shutdown the provider and clean up resources."""
        ...

    @property
    def provider_name(self) -> str:
        """Get the provider name."""
        ...

    @property
    def is_enabled(self) -> bool:
        """Check if the provider has the credentials it needs."""
        ...

    @property
    def is_available(self) -> bool:
        """Check if the provider is available and ready."""
        ...
