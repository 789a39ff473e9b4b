"""Factory for creating and managing fact-check database providers."""

from typing import Any, Dict, Optional, Type

from ...domain.ports.fact_check_provider import FactCheckProvider
from ..config import VerifierConfig
from .google_factcheck_adapter import FactCheckConfig, GoogleFactCheckAdapter


class FactCheckProviderFactory:
    """Factory for creating and managing fact-check providers.

    This factory maintains a registry of available providers
    and handles their lifecycle (initialization, shutdown).
    """

    def __init__(self, config: Optional[VerifierConfig] = None):
        """Initialize the factory."""
        self._config = config or VerifierConfig()
        self._provider_registry: Dict[str, Type[FactCheckProvider]] = {}
        self._active_providers: Dict[str, FactCheckProvider] = {}

        # Register default providers
        self.register_provider("google", GoogleFactCheckAdapter)

    def register_provider(self, name: str, provider_class: Type[FactCheckProvider]) -> None:
        """Register a new provider class.

        Args:
            name: Unique identifier for the provider
            provider_class: The provider class to register
        """
        if name in self._provider_registry:
            raise ValueError(f"Provider {name} already registered")
        self._provider_registry[name] = provider_class

    async def create_provider(self, name: str, **config: Any) -> FactCheckProvider:
        """Create and initialize a new provider instance.

        Args:
            name: Name of the provider to create
            **config: Provider-specific configuration

        Returns:
            Initialized provider instance

        Raises:
            ValueError: If provider not found
            RuntimeError: If initialization fails
        """
        if name not in self._provider_registry:
            raise ValueError(f"Provider {name} not registered")

        provider_class = self._provider_registry[name]
        if name == "google":
            provider = provider_class(config=FactCheckConfig(
                api_key=self._config.google_fact_check_api_key,
                timeout=self._config.fact_check_timeout,
                **config,
            ))
        else:
            provider = provider_class(**config)

        try:
            await provider.initialize()
        except Exception as e:
            raise RuntimeError(f"Failed to initialize provider {name}: {e}") from e

        self._active_providers[name] = provider
        return provider

    def get_provider(self, name: str) -> Optional[FactCheckProvider]:
        """Get an active provider instance by name."""
        return self._active_providers.get(name)

    async def shutdown_provider(self, name: str) -> None:
        """Shutdown a specific provider."""
        provider = self._active_providers.pop(name, None)
        if provider:
            await provider.shutdown()

    async def shutdown_all(self) -> None:
        """Shutdown all active providers."""
        for name in list(self._active_providers):
            await self.shutdown_provider(name)

    @property
    def available_providers(self) -> Dict[str, bool]:
        """Get dictionary of registered providers and their availability."""
        return {
            name: bool(self.get_provider(name)) and self.get_provider(name).is_available
            for name in self._provider_registry
        }
