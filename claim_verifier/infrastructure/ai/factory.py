"""Factory for creating and managing AI providers."""

from typing import Any, Dict, Optional, Type

from ...domain.ports.ai_provider import AIProvider
from ..config import VerifierConfig
from .groq_adapter import GroqAdapter, GroqConfig


class AIProviderFactory:
    """Factory for creating and managing AI providers."""

    def __init__(self, config: Optional[VerifierConfig] = None):
        """Initialize the factory.

        Args:
            config: Service configuration used to configure built-in providers
        """
        self._config = config or VerifierConfig()
        self._providers: Dict[str, Type[AIProvider]] = {}
        self._instances: Dict[str, AIProvider] = {}

        # Register default providers
        self.register_provider("groq", GroqAdapter)

    def register_provider(self, name: str, provider_class: Type[AIProvider]) -> None:
        """Register a new AI provider.

        Args:
            name: Provider name
            provider_class: Provider class
        """
        self._providers[name] = provider_class

    async def create_provider(self, name: str, **kwargs: Any) -> AIProvider:
        """Create and initialize a provider instance.

        Args:
            name: Provider name
            **kwargs: Provider-specific configuration

        Returns:
            Initialized provider instance

        Raises:
            ValueError: If provider not found
        """
        if name not in self._providers:
            raise ValueError(f"Provider '{name}' not found")

        if name not in self._instances:
            if name == "groq":
                config = GroqConfig(
                    api_key=self._config.groq_api_key,
                    model=self._config.groq_model,
                    base_url=self._config.groq_base_url,
                    timeout=self._config.ai_timeout,
                    **kwargs,
                )
                provider = self._providers[name](config=config)
            else:
                provider = self._providers[name](**kwargs)

            await provider.initialize()
            self._instances[name] = provider

        return self._instances[name]

    def get_provider(self, name: str) -> Optional[AIProvider]:
        """Get an existing provider instance.

        Args:
            name: Provider name

        Returns:
            Provider instance if exists, None otherwise
        """
        return self._instances.get(name)

    @property
    def available_providers(self) -> Dict[str, bool]:
        """Get dictionary of registered providers and their availability."""
        return {
            name: name in self._instances and self._instances[name].is_available
            for name in self._providers
        }

    async def shutdown(self) -> None:
        """Shutdown all provider instances."""
        for provider in self._instances.values():
            await provider.shutdown()
        self._instances.clear()
