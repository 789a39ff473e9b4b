"""Dependency injection configuration for hexagonal architecture."""

import logging
from functools import lru_cache
from typing import Any, Dict, Optional

from ..domain.services.admission_gate import AdmissionGate
from ..domain.services.fallback_classifier import FallbackClassifier
from ..domain.services.result_cache import ResultCache
from ..domain.services.verification_aggregator import VerificationAggregator
from .ai.factory import AIProviderFactory
from .config import VerifierConfig
from .factcheck.factory import FactCheckProviderFactory

logger = logging.getLogger(__name__)


class ServiceContainer:
    """Service container for dependency injection.

    Holds the process-wide admission gate and result cache. Created once at
    startup, shared by reference, and shut down when the process exits.
    """

    def __init__(self, config: Optional[VerifierConfig] = None):
        """Initialize service container."""
        self.config = config or VerifierConfig.from_env()
        self._services: Dict[str, Any] = {}
        self.ai_factory = AIProviderFactory(self.config)
        self.fact_check_factory = FactCheckProviderFactory(self.config)
        self._setup_services()

    def _setup_services(self) -> None:
        """Setup all services and their dependencies."""
        logger.info("🔧 Setting up service container...")

        admission_gate = AdmissionGate(
            max_requests=self.config.max_requests,
            window_size_ms=self.config.window_size_ms,
        )
        result_cache = ResultCache(
            max_size=self.config.cache_max_size,
            ttl_ms=self.config.cache_ttl_ms,
        )
        fallback_classifier = FallbackClassifier()

        # Evidence sources are attached in initialize()
        verification_aggregator = VerificationAggregator(
            admission_gate=admission_gate,
            result_cache=result_cache,
            fallback_classifier=fallback_classifier,
            ai_timeout=self.config.ai_timeout,
        )

        self._services = {
            'admission_gate': admission_gate,
            'result_cache': result_cache,
            'fallback_classifier': fallback_classifier,
            'verification_aggregator': verification_aggregator,
        }

        logger.info("✅ Service container setup completed")

    async def initialize(self) -> None:
        """Create the evidence providers and attach them to the aggregator.

        A provider that fails to start is left out; the aggregator then
        treats that source as absent evidence.
        """
        aggregator = self.get_verification_aggregator()

        if self.config.groq_api_key:
            try:
                logger.info("🤖 Setting up AI provider...")
                aggregator.ai = await self.ai_factory.create_provider("groq")
                logger.info("✅ AI provider ready")
            except Exception as e:
                logger.warning(f"⚠️ Failed to initialize AI provider: {e}")

        try:
            logger.info("📚 Setting up fact-check provider...")
            aggregator.fact_checks = await self.fact_check_factory.create_provider("google")
            logger.info("✅ Fact-check provider ready")
        except Exception as e:
            logger.warning(f"⚠️ Failed to initialize fact-check provider: {e}")

    async def shutdown(self) -> None:
        """Shut down every provider."""
        await self.ai_factory.shutdown()
        await self.fact_check_factory.shutdown_all()
        aggregator = self.get_verification_aggregator()
        aggregator.ai = None
        aggregator.fact_checks = None
        logger.info("👋 Service container shut down")

    def get(self, service_name: str) -> Any:
        """Get a service by name.

        Args:
            service_name: Name of the service

        Returns:
            Service instance

        Raises:
            KeyError: If service not found
        """
        if service_name not in self._services:
            raise KeyError(f"Service '{service_name}' not found")
        return self._services[service_name]

    def get_result_cache(self) -> ResultCache:
        """Get the shared result cache."""
        return self.get('result_cache')

    def get_verification_aggregator(self) -> VerificationAggregator:
        """Get the verification aggregator."""
        return self.get('verification_aggregator')

    def provider_status(self) -> Dict[str, Dict[str, bool]]:
        """Availability of each registered evidence provider."""
        return {
            "ai_providers": self.ai_factory.available_providers,
            "fact_check_providers": self.fact_check_factory.available_providers,
        }


# Global service container instance
@lru_cache()
def get_service_container() -> ServiceContainer:
    """Get global service container instance.

    Returns:
        Service container instance
    """
    return ServiceContainer()


# Convenience functions for FastAPI dependency injection
def get_verification_aggregator() -> VerificationAggregator:
    """FastAPI dependency for the verification aggregator."""
    return get_service_container().get_verification_aggregator()
