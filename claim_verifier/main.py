"""Main script for running the claim verifier from a terminal."""

import asyncio
import logging

from .domain.errors import AdmissionDeniedError, InvalidClaimError
from .infrastructure.dependencies import ServiceContainer


async def main():
    """Run the claim verifier."""
    logging.basicConfig(level=logging.WARNING)

    print("Claim Verifier - AI analysis with fact-check database lookup")
    print("-------------------------------------------------------------")

    # Initialize components
    container = ServiceContainer()
    await container.initialize()
    service = container.get_verification_aggregator()

    try:
        while True:
            # Get claim from user
            claim = input("\nEnter a claim or article URL to verify (or 'quit' to exit): ")
            if claim.lower() in ('quit', 'exit', 'q'):
                break

            print("\nVerifying...")
            try:
                verdict = await service.verify(claim)
            except InvalidClaimError as e:
                print(f"\n{e}")
                continue
            except AdmissionDeniedError as e:
                print(f"\n{e}")
                continue

            # Print results
            print("\nResults:")
            print(f"Label: {verdict.label.value}")
            print(f"Confidence: {verdict.confidence:.0%}")
            print(f"\nExplanation: {verdict.explanation}")

            print("\nSources:")
            for i, source in enumerate(verdict.sources, 1):
                print(f"{i}. {source.title} {source.url}".rstrip())

    finally:
        # Clean up
        await container.shutdown()


if __name__ == "__main__":
    asyncio.run(main())
