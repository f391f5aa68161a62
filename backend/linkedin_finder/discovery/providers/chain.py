"""Ordered provider fallback."""

import logging

from linkedin_finder.core.interfaces import ISearchProvider
from linkedin_finder.discovery.exceptions import SearchProviderError
from linkedin_finder.discovery.providers.guess import GuessGenerator
from linkedin_finder.discovery.schemas import CandidateResult

logger = logging.getLogger(__name__)


class ProviderChain:
    """Walk search providers in priority order until one returns candidates.

    Each provider gets exactly one attempt. Any failure, including a timeout,
    moves on to the next provider. When every real provider fails or comes
    back empty, the guess generator answers, so the chain never returns an
    empty list.
    """

    def __init__(
        self,
        providers: list[ISearchProvider],
        fallback: GuessGenerator | None = None,
    ) -> None:
        self._providers = providers
        self._fallback = fallback or GuessGenerator()

    @property
    def providers(self) -> list[ISearchProvider]:
        return list(self._providers)

    def has_configured_provider(self) -> bool:
        return any(provider.is_configured() for provider in self._providers)

    async def search(self, company_name: str) -> tuple[list[CandidateResult], str]:
        """Search with fallback.

        Returns:
            Tuple of (candidates sorted best first, name of the provider that answered)
        """
        for provider in self._providers:
            try:
                logger.info(f"Trying search provider {provider.name}...")
                results = await provider.search(company_name)
            except SearchProviderError as e:
                logger.warning(f"Search provider failed: {e.message}")
                continue
            except Exception as e:
                logger.error(f"Search provider {provider.name} raised unexpectedly: {e}")
                continue

            if results:
                logger.info(f"Provider {provider.name} returned {len(results)} candidates")
                return results, provider.name

            logger.info(f"Provider {provider.name} returned no LinkedIn company pages")

        logger.info(f"All search providers exhausted, guessing URLs for '{company_name}'")
        return await self._fallback.search(company_name), self._fallback.name

    async def close(self) -> None:
        for provider in self._providers:
            await provider.close()
