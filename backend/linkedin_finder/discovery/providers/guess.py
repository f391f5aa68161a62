"""Last-resort provider: guess LinkedIn company URLs from the name itself."""

import logging
import re

from linkedin_finder.core.interfaces import ISearchProvider
from linkedin_finder.discovery.schemas import CandidateResult, CandidateSource

logger = logging.getLogger(__name__)


class GuessGenerator(ISearchProvider):
    """Synthesize plausible /company/<slug> URLs when no search provider helps.

    Guesses are never verified. They always score in [0.15, 0.30], below any
    real search hit, and carry source="guess".
    """

    name = "guess"

    URL_TEMPLATE = "https://www.linkedin.com/company/{slug}"
    START_CONFIDENCE = 0.30
    CONFIDENCE_STEP = 0.05
    MIN_CONFIDENCE = 0.15
    MAX_GUESSES = 2

    def is_configured(self) -> bool:
        return True

    async def close(self) -> None:
        pass

    def slug_variations(self, company_name: str) -> list[str]:
        """Candidate slugs in decreasing order of plausibility."""
        name = company_name.strip().lower()

        slug = re.sub(r"[^a-z0-9\s]", "", name)
        slug = re.sub(r"\s+", "-", slug)
        slug = re.sub(r"-+", "-", slug).strip("-")

        return [
            slug,
            slug.replace("-", ""),
            re.sub(r"\s+", "", name),
            name.split(" ")[0],
        ]

    async def search(self, company_name: str) -> list[CandidateResult]:
        return self.generate(company_name)

    def generate(self, company_name: str) -> list[CandidateResult]:
        name = company_name.strip()
        results: list[CandidateResult] = []
        seen: set[str] = set()

        for index, slug in enumerate(self.slug_variations(name)):
            if len(slug) <= 1 or slug in seen:
                continue
            seen.add(slug)

            confidence = max(
                self.START_CONFIDENCE - index * self.CONFIDENCE_STEP, self.MIN_CONFIDENCE
            )
            results.append(
                CandidateResult(
                    url=self.URL_TEMPLATE.format(slug=slug),
                    company_name=name,
                    vanity_name=slug,
                    description=f"Suggested LinkedIn page for {name}",
                    confidence=round(confidence, 2),
                    source=CandidateSource.GUESS,
                )
            )

        logger.info(f"Generated {min(len(results), self.MAX_GUESSES)} URL guesses for '{name}'")
        return results[: self.MAX_GUESSES]
