"""Confidence scoring for LinkedIn company candidates.

The weights below are relied upon by clients (auto-select at 0.9), keep them
stable:

    base (valid company URL)                   0.60
    extracted name matches the search term    +0.25
    first result returned by the provider     +0.10
    slug contains the term without spaces     +0.05
    cap                                        0.95
"""

import re

from linkedin_finder.discovery.extractor import extract, is_company_url
from linkedin_finder.discovery.schemas import CandidateResult, CandidateSource, RawSearchHit

BASE_CONFIDENCE = 0.6
NAME_MATCH_BONUS = 0.25
FIRST_RESULT_BONUS = 0.10
SLUG_MATCH_BONUS = 0.05
MAX_CONFIDENCE = 0.95


def calculate_confidence(
    company_name: str,
    vanity_name: str,
    search_term: str,
    is_first_result: bool,
) -> float:
    """Score one candidate against the term the user searched for.

    Args:
        company_name: Name extracted from the search hit
        vanity_name: Slug extracted from the hit URL
        search_term: Company name the user typed
        is_first_result: Whether the hit was the provider's top result

    Returns:
        Confidence in [0.6, 0.95], rounded to 2 decimals
    """
    confidence = BASE_CONFIDENCE

    name = company_name.lower()
    term = search_term.strip().lower()

    if term in name or name.split(" ")[0] in term:
        confidence += NAME_MATCH_BONUS

    if is_first_result:
        confidence += FIRST_RESULT_BONUS

    if re.sub(r"\s+", "", term) in vanity_name.lower():
        confidence += SLUG_MATCH_BONUS

    return round(min(confidence, MAX_CONFIDENCE), 2)


def score_hits(hits: list[RawSearchHit], search_term: str) -> list[CandidateResult]:
    """Turn a provider's ranked hits into candidates, best first.

    Hits whose URL is not a LinkedIn company page are dropped. Rank bonuses
    refer to the hit's position in the provider response, so a filtered-out
    top hit means no candidate gets the first-result bonus.
    """
    candidates: list[CandidateResult] = []

    for index, hit in enumerate(hits):
        if not is_company_url(hit.url):
            continue

        extracted = extract(hit.title, hit.description, hit.url)
        candidates.append(
            CandidateResult(
                url=hit.url,
                company_name=extracted.company_name,
                vanity_name=extracted.vanity_name,
                description=extracted.description,
                confidence=calculate_confidence(
                    extracted.company_name,
                    extracted.vanity_name,
                    search_term,
                    is_first_result=index == 0,
                ),
                source=CandidateSource.SEARCH,
            )
        )

    # sorted() is stable: ties keep provider order
    return sorted(candidates, key=lambda c: c.confidence, reverse=True)
