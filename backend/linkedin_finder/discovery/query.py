"""Search query and cache key construction."""

SITE_FILTER = "site:linkedin.com/company"

MIN_COMPANY_NAME_LENGTH = 2


def build_search_query(company_name: str) -> str:
    """Scope a web search to LinkedIn company pages."""
    return f"{SITE_FILTER} {company_name.strip()}"


def normalize_search_term(company_name: str) -> str:
    """Cache key for a company name: trimmed and lower-cased."""
    return company_name.strip().lower()


def is_valid_company_name(company_name: object) -> bool:
    return (
        isinstance(company_name, str)
        and len(company_name.strip()) >= MIN_COMPANY_NAME_LENGTH
    )
