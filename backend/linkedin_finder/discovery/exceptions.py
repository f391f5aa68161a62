"""Discovery module exceptions (Single Responsibility)."""


class DiscoveryError(Exception):
    """Base exception for company discovery."""

    def __init__(self, message: str = "Company discovery failed"):
        self.message = message
        super().__init__(self.message)


class InvalidCompanyNameError(DiscoveryError):
    """Raised when the requested company name is missing or too short."""

    def __init__(self):
        super().__init__("Invalid company name. Must be at least 2 characters.")


class RateLimitExceededError(DiscoveryError):
    """Raised when a caller has used up its hourly request budget."""

    def __init__(self, limit: int, retry_after: int):
        self.limit = limit
        self.retry_after = retry_after
        super().__init__(f"Rate limit exceeded. Maximum {limit} requests per hour per IP.")


class SearchProviderError(DiscoveryError):
    """Base exception for a failed call to a web-search provider."""

    def __init__(self, provider: str, message: str = "Search provider failed"):
        self.provider = provider
        super().__init__(f"{provider}: {message}")


class ProviderNotConfiguredError(SearchProviderError):
    """Raised when a provider has no API key."""

    def __init__(self, provider: str):
        super().__init__(provider, "API key not configured")


class ProviderAuthError(SearchProviderError):
    """Raised when a provider rejects the API key (401/403)."""

    def __init__(self, provider: str, status_code: int):
        self.status_code = status_code
        super().__init__(provider, f"authentication failed ({status_code})")


class ProviderRateLimitError(SearchProviderError):
    """Raised when a provider throttles us (429)."""

    def __init__(self, provider: str):
        super().__init__(provider, "rate limit exceeded")


class ProviderTimeoutError(SearchProviderError):
    """Raised when a provider does not answer within the timeout."""

    def __init__(self, provider: str, timeout: float):
        self.timeout = timeout
        super().__init__(provider, f"timed out after {timeout:g}s")


class ProviderResponseError(SearchProviderError):
    """Raised on unexpected status codes, transport errors or malformed bodies."""

    def __init__(self, provider: str, message: str = "unexpected response"):
        super().__init__(provider, message)
