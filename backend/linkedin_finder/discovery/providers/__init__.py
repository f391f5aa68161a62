"""Web-search providers for LinkedIn company discovery."""

from linkedin_finder.discovery.providers.base import WebSearchProvider
from linkedin_finder.discovery.providers.bing import BingSearchProvider
from linkedin_finder.discovery.providers.brave import BraveSearchProvider
from linkedin_finder.discovery.providers.chain import ProviderChain
from linkedin_finder.discovery.providers.guess import GuessGenerator
from linkedin_finder.discovery.providers.serper import SerperSearchProvider

__all__ = [
    "WebSearchProvider",
    "BraveSearchProvider",
    "SerperSearchProvider",
    "BingSearchProvider",
    "GuessGenerator",
    "ProviderChain",
]
