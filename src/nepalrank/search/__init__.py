"""Search API adapters that harvest raw account records."""

from .backoff import backoff_delay
from .client import API_BASE, SearchClient, SearchPage
from .query import SEARCH_USERS_QUERY, SearchCriteria

__all__ = [
    "API_BASE",
    "SEARCH_USERS_QUERY",
    "SearchClient",
    "SearchCriteria",
    "SearchPage",
    "backoff_delay",
]
