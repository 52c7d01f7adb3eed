"""Paginated GitHub user search with deduplication and retry."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, List, Mapping, Optional

import httpx
from pydantic import ValidationError

from nepalrank.errors import FetchError, SearchResponseError
from nepalrank.models import AccountRecord

from .backoff import backoff_delay
from .query import SEARCH_USERS_QUERY, SearchCriteria


logger = logging.getLogger(__name__)

API_BASE = "https://api.github.com"
GRAPHQL_PATH = "/graphql"
USER_AGENT = "nepalrank"


@dataclass(frozen=True)
class SearchPage:
    records: List[AccountRecord]
    edge_count: int
    has_next_page: bool
    end_cursor: Optional[str]
    user_count: Optional[int] = None


def _expect_mapping(value: Any, field: str) -> Mapping[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise SearchResponseError(f"Search response field {field} is not an object")
    return value


def _parse_page(payload: Any) -> SearchPage:
    if not isinstance(payload, Mapping):
        raise SearchResponseError("Search response is not a JSON object")

    errors = payload.get("errors")
    if errors:
        if not isinstance(errors, list):
            errors = [errors]
        messages = [
            err.get("message", str(err)) if isinstance(err, Mapping) else str(err)
            for err in errors
        ]
        raise SearchResponseError("; ".join(messages))

    search = _expect_mapping(payload.get("data"), "data").get("search")
    if not isinstance(search, Mapping):
        raise SearchResponseError("Search response is missing data.search")

    edges = search.get("edges") or []
    if not isinstance(edges, list):
        raise SearchResponseError("Search response field edges is not a list")

    records: List[AccountRecord] = []
    for edge in edges:
        node = _expect_mapping(_expect_mapping(edge, "edge").get("node"), "node")
        if not node.get("login"):
            # organisations and other non-user hits come back as empty nodes
            continue
        try:
            records.append(AccountRecord.from_search_node(node))
        except (ValidationError, TypeError, ValueError, AttributeError) as exc:
            raise SearchResponseError(f"Malformed user node {node.get('login')!r}: {exc}") from exc

    page_info = _expect_mapping(search.get("pageInfo"), "pageInfo")
    return SearchPage(
        records=records,
        edge_count=len(edges),
        has_next_page=bool(page_info.get("hasNextPage")),
        end_cursor=page_info.get("endCursor"),
        user_count=search.get("userCount"),
    )


class SearchClient:
    """Collects every account matching a search, one page at a time.

    Retry and progress counters are scoped to a single :meth:`fetch_all` call.
    A failed page is retried with the same cursor after an exponential backoff;
    ``max_retries`` consecutive failures abort the run with :class:`FetchError`.
    """

    def __init__(
        self,
        token: str,
        *,
        max_users: int = 1000,
        page_size: int = 100,
        max_retries: int = 5,
        backoff_base: float = 1.0,
        backoff_cap: float = 30.0,
        page_delay: float = 1.0,
        http_client: httpx.Client | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        if max_users < 1:
            raise ValueError("max_users must be at least 1")
        if max_retries < 1:
            raise ValueError("max_retries must be at least 1")
        self.token = token
        self.max_users = max_users
        self.page_size = max(1, min(100, page_size))
        self.max_retries = max_retries
        self.backoff_base = backoff_base
        self.backoff_cap = backoff_cap
        self.page_delay = page_delay
        self._sleep = sleep
        self._owns_http = http_client is None
        self._http = http_client or httpx.Client(base_url=API_BASE, timeout=30.0)

        self.retry_count = 0
        self.fetched_count = 0

    def __enter__(self) -> "SearchClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_http:
            self._http.close()

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"bearer {self.token}",
            "Accept": "application/json",
            "User-Agent": USER_AGENT,
        }

    def _request_page(self, search_query: str, cursor: Optional[str]) -> SearchPage:
        response = self._http.post(
            GRAPHQL_PATH,
            json={
                "query": SEARCH_USERS_QUERY,
                "variables": {
                    "searchQuery": search_query,
                    "first": self.page_size,
                    "cursor": cursor,
                },
            },
            headers=self._headers(),
        )
        response.raise_for_status()
        try:
            payload = response.json()
        except ValueError as exc:
            raise SearchResponseError(f"Search response is not valid JSON: {exc}") from exc
        return _parse_page(payload)

    def _fetch_page(self, search_query: str, cursor: Optional[str]) -> SearchPage:
        while True:
            try:
                page = self._request_page(search_query, cursor)
            except (httpx.HTTPError, SearchResponseError) as exc:
                self.retry_count += 1
                logger.warning(
                    "Error fetching users (attempt %s/%s): %s",
                    self.retry_count,
                    self.max_retries,
                    exc,
                )
                if self.retry_count >= self.max_retries:
                    raise FetchError(
                        f"Failed after {self.retry_count} retries: {exc}",
                        attempts=self.retry_count,
                        cause=exc,
                    ) from exc
                wait = backoff_delay(self.retry_count, self.backoff_base, self.backoff_cap)
                logger.info("Retrying in %.1fs...", wait)
                self._sleep(wait)
                continue
            self.retry_count = 0
            return page

    def fetch_all(self, criteria: SearchCriteria) -> List[AccountRecord]:
        """Return unique accounts in first-seen order, at most ``max_users`` of them."""

        self.retry_count = 0
        self.fetched_count = 0

        search_query = criteria.to_query()
        logger.info("Searching for users with query: %s", search_query)

        accounts: List[AccountRecord] = []
        seen: set[str] = set()
        cursor: Optional[str] = None
        has_next_page = True

        while has_next_page and self.fetched_count < self.max_users:
            page = self._fetch_page(search_query, cursor)
            if self.fetched_count == 0 and page.user_count is not None:
                logger.info("%s users match query", page.user_count)

            for record in page.records:
                if record.username in seen:
                    continue
                seen.add(record.username)
                if len(accounts) < self.max_users:
                    accounts.append(record)

            self.fetched_count += page.edge_count
            has_next_page = page.has_next_page
            cursor = page.end_cursor

            logger.info("Fetched %s users so far...", self.fetched_count)

            if has_next_page and self.fetched_count < self.max_users:
                self._sleep(self.page_delay)

        logger.info("Total unique users found: %s", len(accounts))
        return accounts
