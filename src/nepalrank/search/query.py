"""Search criteria and the GraphQL document used to page through users."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


SEARCH_USERS_QUERY = """
query($searchQuery: String!, $first: Int!, $cursor: String) {
  search(type: USER, query: $searchQuery, first: $first, after: $cursor) {
    userCount
    pageInfo {
      hasNextPage
      endCursor
    }
    edges {
      node {
        ... on User {
          login
          name
          avatarUrl
          followers {
            totalCount
          }
          contributionsCollection {
            contributionCalendar {
              totalContributions
            }
            totalCommitContributions
            restrictedContributionsCount
          }
          organizations(first: 10) {
            nodes {
              login
            }
          }
        }
      }
    }
  }
}
"""


def _location_clause(location: str, *, negate: bool = False) -> str:
    prefix = "-" if negate else ""
    return f'{prefix}location:"{location}"'


@dataclass(frozen=True)
class SearchCriteria:
    """Location filters (ORed) plus an optional follower floor."""

    locations: Tuple[str, ...]
    exclude_locations: Tuple[str, ...] = ()
    min_followers: int = 0

    def __post_init__(self) -> None:
        if not self.locations:
            raise ValueError("SearchCriteria requires at least one location")
        if self.min_followers < 0:
            raise ValueError("min_followers must be non-negative")
        # accept lists from callers while keeping the value hashable
        object.__setattr__(self, "locations", tuple(self.locations))
        object.__setattr__(self, "exclude_locations", tuple(self.exclude_locations))

    def to_query(self) -> str:
        parts = ["type:user"]
        if self.min_followers > 0:
            parts.append(f"followers:>={self.min_followers}")
        parts.append(" OR ".join(_location_clause(loc) for loc in self.locations))
        parts.extend(_location_clause(loc, negate=True) for loc in self.exclude_locations)
        return " ".join(parts)
