"""GitHub GraphQL client for commit activity and the contribution calendar.

Requires a personal access token with the read:user scope.
"""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime

import httpx

from errors import UpstreamDataError, UpstreamFetchError

logger = logging.getLogger(__name__)

GITHUB_GRAPHQL_URL = "https://api.github.com/graphql"

COMMITS_QUERY = """
query($login: String!, $from: DateTime!, $to: DateTime!) {
  user(login: $login) {
    contributionsCollection(from: $from, to: $to) {
      totalCommitContributions
      commitContributionsByRepository {
        repository { name }
        contributions { totalCount }
      }
    }
  }
}
"""

CALENDAR_QUERY = """
query($login: String!) {
  user(login: $login) {
    contributionsCollection {
      contributionCalendar {
        weeks {
          contributionDays { date contributionCount }
        }
      }
    }
  }
}
"""


@dataclass(frozen=True)
class RepositoryCommits:
    name: str
    count: int


@dataclass(frozen=True)
class CommitActivity:
    total: int
    repositories: list[RepositoryCommits] = field(default_factory=list)


@dataclass(frozen=True)
class ContributionDay:
    date: date
    count: int


class GitHubClient:
    def __init__(
        self,
        token: str,
        username: str,
        timeout: float = 10,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._token = token
        self._username = username
        self._timeout = timeout
        self._transport = transport

    async def _query(self, query: str, variables: dict) -> dict:
        """POST a GraphQL query and return the ``user`` object."""
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                resp = await client.post(
                    GITHUB_GRAPHQL_URL,
                    json={"query": query, "variables": variables},
                    headers={"Authorization": f"bearer {self._token}"},
                )
                resp.raise_for_status()
                payload = resp.json()
        except httpx.HTTPError as e:
            logger.warning("GitHub request failed: %s", e)
            raise UpstreamFetchError("GitHub", str(e)) from e
        except ValueError as e:
            raise UpstreamFetchError("GitHub", f"invalid JSON: {e}") from e

        if not isinstance(payload, dict):
            raise UpstreamDataError("GitHub", "response is not a JSON object")
        if payload.get("errors"):
            messages = "; ".join(
                err.get("message", "unknown error") if isinstance(err, dict) else str(err)
                for err in payload["errors"]
            )
            logger.warning("GitHub GraphQL errors: %s", messages)
            raise UpstreamFetchError("GitHub", messages)

        user = (payload.get("data") or {}).get("user")
        if user is None:
            raise UpstreamDataError("GitHub", f"no user data for {self._username}")
        return user

    async def fetch_commit_activity(self, start: datetime, end: datetime) -> CommitActivity:
        """Commit totals and per-repository breakdown between ``start`` and ``end``."""
        user = await self._query(
            COMMITS_QUERY,
            {"login": self._username, "from": start.isoformat(), "to": end.isoformat()},
        )
        try:
            collection = user["contributionsCollection"]
            repositories = [
                RepositoryCommits(
                    name=item["repository"]["name"],
                    count=int(item["contributions"]["totalCount"]),
                )
                for item in collection["commitContributionsByRepository"]
            ]
            return CommitActivity(
                total=int(collection["totalCommitContributions"]),
                repositories=repositories,
            )
        except (KeyError, TypeError, ValueError) as e:
            raise UpstreamDataError("GitHub", f"malformed commit activity: {e!r}") from e

    async def fetch_contribution_calendar(self) -> list[ContributionDay]:
        """Daily contribution counts for the past year, oldest first."""
        user = await self._query(CALENDAR_QUERY, {"login": self._username})
        try:
            weeks = user["contributionsCollection"]["contributionCalendar"]["weeks"]
            days = [
                ContributionDay(
                    date=date.fromisoformat(day["date"]),
                    count=int(day["contributionCount"]),
                )
                for week in weeks
                for day in week["contributionDays"]
            ]
        except (KeyError, TypeError, ValueError) as e:
            raise UpstreamDataError("GitHub", f"malformed contribution calendar: {e!r}") from e
        return sorted(days, key=lambda d: d.date)
