"""GitHub adapter - commits, issues and pull requests via the search API."""

import logging
from datetime import date, timedelta

from arkeo.core.activity import Activity, ActivityType

from .base import BaseConnector, ConfigField, ConnectorError, parse_timestamp

logger = logging.getLogger(__name__)

API_BASE = "https://api.github.com"
ACCEPT = "application/vnd.github.v3+json"


class GitHubConnector(BaseConnector):
    """
    GitHub connector.

    Reports the configured user's commits for the day plus issues and pull
    requests they authored, are assigned to or are mentioned in that were
    updated on the day.
    """

    name = "github"
    description = "GitHub commits, issues and pull requests"
    FIELDS = (
        ConfigField("token", "secret", required=True, description="GitHub Personal Access Token"),
        ConfigField("username", "string", required=True, description="GitHub username"),
        ConfigField("include_private", "bool", description="Include private repositories", default=False),
    )

    def _api_request(self, endpoint: str, params: dict | None = None) -> dict | list:
        return self._get_json(
            f"{API_BASE}{endpoint}",
            self.get_str("token"),
            params=params,
            headers={"Accept": ACCEPT},
        )

    def test_connection(self) -> None:
        if not self.get_str("token"):
            raise ConnectorError("github: no token configured")
        self._api_request("/user")

    def fetch_activities(self, target_date: date) -> list[Activity]:
        logger.debug(f"Fetching GitHub activities for {target_date}")

        try:
            commits = self._fetch_commits(target_date)
        except ConnectorError as e:
            raise ConnectorError(f"failed to get commits: {e}") from e

        activities = commits + self._fetch_issues(target_date)
        return self.limit(activities)

    def _fetch_commits(self, target_date: date) -> list[Activity]:
        username = self.get_str("username")
        since = f"{target_date.isoformat()}T00:00:00Z"
        until = f"{(target_date + timedelta(days=1)).isoformat()}T00:00:00Z"

        data = self._api_request(
            "/search/commits",
            params={
                "q": f"committer:{username} author-date:{since}..{until}",
                "sort": "author-date",
                "order": "desc",
            },
        )

        activities = []
        for item in data.get("items", []):
            commit = item.get("commit") or {}
            repo = (item.get("repository") or {}).get("full_name") or ""
            try:
                timestamp = parse_timestamp((commit.get("author") or {}).get("date") or "")
            except ValueError:
                logger.debug(f"Skipping commit with bad date: {item.get('sha', '')}")
                continue

            sha = item.get("sha") or ""
            message = (commit.get("message") or "").split("\n")[0]
            activities.append(
                Activity(
                    id=f"github-commit-{sha[:8]}",
                    type=ActivityType.GIT_COMMIT,
                    title=f"{message} on {repo}",
                    description=f"Commit to {repo}",
                    timestamp=timestamp,
                    source=self.name,
                    url=item.get("html_url") or "",
                    metadata={"repository": repo, "sha": sha},
                )
            )

        return activities

    def _fetch_issues(self, target_date: date) -> list[Activity]:
        """Issues and PRs touched on the day. A failing query is skipped."""
        username = self.get_str("username")
        since = target_date.isoformat()
        until = (target_date + timedelta(days=1)).isoformat()
        queries = [
            f"author:{username} created:{since}",
            f"assignee:{username} updated:{since}..{until}",
            f"mentions:{username} updated:{since}..{until}",
        ]

        activities = []
        seen: set[str] = set()
        for query in queries:
            try:
                data = self._api_request(
                    "/search/issues",
                    params={"q": query, "sort": "updated", "order": "desc", "per_page": 100},
                )
            except ConnectorError as e:
                logger.warning(f"GitHub issue search failed ({query}): {e}")
                continue

            for item in data.get("items", []):
                activity = self._issue_to_activity(item, target_date)
                if activity and activity.id not in seen:
                    seen.add(activity.id)
                    activities.append(activity)

        return activities

    def _issue_to_activity(self, item: dict, target_date: date) -> Activity | None:
        try:
            updated = parse_timestamp(item.get("updated_at") or "")
        except ValueError:
            return None

        if updated.date() != target_date:
            return None

        number = item.get("number", 0)
        title = f"#{number}: {item.get('title', '')}"
        if item.get("pull_request"):
            title = f"PR #{number}: {item.get('title', '')}"

        # Search results carry repository_url (.../repos/owner/name) rather than a repository object
        repo = "/".join((item.get("repository_url") or "").rstrip("/").split("/")[-2:])

        return Activity(
            id=f"github-issue-{item.get('id', number)}",
            type=ActivityType.JIRA,
            title=title,
            description=f"Updated in {repo.split('/')[-1]}",
            timestamp=updated,
            source=self.name,
            url=item.get("html_url") or "",
            metadata={
                "repository": repo,
                "number": str(number),
                "state": item.get("state", ""),
                "author": (item.get("user") or {}).get("login") or "",
            },
        )
