#------------------------------------------------------------
#                      github_service.py
#               Handles GitHub API requests and
#                      response shaping.

from typing import Any, Dict, List, Optional
import requests
from ..config import (
    GITHUB_API_ACCEPT_HEADER,
    GITHUB_API_BASE_URL,
    GITHUB_MAX_PAGES,
    GITHUB_PER_PAGE,
    GITHUB_REQUEST_TIMEOUT_SECONDS,
)
from ..errors import SourceError
from ..logger import get_logger
from ..models import AnalyzerConfig, CommitRecord, LanguageBytes, PullRequestRecord, Repository
from .rate_limiter import RateLimiter

AUTH_USER_ENDPOINT = "/user"
AUTH_REPOS_ENDPOINT = "/user/repos"
USER_REPOS_ENDPOINT_TEMPLATE = "/users/{username}/repos"
LANGUAGES_ENDPOINT_TEMPLATE = "/repos/{owner}/{repo}/languages"
COMMITS_ENDPOINT_TEMPLATE = "/repos/{owner}/{repo}/commits"
COMMIT_ENDPOINT_TEMPLATE = "/repos/{owner}/{repo}/commits/{sha}"
PULLS_ENDPOINT_TEMPLATE = "/repos/{owner}/{repo}/pulls"

AUTH_REPOS_MESSAGE = "Using authenticated /user/repos endpoint"
PUBLIC_REPOS_MESSAGE = "Using public-only /users/%s/repos endpoint"
REPO_RESULT_MESSAGE = "Found %d repositories"
SOURCE_FAILURE_MESSAGE = "GitHub request failed for %s: %s"
UNKNOWN_AUTHOR = "Unknown"

logger = get_logger(__name__)

class GitHubService:

    # This function does initialize service state and the HTTP session.
    # It stores runtime configuration used by API methods.
    def __init__(
        self,
        config: AnalyzerConfig,
        rate_limiter: RateLimiter,
        session: Optional[requests.Session] = None,
        base_url: str = GITHUB_API_BASE_URL,
    ):
        self.config = config
        self.rate_limiter = rate_limiter
        self.base_url = base_url
        self.session = session or requests.Session()
        self.session.headers.update(self.headers())
        self.api_call_count = 0
        self.authenticated_login: Optional[str] = None

    # This function does build request headers for GitHub API calls.
    # It adds auth headers when a token is configured.
    def headers(self) -> Dict[str, str]:
        headers = {"Accept": GITHUB_API_ACCEPT_HEADER}
        if self.config.github_token:
            headers["Authorization"] = f"Bearer {self.config.github_token}"
        return headers

    # This function does perform one rate-limited GET request.
    # It raises SourceError for transport, status, and decoding failures.
    def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        self.rate_limiter.wait_if_needed()
        self.api_call_count += 1
        url = f"{self.base_url}{path}"
        try:
            response = self.session.get(url, params=params, timeout=GITHUB_REQUEST_TIMEOUT_SECONDS)
        except requests.RequestException as exc:
            raise SourceError(f"GitHub request to {path} failed: {exc}") from exc

        self.rate_limiter.update_from_headers(response.headers)
        if response.status_code != 200:
            raise SourceError(
                f"GitHub API error {response.status_code} for {path}",
                status_code=response.status_code,
            )
        try:
            return response.json()
        except ValueError as exc:
            raise SourceError(f"GitHub returned invalid JSON for {path}") from exc

    # This function does page through a list endpoint.
    # It stops on a short page, the page cap, or the item limit.
    def _get_paged(self, path: str, params: Dict[str, Any], limit: Optional[int] = None) -> List[dict]:
        items: List[dict] = []
        page = 1
        while page <= GITHUB_MAX_PAGES:
            data = self._get(path, dict(params, per_page=GITHUB_PER_PAGE, page=page))
            if not isinstance(data, list) or not data:
                break
            items.extend(data)
            if limit is not None and len(items) >= limit:
                return items[:limit]
            if len(data) < GITHUB_PER_PAGE:
                break
            page += 1
        return items

    # This function does fetch the authenticated user's login.
    # Failures propagate because no username can be inferred without it.
    def fetch_user_profile(self) -> dict:
        data = self._get(AUTH_USER_ENDPOINT)
        if not isinstance(data, dict) or not data.get("login"):
            raise SourceError("GitHub user profile response has no login")
        self.authenticated_login = data["login"]
        return data

    # This function does check whether a user is the token owner.
    # The owner login is fetched once; a failed lookup means not the owner.
    def is_token_owner(self, user: str) -> bool:
        if not self.config.github_token:
            return False
        if self.authenticated_login is None:
            try:
                self.fetch_user_profile()
            except SourceError as exc:
                logger.warning(SOURCE_FAILURE_MESSAGE, "authenticated user", exc)
                return False
        return self.authenticated_login.lower() == (user or "").strip().lower()

    # This function does fetch repositories visible for a user.
    # Private repositories are listed only when the user owns the token.
    def list_repositories(self, user: str) -> List[Repository]:
        if self.is_token_owner(user):
            path = AUTH_REPOS_ENDPOINT
            params = {"sort": "updated"}
            logger.info(AUTH_REPOS_MESSAGE)
        else:
            path = USER_REPOS_ENDPOINT_TEMPLATE.format(username=user)
            params = {"sort": "updated", "type": "owner"}
            logger.info(PUBLIC_REPOS_MESSAGE, user)

        try:
            raw_repos = self._get_paged(path, params)
        except SourceError as exc:
            logger.warning(SOURCE_FAILURE_MESSAGE, f"repositories of {user}", exc)
            return []
        logger.debug(REPO_RESULT_MESSAGE, len(raw_repos))
        return [self._to_repository(item) for item in raw_repos if isinstance(item, dict)]

    # This function does fetch the language byte map for a repository.
    # Non-integer or negative counts are dropped.
    def get_language_bytes(self, owner: str, repo: str) -> LanguageBytes:
        try:
            data = self._get(LANGUAGES_ENDPOINT_TEMPLATE.format(owner=owner, repo=repo))
        except SourceError as exc:
            logger.warning(SOURCE_FAILURE_MESSAGE, f"languages of {owner}/{repo}", exc)
            return {}
        if not isinstance(data, dict):
            return {}
        return {
            str(language): int(count)
            for language, count in data.items()
            if isinstance(count, int) and count >= 0
        }

    # This function does fetch recent commits for a repository.
    # Line stats are only requested when commit stats are enabled.
    def list_commits(self, owner: str, repo: str, limit: int) -> List[CommitRecord]:
        if limit <= 0:
            return []
        path = COMMITS_ENDPOINT_TEMPLATE.format(owner=owner, repo=repo)
        try:
            raw_commits = self._get_paged(path, {}, limit=limit)
        except SourceError as exc:
            logger.warning(SOURCE_FAILURE_MESSAGE, f"commits of {owner}/{repo}", exc)
            return []

        commits = []
        for item in raw_commits:
            if not isinstance(item, dict):
                continue
            sha = item.get("sha") or ""
            stats = item.get("stats")
            if stats is None and self.config.fetch_commit_stats and sha:
                stats = self._fetch_commit_stats(owner, repo, sha)
            commits.append(
                CommitRecord(
                    sha=sha,
                    date=((item.get("commit") or {}).get("author") or {}).get("date"),
                    additions=stats.get("additions") if stats else None,
                    deletions=stats.get("deletions") if stats else None,
                )
            )
        return commits

    def _fetch_commit_stats(self, owner: str, repo: str, sha: str) -> Optional[dict]:
        try:
            data = self._get(COMMIT_ENDPOINT_TEMPLATE.format(owner=owner, repo=repo, sha=sha))
        except SourceError as exc:
            logger.debug("No stats for %s/%s@%s: %s", owner, repo, sha[:7], exc)
            return None
        stats = data.get("stats") if isinstance(data, dict) else None
        return stats if isinstance(stats, dict) else None

    # This function does fetch recent pull requests in any state.
    # List responses carry no line counts, so those stay unset unless present.
    def list_pull_requests(self, owner: str, repo: str, limit: int) -> List[PullRequestRecord]:
        if limit <= 0:
            return []
        path = PULLS_ENDPOINT_TEMPLATE.format(owner=owner, repo=repo)
        try:
            raw_pulls = self._get_paged(path, {"state": "all"}, limit=limit)
        except SourceError as exc:
            logger.warning(SOURCE_FAILURE_MESSAGE, f"pull requests of {owner}/{repo}", exc)
            return []

        return [
            PullRequestRecord(
                number=item.get("number") or 0,
                author=(item.get("user") or {}).get("login") or UNKNOWN_AUTHOR,
                additions=item.get("additions"),
                deletions=item.get("deletions"),
            )
            for item in raw_pulls
            if isinstance(item, dict)
        ]

    @staticmethod
    def _to_repository(item: dict) -> Repository:
        return Repository(
            name=item.get("name") or "",
            owner=(item.get("owner") or {}).get("login") or "",
            declared_language=item.get("language") or None,
            is_fork=bool(item.get("fork")),
            html_url=item.get("html_url") or "",
            stars=item.get("stargazers_count") or 0,
            forks=item.get("forks_count") or 0,
            pushed_at=item.get("pushed_at"),
        )
