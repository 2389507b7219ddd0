#------------------------------------------------------------
#                        controller.py
#           Coordinates repository fetching, skill
#               scoring, and report rendering.

import time
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional, Sequence
from dateutil import parser as dtparse
from .config import (
    MISSING_IDENTITY_MESSAGE,
    load_default_skills,
    load_ignored_languages,
    load_language_aliases,
)
from .errors import ConfigurationError, SourceError
from .logger import get_logger
from .models import (
    AnalysisSummary,
    AnalyzerConfig,
    CommitRecord,
    LanguageBytes,
    PullRequestRecord,
    Repository,
)
from .services.catalog_service import SkillCatalog, TopcoderService, to_skill_records
from .services.github_service import GitHubService
from .services.rate_limiter import RateLimiter
from .services.skill_matcher_service import run_analysis
from .services.verifier_service import AIVerifier
from .views.console_view import render_recommendations, render_summary

logger = get_logger(__name__)

# This function does parse an ISO timestamp from the GitHub API.
# It returns None for empty or unparseable values.
def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    try:
        parsed = dtparse.isoparse(value)
    except (ValueError, OverflowError):
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed

# This function does compute whole days since a repository's last activity.
# The newest commit date wins; the push date is the fallback.
def days_since_last_activity(
    repository: Repository,
    commits: Sequence[CommitRecord],
    now: datetime,
) -> Optional[int]:
    dates = [parsed for parsed in (parse_timestamp(commit.date) for commit in commits) if parsed]
    latest = max(dates) if dates else parse_timestamp(repository.pushed_at)
    if latest is None:
        return None
    return max(0, (now - latest).days)

# This function does resolve which GitHub user to analyze.
# Without a configured username the token owner's login is used.
def resolve_username(config: AnalyzerConfig, github_service: GitHubService) -> str:
    if config.github_username:
        return config.github_username
    if not config.github_token:
        raise ConfigurationError(MISSING_IDENTITY_MESSAGE)
    try:
        return github_service.fetch_user_profile()["login"]
    except SourceError as exc:
        raise ConfigurationError(f"Could not resolve GitHub user from token: {exc}") from exc

# This function does filter and cap the repositories to analyze.
# Forks and excluded names are dropped before the cap is applied.
def select_repositories(repositories: Sequence[Repository], config: AnalyzerConfig) -> List[Repository]:
    selected = []
    for repo in repositories:
        if repo.is_fork and not config.include_forks:
            logger.debug("Skipping fork: %s", repo.full_name)
            continue
        if repo.name.strip().lower() in config.excluded_repos:
            logger.info("Skipping excluded repo: %s", repo.name)
            continue
        selected.append(repo)
    return selected[:max(0, config.max_repos)]


def build_catalog(config: AnalyzerConfig) -> SkillCatalog:
    topcoder_service = TopcoderService(config.topcoder_api_url)
    return SkillCatalog(topcoder_service.fetch_skills, to_skill_records(load_default_skills()))

# This function does execute the full analysis workflow end-to-end.
# It fetches data repository by repository, scores skills, and prints the report.
def run_skills_analysis(
    config: AnalyzerConfig,
    github_service: Optional[GitHubService] = None,
    catalog: Optional[SkillCatalog] = None,
    verifier: Optional[AIVerifier] = None,
    now: Optional[datetime] = None,
    output: Callable[[str], None] = print,
) -> AnalysisSummary:
    started = time.monotonic()
    now = now or datetime.now(timezone.utc)

    if not config.github_token and not config.github_username:
        raise ConfigurationError(MISSING_IDENTITY_MESSAGE)
    if not config.github_token:
        logger.warning("No GITHUB_TOKEN found - only public repos will be analyzed")

    github_service = github_service or GitHubService(config, RateLimiter())
    catalog = catalog or build_catalog(config)
    language_aliases = load_language_aliases()
    ignored_languages = load_ignored_languages()
    if language_aliases:
        logger.info("Loaded language aliases: %d", len(language_aliases))
    if ignored_languages:
        logger.info("Loaded ignored languages: %d", len(ignored_languages))

    username = resolve_username(config, github_service)
    logger.info("Fetching repositories for %s", username)
    all_repos = github_service.list_repositories(username)
    repositories = select_repositories(all_repos, config)
    logger.info("Analyzing %d of %d repositories", len(repositories), len(all_repos))

    language_byte_maps: Dict[str, LanguageBytes] = {}
    fetched_commits: Dict[str, List[CommitRecord]] = {}
    fetched_prs: Dict[str, List[PullRequestRecord]] = {}
    activity_days: Dict[str, Optional[int]] = {}

    for index, repo in enumerate(repositories, start=1):
        key = repo.full_name
        logger.info("Analyzing %s (%d/%d)", key, index, len(repositories))
        language_byte_maps[key] = github_service.get_language_bytes(repo.owner, repo.name)
        fetched_commits[key] = github_service.list_commits(repo.owner, repo.name, config.max_commits_per_repo)
        fetched_prs[key] = github_service.list_pull_requests(repo.owner, repo.name, config.max_prs_per_repo)
        activity_days[key] = days_since_last_activity(repo, fetched_commits[key], now)

    recommendations = run_analysis(
        repositories,
        fetched_commits,
        fetched_prs,
        language_byte_maps,
        catalog,
        activity_days=activity_days,
        language_aliases=language_aliases,
        ignored_languages=ignored_languages,
        use_line_stats=config.fetch_commit_stats,
    )
    logger.info("Matched %d skills", len(recommendations))

    verifier = verifier or AIVerifier(config.openai_api_key, config.ai_enabled)
    if verifier.is_enabled():
        logger.info("Running AI verification")
        recommendations = verifier.apply_verification(recommendations)

    summary = AnalysisSummary(
        username=username,
        repositories_scanned=len(repositories),
        commits_analyzed=sum(len(items) for items in fetched_commits.values()),
        pull_requests_analyzed=sum(len(items) for items in fetched_prs.values()),
        api_calls_total=github_service.api_call_count,
        rate_limit_remaining=github_service.rate_limiter.remaining,
        elapsed_seconds=time.monotonic() - started,
        recommendations=tuple(recommendations),
    )

    output(render_recommendations(recommendations, config.display_limit))
    output(render_summary(summary))
    return summary
