#------------------------------------------------------------
#                   contribution_service.py
#        Turns per-repository commits, pull requests and
#         language bytes into per-language contribution
#                           metrics.

import math
from typing import Dict, Iterable, List, Mapping, Optional, Sequence
from ..logger import get_logger
from ..models import (
    CommitRecord,
    ContributionMetrics,
    LanguageBytes,
    PullRequestRecord,
    Repository,
)

logger = get_logger(__name__)

# Halves round up, matching how the counts have always been reported.
def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))

# This function does allocate part of a repository total to one language.
# A positive share of a positive total never rounds down to zero.
def allocate_by_share(total: int, share: float) -> int:
    if total <= 0 or share <= 0:
        return 0
    return max(1, round_half_up(total * share))

# This function does compute each language's byte share for a repository.
# It returns an empty mapping when there are no positive byte counts.
def language_shares(language_bytes: Mapping[str, int]) -> Dict[str, float]:
    positive = {
        language: count
        for language, count in (language_bytes or {}).items()
        if language and isinstance(count, (int, float)) and count > 0
    }
    total = sum(positive.values())
    if total <= 0:
        return {}
    return {language: count / total for language, count in positive.items()}

# This function does estimate one repository's per-language contribution.
# Commits, pull requests and line volume are split by byte share. The volume
# unit is fixed for the whole run: line deltas when use_line_stats is set,
# otherwise each language's byte count.
def analyze_repository(
    language_bytes: Mapping[str, int],
    commits: Sequence[CommitRecord],
    pull_requests: Sequence[PullRequestRecord],
    days_since_last_activity: Optional[int] = None,
    use_line_stats: bool = False,
) -> Dict[str, ContributionMetrics]:
    shares = language_shares(language_bytes)
    if not shares:
        return {}

    commits = commits or []
    pull_requests = pull_requests or []
    commit_volume = sum(commit.line_changes for commit in commits)
    pull_request_volume = sum(pull_request.line_changes for pull_request in pull_requests)
    days = max(0, int(days_since_last_activity or 0))

    results: Dict[str, ContributionMetrics] = {}
    for language, share in shares.items():
        if use_line_stats:
            # commits without stats count as 0 lines
            code_volume = round_half_up(commit_volume * share)
            code_volume += round_half_up(pull_request_volume * share)
        else:
            code_volume = int(language_bytes[language])

        results[language] = ContributionMetrics(
            commit_count=allocate_by_share(len(commits), share),
            pull_request_count=allocate_by_share(len(pull_requests), share),
            code_volume=code_volume,
            repository_count=1,
            days_since_last_activity=days,
            code_volume_from_bytes=not use_line_stats,
        )
    return results

# This function does merge per-repository results into one mapping.
# Counts are summed per exact language key in first-seen order, and the
# most recent activity (smallest day count) is kept.
def merge_contributions(
    per_repository: Iterable[Mapping[str, ContributionMetrics]],
) -> Dict[str, ContributionMetrics]:
    merged: Dict[str, ContributionMetrics] = {}
    for contribution in per_repository:
        for language, metrics in contribution.items():
            existing = merged.get(language)
            if existing is None:
                merged[language] = ContributionMetrics(
                    commit_count=metrics.commit_count,
                    pull_request_count=metrics.pull_request_count,
                    code_volume=metrics.code_volume,
                    repository_count=metrics.repository_count,
                    days_since_last_activity=metrics.days_since_last_activity,
                    code_volume_from_bytes=metrics.code_volume_from_bytes,
                )
                continue
            existing.commit_count += metrics.commit_count
            existing.pull_request_count += metrics.pull_request_count
            existing.code_volume += metrics.code_volume
            existing.repository_count += metrics.repository_count
            existing.days_since_last_activity = min(
                existing.days_since_last_activity, metrics.days_since_last_activity
            )
            existing.code_volume_from_bytes = existing.code_volume_from_bytes or metrics.code_volume_from_bytes
    return merged

# This function does aggregate fetched data for every repository in order.
# Lookups are keyed by full repository name; missing data counts as empty.
# One volume unit applies to every repository so totals stay comparable.
def aggregate_contributions(
    repositories: Sequence[Repository],
    fetched_commits: Mapping[str, Sequence[CommitRecord]],
    fetched_prs: Mapping[str, Sequence[PullRequestRecord]],
    language_byte_maps: Mapping[str, LanguageBytes],
    activity_days: Optional[Mapping[str, Optional[int]]] = None,
    use_line_stats: bool = False,
) -> Dict[str, ContributionMetrics]:
    activity_days = activity_days or {}
    per_repository: List[Dict[str, ContributionMetrics]] = []
    for repository in repositories:
        key = repository.full_name
        contribution = analyze_repository(
            language_byte_maps.get(key) or {},
            fetched_commits.get(key) or [],
            fetched_prs.get(key) or [],
            activity_days.get(key),
            use_line_stats,
        )
        if not contribution:
            logger.debug("No language data for %s; skipping", key)
        per_repository.append(contribution)
    return merge_contributions(per_repository)
