#------------------------------------------------------------
#                          models.py
#     Defines dataclasses used by the analysis pipeline.

from dataclasses import dataclass, field
from typing import Dict, Optional, Set, Tuple
from .config import (
    DEFAULT_MAX_COMMITS_PER_REPO,
    DEFAULT_MAX_PRS_PER_REPO,
    DEFAULT_MAX_REPOS,
    DEFAULT_RECOMMENDATION_DISPLAY_LIMIT,
    DEFAULT_TOPCODER_API_URL,
)

LanguageBytes = Dict[str, int]

EVIDENCE_REPOSITORY = "repository"
EVIDENCE_COMMITS = "commits"
EVIDENCE_PULL_REQUESTS = "pull_requests"
EVIDENCE_LANGUAGE = "language"
EVIDENCE_KINDS = (EVIDENCE_REPOSITORY, EVIDENCE_COMMITS, EVIDENCE_PULL_REQUESTS, EVIDENCE_LANGUAGE)

@dataclass
class AnalyzerConfig:
    github_username: str
    github_token: str
    topcoder_api_url: str = DEFAULT_TOPCODER_API_URL
    max_repos: int = DEFAULT_MAX_REPOS
    max_commits_per_repo: int = DEFAULT_MAX_COMMITS_PER_REPO
    max_prs_per_repo: int = DEFAULT_MAX_PRS_PER_REPO
    include_forks: bool = False
    fetch_commit_stats: bool = False
    ai_enabled: bool = False
    openai_api_key: Optional[str] = None
    display_limit: int = DEFAULT_RECOMMENDATION_DISPLAY_LIMIT
    excluded_repos: Set[str] = field(default_factory=set)

@dataclass(frozen=True)
class Repository:
    name: str
    owner: str
    declared_language: Optional[str] = None
    is_fork: bool = False
    html_url: str = ""
    stars: int = 0
    forks: int = 0
    pushed_at: Optional[str] = None

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"

@dataclass(frozen=True)
class CommitRecord:
    sha: str = ""
    date: Optional[str] = None
    additions: Optional[int] = None
    deletions: Optional[int] = None

    @property
    def line_changes(self) -> int:
        return (self.additions or 0) + (self.deletions or 0)

@dataclass(frozen=True)
class PullRequestRecord:
    number: int = 0
    author: str = ""
    additions: Optional[int] = None
    deletions: Optional[int] = None

    @property
    def line_changes(self) -> int:
        return (self.additions or 0) + (self.deletions or 0)

# Per-language contribution totals. code_volume holds line deltas or, when the
# run has no commit stats, byte counts; code_volume_from_bytes marks the latter.
@dataclass
class ContributionMetrics:
    commit_count: int = 0
    pull_request_count: int = 0
    code_volume: int = 0
    repository_count: int = 0
    days_since_last_activity: int = 0
    code_volume_from_bytes: bool = False

@dataclass(frozen=True)
class SkillRecord:
    id: str
    name: str
    category: Optional[str] = None

@dataclass(frozen=True)
class Evidence:
    kind: str
    description: str
    url: Optional[str] = None
    metrics: Optional[Dict[str, float]] = None

@dataclass(frozen=True)
class SkillRecommendation:
    skill: SkillRecord
    confidence: float
    evidence: Tuple[Evidence, ...]
    metrics: ContributionMetrics
    language: str = ""
    ai_verified: Optional[bool] = None
    ai_confidence: Optional[float] = None

@dataclass(frozen=True)
class VerificationResult:
    verified: bool
    confidence: float
    reasoning: str = ""

@dataclass
class AnalysisSummary:
    username: str
    repositories_scanned: int = 0
    commits_analyzed: int = 0
    pull_requests_analyzed: int = 0
    api_calls_total: int = 0
    rate_limit_remaining: int = 0
    elapsed_seconds: float = 0.0
    recommendations: Tuple[SkillRecommendation, ...] = ()
