#------------------------------------------------------------
#                     evidence_service.py
#        Builds the bounded list of facts shown next to
#                   each skill recommendation.

from typing import List, Sequence, Tuple
from ..config import MAX_REPOSITORY_EVIDENCE
from ..models import (
    EVIDENCE_COMMITS,
    EVIDENCE_REPOSITORY,
    ContributionMetrics,
    Evidence,
    Repository,
)

REPOSITORY_EVIDENCE_TEMPLATE = "Repository: {name}"
COMMITS_EVIDENCE_TEMPLATE = "{count} commits in {language}"

# This function does select repositories tagged with a primary language.
# It matches the declared language exactly and keeps source order.
def repositories_for_language(
    repositories: Sequence[Repository],
    language: str,
    limit: int = MAX_REPOSITORY_EVIDENCE,
) -> List[Repository]:
    matching = [repo for repo in repositories if repo.declared_language == language]
    return matching[:max(0, limit)]

# This function does build evidence entries for one language.
# Repository entries come first, followed by the commit total when nonzero.
def build_evidence(
    repositories: Sequence[Repository],
    language: str,
    metrics: ContributionMetrics,
    limit: int = MAX_REPOSITORY_EVIDENCE,
) -> Tuple[Evidence, ...]:
    evidence = [
        Evidence(
            kind=EVIDENCE_REPOSITORY,
            description=REPOSITORY_EVIDENCE_TEMPLATE.format(name=repo.name),
            url=repo.html_url or None,
            metrics={"stars": repo.stars, "forks": repo.forks},
        )
        for repo in repositories_for_language(repositories, language, limit)
    ]

    if metrics.commit_count > 0:
        evidence.append(
            Evidence(
                kind=EVIDENCE_COMMITS,
                description=COMMITS_EVIDENCE_TEMPLATE.format(count=metrics.commit_count, language=language),
                metrics={"count": metrics.commit_count},
            )
        )

    return tuple(evidence)
