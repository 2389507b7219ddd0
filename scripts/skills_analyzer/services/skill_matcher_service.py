#------------------------------------------------------------
#                   skill_matcher_service.py
#       Joins per-language metrics against the skill catalog
#           and ranks the resulting recommendations.

from dataclasses import replace
from typing import Dict, Iterable, List, Mapping, Optional, Sequence
from ..logger import get_logger
from ..models import (
    CommitRecord,
    ContributionMetrics,
    LanguageBytes,
    PullRequestRecord,
    Repository,
    SkillRecommendation,
    SkillRecord,
)
from .catalog_service import SkillCatalog
from .confidence_service import calculate_confidence
from .contribution_service import aggregate_contributions
from .evidence_service import build_evidence

NO_SKILL_MESSAGE = "No catalog skill matches language %r; skipping"
MATCHED_SKILL_MESSAGE = "Matched language %r to skill %r (confidence %.2f)"

logger = get_logger(__name__)

class SkillMatcher:

    # This function does store the catalog and language mapping rules.
    # Ignored languages are compared case-insensitively.
    def __init__(
        self,
        catalog: SkillCatalog,
        language_aliases: Optional[Mapping[str, str]] = None,
        ignored_languages: Optional[Iterable[str]] = None,
    ):
        self.catalog = catalog
        self.language_aliases = dict(language_aliases or {})
        self.ignored_languages = {item.strip().lower() for item in (ignored_languages or []) if item}

    # This function does find the catalog skill for a language label.
    # A configured alias is tried before the label itself.
    def resolve_skill(self, language: str) -> Optional[SkillRecord]:
        candidates = []
        alias = self.language_aliases.get(language)
        if alias:
            candidates.append(alias)
        candidates.append(language)

        for candidate in candidates:
            skill = self.catalog.find_skill_by_name(candidate)
            if skill:
                return skill
        for candidate in candidates:
            skill = self.catalog.find_skill_containing(candidate)
            if skill:
                return skill
        return None

    # This function does build ranked recommendations for matched languages.
    # Ties keep the order languages were first seen in the metrics mapping.
    def match_skills(
        self,
        metrics_by_language: Mapping[str, ContributionMetrics],
        repositories: Sequence[Repository],
    ) -> List[SkillRecommendation]:
        recommendations: List[SkillRecommendation] = []
        for language, metrics in metrics_by_language.items():
            if language.strip().lower() in self.ignored_languages:
                continue
            skill = self.resolve_skill(language)
            if skill is None:
                logger.debug(NO_SKILL_MESSAGE, language)
                continue

            snapshot = replace(metrics)
            confidence = calculate_confidence(snapshot)
            logger.debug(MATCHED_SKILL_MESSAGE, language, skill.name, confidence)
            recommendations.append(
                SkillRecommendation(
                    skill=skill,
                    confidence=confidence,
                    evidence=build_evidence(repositories, language, snapshot),
                    metrics=snapshot,
                    language=language,
                )
            )

        recommendations.sort(key=lambda item: item.confidence, reverse=True)
        return recommendations

# This function does run the full scoring pipeline over fetched data.
# It aggregates contributions first and then matches them to skills.
def run_analysis(
    repositories: Sequence[Repository],
    fetched_commits: Mapping[str, Sequence[CommitRecord]],
    fetched_prs: Mapping[str, Sequence[PullRequestRecord]],
    language_byte_maps: Mapping[str, LanguageBytes],
    catalog: SkillCatalog,
    activity_days: Optional[Mapping[str, Optional[int]]] = None,
    language_aliases: Optional[Mapping[str, str]] = None,
    ignored_languages: Optional[Iterable[str]] = None,
    use_line_stats: bool = False,
) -> List[SkillRecommendation]:
    metrics_by_language: Dict[str, ContributionMetrics] = aggregate_contributions(
        repositories,
        fetched_commits,
        fetched_prs,
        language_byte_maps,
        activity_days,
        use_line_stats,
    )
    matcher = SkillMatcher(catalog, language_aliases, ignored_languages)
    return matcher.match_skills(metrics_by_language, repositories)
