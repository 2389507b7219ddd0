#------------------------------------------------------------
#                      console_view.py
#             Renders plain-text blocks for skill
#               recommendations and run summary.

from typing import List, Sequence
from ..config import DEFAULT_RECOMMENDATION_DISPLAY_LIMIT
from ..models import AnalysisSummary, SkillRecommendation
from ..services.confidence_service import as_percentage

RULE = "-" * 60
BAR_WIDTH = 10
BAR_FILLED = "#"
BAR_EMPTY = "."
SKILL_NAME_WIDTH = 20
RECOMMENDATIONS_TITLE = "  Skill Recommendations"
SUMMARY_TITLE = "  Summary"
NO_RECOMMENDATIONS_MESSAGE = "  No recommendations found."
RECOMMENDATION_LINE_TEMPLATE = "  {name} {bar} {percent}%"
DETAIL_LINE_TEMPLATE = "  {indent}{details}"
AI_LINE_TEMPLATE = "  {indent}AI: {status} ({percent}%)"
SUMMARY_LINE_TEMPLATE = "  {label:<17}{value}"
VOLUME_FROM_BYTES_NOTE = "code volume estimated from bytes"


def render_bar(confidence: float) -> str:
    filled = max(0, min(BAR_WIDTH, int(round(confidence * BAR_WIDTH))))
    return BAR_FILLED * filled + BAR_EMPTY * (BAR_WIDTH - filled)


def _section_header(title: str) -> List[str]:
    return ["", RULE, title, RULE, ""]

# This function does list the metrics behind one recommendation.
# Zero-valued metrics are left out.
def render_metric_details(recommendation: SkillRecommendation) -> str:
    metrics = recommendation.metrics
    parts = []
    if metrics.repository_count > 0:
        parts.append(f"{metrics.repository_count} repos")
    if metrics.commit_count > 0:
        parts.append(f"{metrics.commit_count} commits")
    if metrics.pull_request_count > 0:
        parts.append(f"{metrics.pull_request_count} PRs")
    if metrics.code_volume_from_bytes:
        parts.append(VOLUME_FROM_BYTES_NOTE)
    return " | ".join(parts)

# This function does render the ranked recommendation block.
# Only the first ``limit`` recommendations are shown.
def render_recommendations(
    recommendations: Sequence[SkillRecommendation],
    limit: int = DEFAULT_RECOMMENDATION_DISPLAY_LIMIT,
) -> str:
    lines = _section_header(RECOMMENDATIONS_TITLE)
    if not recommendations:
        lines.append(NO_RECOMMENDATIONS_MESSAGE)
        return "\n".join(lines)

    indent = " " * (SKILL_NAME_WIDTH + 1)
    for recommendation in recommendations[:limit]:
        lines.append(
            RECOMMENDATION_LINE_TEMPLATE.format(
                name=recommendation.skill.name.ljust(SKILL_NAME_WIDTH),
                bar=render_bar(recommendation.confidence),
                percent=as_percentage(recommendation.confidence),
            )
        )
        details = render_metric_details(recommendation)
        if details:
            lines.append(DETAIL_LINE_TEMPLATE.format(indent=indent, details=details))
        if recommendation.ai_verified is not None:
            lines.append(
                AI_LINE_TEMPLATE.format(
                    indent=indent,
                    status="verified" if recommendation.ai_verified else "not verified",
                    percent=as_percentage(recommendation.ai_confidence or 0.0),
                )
            )
    return "\n".join(lines)


def render_summary(summary: AnalysisSummary) -> str:
    lines = _section_header(SUMMARY_TITLE)
    rows = [
        ("User:", summary.username),
        ("Repositories:", summary.repositories_scanned),
        ("Commits:", summary.commits_analyzed),
        ("Pull requests:", summary.pull_requests_analyzed),
        ("Skills:", len(summary.recommendations)),
        ("API calls:", summary.api_calls_total),
        ("Rate limit left:", summary.rate_limit_remaining),
        ("Time:", f"{round(summary.elapsed_seconds)}s"),
    ]
    lines.extend(SUMMARY_LINE_TEMPLATE.format(label=label, value=value) for label, value in rows)
    lines.append("")
    return "\n".join(lines)
