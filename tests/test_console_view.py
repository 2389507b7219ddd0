from skills_analyzer.models import AnalysisSummary, ContributionMetrics, SkillRecommendation, SkillRecord
from skills_analyzer.views.console_view import (
    NO_RECOMMENDATIONS_MESSAGE,
    render_bar,
    render_metric_details,
    render_recommendations,
    render_summary,
)


def _recommendation(name, confidence, **metrics):
    return SkillRecommendation(
        skill=SkillRecord(id=name, name=name),
        confidence=confidence,
        evidence=(),
        metrics=ContributionMetrics(**metrics),
    )


def test_render_bar():
    assert render_bar(0.0) == ".........."
    assert render_bar(0.43) == "####......"
    assert render_bar(1.0) == "##########"


def test_render_recommendations_empty():
    assert NO_RECOMMENDATIONS_MESSAGE in render_recommendations([])


def test_render_recommendations_lines_and_limit():
    recommendations = [
        _recommendation("Python", 0.85, repository_count=4, commit_count=120, pull_request_count=6),
        _recommendation("Go", 0.1),
        _recommendation("Rust", 0.05),
    ]

    text = render_recommendations(recommendations, limit=2)

    assert "Python" in text
    assert "85%" in text
    assert "4 repos | 120 commits | 6 PRs" in text
    assert "Go" in text
    assert "Rust" not in text


def test_metric_details_mark_byte_estimates():
    recommendation = _recommendation("Java", 0.3, commit_count=3, code_volume_from_bytes=True)
    assert render_metric_details(recommendation) == "3 commits | code volume estimated from bytes"


def test_render_ai_line_when_verified():
    recommendation = SkillRecommendation(
        skill=SkillRecord(id="1", name="Python"),
        confidence=0.5,
        evidence=(),
        metrics=ContributionMetrics(),
        ai_verified=True,
        ai_confidence=0.8,
    )
    assert "AI: verified (80%)" in render_recommendations([recommendation])


def test_render_summary():
    summary = AnalysisSummary(
        username="octo",
        repositories_scanned=3,
        commits_analyzed=40,
        pull_requests_analyzed=5,
        api_calls_total=12,
        rate_limit_remaining=4988,
        elapsed_seconds=2.4,
        recommendations=(_recommendation("Go", 0.1),),
    )
    text = render_summary(summary)

    assert "octo" in text
    assert "4988" in text
    assert "2s" in text
    lines = [line for line in text.splitlines() if line.strip().startswith("Skills:")]
    assert lines and lines[0].strip().endswith("1")
