import pytest

from skills_analyzer.models import ContributionMetrics
from skills_analyzer.services.confidence_service import (
    as_percentage,
    bucket_points,
    calculate_confidence,
    confidence_points,
    COMMIT_BUCKETS,
    recency_penalty,
)


def _metrics(**kwargs):
    return ContributionMetrics(**kwargs)


def test_maximum_metrics_score_full_confidence():
    metrics = _metrics(
        commit_count=100,
        pull_request_count=20,
        code_volume=10000,
        repository_count=10,
        days_since_last_activity=90,
    )
    assert confidence_points(metrics) == 100
    assert calculate_confidence(metrics) == 1.0


def test_zero_metrics_score_zero():
    assert calculate_confidence(ContributionMetrics()) == 0.0


@pytest.mark.parametrize(
    "value, expected",
    [(0, 0), (4, 0), (5, 10), (19, 10), (20, 20), (50, 30), (99, 30), (100, 40), (5000, 40)],
)
def test_commit_bucket_boundaries(value, expected):
    assert bucket_points(value, COMMIT_BUCKETS) == expected


def test_each_bucket_contributes_expected_points():
    metrics = _metrics(commit_count=20, pull_request_count=5, code_volume=1000, repository_count=2)
    # 20 + 15 + 10 + 5
    assert confidence_points(metrics) == 50
    assert calculate_confidence(metrics) == pytest.approx(0.5)


@pytest.mark.parametrize("days, penalty", [(0, 0), (90, 0), (91, 1), (180, 1), (181, 3), (365, 3), (366, 5)])
def test_recency_penalty_thresholds(days, penalty):
    assert recency_penalty(days) == penalty


def test_penalty_never_pushes_below_zero():
    metrics = _metrics(repository_count=1, days_since_last_activity=1000)
    assert confidence_points(metrics) == 0
    assert calculate_confidence(metrics) == 0.0


@pytest.mark.parametrize("field", ["commit_count", "pull_request_count", "code_volume", "repository_count"])
def test_confidence_is_monotonic_in_each_count(field):
    previous = -1.0
    for value in [0, 1, 2, 5, 10, 20, 50, 100, 1000, 5000, 10000, 20000]:
        score = calculate_confidence(_metrics(**{field: value, "days_since_last_activity": 30}))
        assert score >= previous
        assert 0.0 <= score <= 1.0
        previous = score


def test_confidence_non_increasing_with_inactivity():
    base = dict(commit_count=60, pull_request_count=3, code_volume=2000, repository_count=4)
    scores = [
        calculate_confidence(_metrics(days_since_last_activity=days, **base))
        for days in [0, 90, 91, 181, 366, 2000]
    ]
    assert scores == sorted(scores, reverse=True)


def test_identical_metrics_give_identical_scores():
    metrics = _metrics(commit_count=33, pull_request_count=7, code_volume=4321, repository_count=3)
    assert calculate_confidence(metrics) == calculate_confidence(ContributionMetrics(**vars(metrics)))


def test_as_percentage_clamps_and_rounds():
    assert as_percentage(0.456) == 46
    assert as_percentage(1.7) == 100
    assert as_percentage(-0.2) == 0
