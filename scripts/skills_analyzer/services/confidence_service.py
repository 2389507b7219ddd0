#------------------------------------------------------------
#                    confidence_service.py
#        Scores contribution metrics with fixed point
#                buckets and a recency penalty.

from typing import Sequence, Tuple
from ..models import ContributionMetrics

MAX_POINTS = 100

# (minimum value, points) pairs, highest threshold first.
COMMIT_BUCKETS: Sequence[Tuple[int, int]] = ((100, 40), (50, 30), (20, 20), (5, 10))
PULL_REQUEST_BUCKETS: Sequence[Tuple[int, int]] = ((20, 25), (10, 20), (5, 15), (1, 10))
CODE_VOLUME_BUCKETS: Sequence[Tuple[int, int]] = ((10000, 20), (5000, 15), (1000, 10), (100, 5))
REPOSITORY_BUCKETS: Sequence[Tuple[int, int]] = ((10, 10), (5, 7), (2, 5), (1, 3))

# (days strictly greater than, points deducted) pairs.
RECENCY_PENALTIES: Sequence[Tuple[int, int]] = ((365, 5), (180, 3), (90, 1))


def bucket_points(value: int, buckets: Sequence[Tuple[int, int]]) -> int:
    for threshold, points in buckets:
        if value >= threshold:
            return points
    return 0


def recency_penalty(days_since_last_activity: int) -> int:
    for threshold, penalty in RECENCY_PENALTIES:
        if days_since_last_activity > threshold:
            return penalty
    return 0

# This function does compute the raw score out of 100.
# The result is clamped so it can be shown directly as a percentage.
def confidence_points(metrics: ContributionMetrics) -> int:
    points = (
        bucket_points(metrics.commit_count, COMMIT_BUCKETS)
        + bucket_points(metrics.pull_request_count, PULL_REQUEST_BUCKETS)
        + bucket_points(metrics.code_volume, CODE_VOLUME_BUCKETS)
        + bucket_points(metrics.repository_count, REPOSITORY_BUCKETS)
    )
    points -= recency_penalty(metrics.days_since_last_activity)
    return max(0, min(MAX_POINTS, points))

# Canonical 0-1 scale.
def calculate_confidence(metrics: ContributionMetrics) -> float:
    return confidence_points(metrics) / MAX_POINTS


def as_percentage(confidence: float) -> int:
    return int(round(max(0.0, min(1.0, confidence)) * MAX_POINTS))
