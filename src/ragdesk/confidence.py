"""Confidence scoring over retrieval similarity scores."""

import logging
from collections.abc import Sequence

import numpy as np

from ragdesk.models import ConfidenceMetrics, RetrievedDocument
from ragdesk.models.results import RelevanceTier

logger = logging.getLogger(__name__)

# Average similarity at which the similarity term saturates
SIMILARITY_SATURATION = 0.8
# Document count at which the coverage term saturates
COUNT_SATURATION = 3
VARIANCE_PENALTY = 10

SIMILARITY_WEIGHT = 0.5
CONSISTENCY_WEIGHT = 0.3
COVERAGE_WEIGHT = 0.2


def score(documents: Sequence[RetrievedDocument]) -> ConfidenceMetrics:
    """Compute confidence metrics for one retrieval.

    Only positive similarity scores feed the statistics; document_count is
    the number of retrieved documents. Input order does not matter.

    overall = 0.5 * min(avg / 0.8, 1)
            + 0.3 * max(0, 1 - variance * 10)
            + 0.2 * min(count / 3, 1)
    """
    scores = np.sort(
        np.array([d.similarity_score for d in documents if d.similarity_score > 0], dtype=float)
    )
    if scores.size == 0:
        return ConfidenceMetrics()

    avg = float(np.mean(scores))
    variance = float(np.var(scores))
    count = len(documents)

    overall = (
        SIMILARITY_WEIGHT * min(avg / SIMILARITY_SATURATION, 1.0)
        + CONSISTENCY_WEIGHT * max(0.0, 1.0 - variance * VARIANCE_PENALTY)
        + COVERAGE_WEIGHT * min(count / COUNT_SATURATION, 1.0)
    )

    metrics = ConfidenceMetrics(
        avg_similarity=avg,
        max_similarity=float(scores[-1]),
        min_similarity=float(scores[0]),
        score_variance=variance,
        document_count=count,
        overall_confidence=min(max(overall, 0.0), 1.0),
    )
    logger.debug("Confidence metrics: %s", metrics)
    return metrics


def relevance_tier(similarity: float) -> RelevanceTier:
    """Bucket a similarity score for display."""
    if similarity > 0.7:
        return "High"
    if similarity > 0.5:
        return "Medium"
    return "Low"
