"""
Similarity Service
Reduces a submission's similarity against prior submissions to a plagiarism risk
"""

import logging
import math
from typing import Mapping, Sequence

from assignment_eval.services.vectorizer import vectorize

logger = logging.getLogger(__name__)


def cosine_similarity(v1: Mapping[str, float], v2: Mapping[str, float]) -> float:
    """
    Cosine similarity of two sparse term vectors.

    Terms missing from one vector count as weight 0. A zero-magnitude vector
    gives 0.0 rather than NaN.
    """
    dot = 0.0
    magnitude1 = 0.0
    magnitude2 = 0.0
    for term in set(v1) | set(v2):
        w1 = v1.get(term, 0.0)
        w2 = v2.get(term, 0.0)
        dot += w1 * w2
        magnitude1 += w1 * w1
        magnitude2 += w2 * w2

    if magnitude1 == 0 or magnitude2 == 0:
        return 0.0
    return dot / (math.sqrt(magnitude1) * math.sqrt(magnitude2))


def similarity_to_percent(similarity: float) -> int:
    """Round half-up to an integer percentage in [0, 100]."""
    percent = math.floor(similarity * 100 + 0.5)
    return max(0, min(100, percent))


def calculate_plagiarism_risk(content: str, corpus: Sequence[str]) -> int:
    """
    Plagiarism risk of `content` against previously evaluated submissions.

    The single closest prior submission decides the risk (max, not mean).

    Args:
        content: text of the submission under evaluation
        corpus: texts of the other evaluated submissions for the assignment

    Returns:
        Integer percentage 0-100; 0 for an empty corpus
    """
    if not corpus:
        return 0

    target, *others = vectorize([content, *corpus]).as_dicts()
    max_similarity = max(cosine_similarity(target, other) for other in others)

    risk = similarity_to_percent(max_similarity)
    logger.debug(
        f"Plagiarism risk {risk}% against {len(corpus)} prior submission(s) "
        f"(max similarity={max_similarity:.4f})"
    )
    return risk


def format_risk(risk: int) -> str:
    return f"{risk}%"
