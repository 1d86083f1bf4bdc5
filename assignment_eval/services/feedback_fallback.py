"""
Rule-based Feedback
Deterministic scorer used when the Gemini evaluator is unavailable
"""

import re
from typing import List, Tuple

from assignment_eval.schemas.feedback import FeedbackResult

STOP_WORDS = frozenset([
    'a', 'an', 'the', 'and', 'or', 'but', 'in', 'on', 'at', 'to', 'for',
    'of', 'with', 'by', 'from', 'is', 'are', 'was', 'were', 'be', 'been',
    'being', 'have', 'has', 'had', 'do', 'does', 'did', 'will', 'would',
    'could', 'should', 'may', 'might', 'shall', 'can', 'this', 'that',
    'these', 'those', 'it', 'its', 'you', 'your', 'we', 'our', 'they',
    'their', 'he', 'she', 'his', 'her', 'what', 'which', 'who', 'how',
    'when', 'where', 'why', 'all', 'each', 'any', 'both', 'not', 'no',
])

_NON_ALNUM_RE = re.compile(r"[^a-z0-9\s]")
_SENTENCE_SPLIT_RE = re.compile(r"[.!?]+")
_UPPERCASE_RE = re.compile(r"[A-Z]")
_PUNCTUATION_RE = re.compile(r"[.,!?;:]")


def extract_keywords(text: str) -> List[str]:
    """
    Keywords of an assignment description: lowercase alphanumeric words
    longer than 3 characters that are not stop words. Duplicates are kept.
    """
    cleaned = _NON_ALNUM_RE.sub(" ", (text or "").lower())
    return [
        word for word in cleaned.split()
        if len(word) > 3 and word not in STOP_WORDS
    ]


def _length_band(word_count: int) -> Tuple[int, str]:
    if word_count < 50:
        return 10, "Submission is too short. Please provide more detailed content."
    if word_count < 150:
        return 20, "Submission length is adequate but could be more comprehensive."
    if word_count < 300:
        return 25, "Good submission length with adequate detail."
    return 30, "Excellent submission length with comprehensive coverage."


def _sentence_band(avg_words_per_sentence: float) -> Tuple[int, str]:
    if avg_words_per_sentence < 5:
        return 5, "Sentences are too short. Try to elaborate more."
    if avg_words_per_sentence < 15:
        return 15, "Good sentence structure and clarity."
    if avg_words_per_sentence < 25:
        return 20, "Well-structured sentences with good detail."
    return 10, "Sentences are quite long. Consider breaking them down for clarity."


def _relevance_band(matched: int, total: int) -> Tuple[int, str]:
    coverage = matched / total
    if coverage >= 0.7:
        return 30, (
            f"Strong relevance to the assignment, covering {matched} of "
            f"{total} key topic(s)."
        )
    if coverage >= 0.4:
        return 18, f"Moderate relevance, covering {matched} of {total} key topic(s)."
    return 6, f"Low relevance, only {matched} of {total} key topic(s) addressed."


def _formatting_band(content: str) -> Tuple[int, str]:
    has_uppercase = bool(_UPPERCASE_RE.search(content))
    has_punctuation = bool(_PUNCTUATION_RE.search(content))
    if has_uppercase and has_punctuation:
        return 20, "Proper formatting and punctuation observed."
    if has_uppercase or has_punctuation:
        return 12, "Basic formatting present but could be improved."
    return 5, "Please pay attention to proper capitalization and punctuation."


def generate_fallback_feedback(content: str, assignment_description: str) -> FeedbackResult:
    """
    Score a submission from lexical and structural features.

    Four bands (length, sentence structure, relevance, formatting) each add
    points and one sentence of commentary. Relevance is skipped when the
    description yields no keywords.
    """
    content = content or ""

    word_count = len(content.split())
    sentences = [s for s in _SENTENCE_SPLIT_RE.split(content) if s.strip()]
    avg_words_per_sentence = word_count / len(sentences) if sentences else 0

    bands = [_length_band(word_count), _sentence_band(avg_words_per_sentence)]

    keywords = extract_keywords(assignment_description)
    if keywords:
        content_lower = content.lower()
        matched = sum(1 for kw in keywords if kw in content_lower)
        bands.append(_relevance_band(matched, len(keywords)))

    bands.append(_formatting_band(content))

    score = sum(points for points, _ in bands)
    return FeedbackResult(
        summary=" ".join(sentence for _, sentence in bands),
        score=max(0, min(100, score)),
    )
