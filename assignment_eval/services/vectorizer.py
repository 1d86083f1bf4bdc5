"""
Text Vectorizer
Turns raw submission text into TF-IDF term vectors over a run-scoped corpus
"""

import re
from dataclasses import dataclass
from typing import Dict, List, Sequence

import numpy as np
from scipy import sparse
from sklearn.feature_extraction.text import ENGLISH_STOP_WORDS, TfidfVectorizer

_TOKEN_RE = re.compile(r"[a-z0-9]+")


def tokenize(text: str) -> List[str]:
    """
    Case-fold text and split it into alphanumeric tokens.

    English stop words are dropped; no stemming is applied.
    """
    if not text:
        return []
    return [
        token
        for token in _TOKEN_RE.findall(text.lower())
        if token not in ENGLISH_STOP_WORDS
    ]


@dataclass
class TermVectors:
    """TF-IDF matrix (one row per input document) plus its vocabulary."""

    matrix: sparse.csr_matrix
    terms: np.ndarray

    def __len__(self) -> int:
        return self.matrix.shape[0]

    def as_dicts(self) -> List[Dict[str, float]]:
        matrix = self.matrix
        vectors = []
        for i in range(matrix.shape[0]):
            start, end = matrix.indptr[i], matrix.indptr[i + 1]
            vectors.append(
                {
                    str(self.terms[j]): float(weight)
                    for j, weight in zip(matrix.indices[start:end], matrix.data[start:end])
                    if weight
                }
            )
        return vectors


def _build_vectorizer() -> TfidfVectorizer:
    # raw counts for TF, smoothed log IDF, no length normalisation
    return TfidfVectorizer(
        tokenizer=tokenize,
        lowercase=False,
        token_pattern=None,
        norm=None,
        use_idf=True,
        smooth_idf=True,
        sublinear_tf=False,
    )


def vectorize(documents: Sequence[str]) -> TermVectors:
    """
    Compute TF-IDF vectors for exactly the given documents.

    IDF is fitted on this document set only, so weights are only comparable
    within a single call.

    Args:
        documents: target document first, followed by the corpus

    Returns:
        TermVectors with one row per document, in input order
    """
    docs = [doc or "" for doc in documents]

    if not any(tokenize(doc) for doc in docs):
        # TfidfVectorizer refuses an empty vocabulary
        return TermVectors(
            matrix=sparse.csr_matrix((len(docs), 0), dtype=np.float64),
            terms=np.array([], dtype=object),
        )

    vectorizer = _build_vectorizer()
    matrix = vectorizer.fit_transform(docs)
    return TermVectors(
        matrix=sparse.csr_matrix(matrix),
        terms=vectorizer.get_feature_names_out(),
    )
