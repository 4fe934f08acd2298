"""Statistical helpers for TF-IDF scoring.

The functions here stay independent of the index structure so they can be
unit tested on their own. None of them raise on empty input.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Mapping
import math


def term_frequencies(tokens: Iterable[str]) -> Counter[str]:
    """Count occurrences of each token."""
    return Counter(tokens)


def document_frequencies(tf_maps: Iterable[Mapping[str, int]]) -> Counter[str]:
    """Return, for each term, the number of documents it appears in."""

    counts: Counter[str] = Counter()
    for tf in tf_maps:
        counts.update(term for term, count in tf.items() if count > 0)
    return counts


def calculate_idf(doc_freq: int, total_docs: int) -> float:
    """Return ``ln(total_docs / (1 + doc_freq))``.

    The result is not floored: a term present in every document of a small
    corpus gets a zero or negative weight. An empty corpus yields 0.0.
    """

    if total_docs <= 0:
        return 0.0
    return math.log(total_docs / (1 + doc_freq))


def weigh(tf: Mapping[str, int], idf: Mapping[str, float]) -> dict[str, float]:
    """Multiply term counts by IDF; terms unknown to ``idf`` weigh 0."""
    return {term: count * idf.get(term, 0.0) for term, count in tf.items()}


def vector_magnitude(weights: Mapping[str, float]) -> float:
    """Euclidean norm of a sparse vector."""
    return math.sqrt(sum(value * value for value in weights.values()))


def cosine_similarity(
    query: Mapping[str, float],
    query_magnitude: float,
    document: Mapping[str, float],
    document_magnitude: float,
) -> float:
    """Cosine similarity of two sparse vectors with precomputed norms.

    Only terms of ``query`` contribute to the dot product. A zero norm on
    either side gives 0.0. The result is capped at 1.0.
    """

    if query_magnitude == 0 or document_magnitude == 0:
        return 0.0
    dot_product = 0.0
    for term, q_weight in query.items():
        d_weight = document.get(term)
        if d_weight:
            dot_product += q_weight * d_weight
    return min(dot_product / (query_magnitude * document_magnitude), 1.0)
