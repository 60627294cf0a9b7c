"""Vector similarity helpers for the in-memory vector store."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np


def cosine_similarity(
    a: Sequence[float] | None, b: Sequence[float] | None
) -> float:
    """Cosine similarity of two vectors, clipped to ``[-1, 1]``.

    Returns ``0.0`` instead of raising when either vector is missing, empty,
    all zeros, or the two have different dimensions.
    """
    if a is None or b is None:
        return 0.0
    if len(a) == 0 or len(a) != len(b):
        return 0.0

    vec_a = np.asarray(a, dtype=np.float64)
    vec_b = np.asarray(b, dtype=np.float64)

    norm_a = float(np.linalg.norm(vec_a))
    norm_b = float(np.linalg.norm(vec_b))
    if norm_a == 0.0 or norm_b == 0.0:
        return 0.0

    similarity = float(np.dot(vec_a, vec_b) / (norm_a * norm_b))
    if not np.isfinite(similarity):
        return 0.0
    return float(np.clip(similarity, -1.0, 1.0))
