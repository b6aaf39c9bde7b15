"""Embedding-vector primitives: dot product, cosine similarity, centroids.

A zero-magnitude vector has no direction, so cosine similarity against it
is NaN rather than an exception. Callers that need a definite answer use
`is_zero_vector` first; the filters in this package treat zero vectors
exactly like missing embeddings.
"""

import logging
from collections.abc import Iterable, Sequence

import numpy as np

logger = logging.getLogger(__name__)

Vector = Sequence[float] | np.ndarray


def _as_array(vec: Vector) -> np.ndarray:
    return np.asarray(vec, dtype=np.float64)


def dot(vec1: Vector, vec2: Vector) -> float:
    """Dot product of two equal-length vectors."""
    a = _as_array(vec1)
    b = _as_array(vec2)
    if a.shape != b.shape:
        raise ValueError(f"Embedding dimension mismatch: {a.shape[0]} vs {b.shape[0]}")
    return float(np.dot(a, b))


def is_zero_vector(vec: Vector) -> bool:
    """True if the vector has zero L2 norm (or no components)."""
    a = _as_array(vec)
    return a.size == 0 or not np.any(a)


def cosine_similarity(vec1: Vector, vec2: Vector) -> float:
    """Compute cosine similarity between two vectors.

    Returns NaN when either vector has zero magnitude.
    """
    a = _as_array(vec1)
    b = _as_array(vec2)
    if a.shape != b.shape:
        raise ValueError(f"Embedding dimension mismatch: {a.shape[0]} vs {b.shape[0]}")
    denom = np.linalg.norm(a) * np.linalg.norm(b)
    if denom == 0:
        return float("nan")
    return float(np.dot(a, b) / denom)


def cosine_similarity_batch(query: Vector, vectors: np.ndarray) -> np.ndarray:
    """Cosine similarity between a query and each row of a matrix.

    Rows with zero magnitude (or a zero query) yield NaN.
    """
    v = np.asarray(vectors, dtype=np.float64)
    if v.size == 0:
        return np.empty(0, dtype=np.float64)
    q = _as_array(query)
    if v.ndim != 2 or v.shape[1] != q.shape[0]:
        raise ValueError(f"Embedding dimension mismatch: {v.shape} vs {q.shape}")
    norms = np.linalg.norm(v, axis=1) * np.linalg.norm(q)
    with np.errstate(divide="ignore", invalid="ignore"):
        similarities = np.dot(v, q) / norms
    similarities[norms == 0] = np.nan
    return similarities


def normalize(vec: Vector) -> np.ndarray:
    """Normalize a vector to unit length; zero vectors are returned unchanged."""
    a = _as_array(vec)
    norm = np.linalg.norm(a)
    if norm == 0:
        return a
    return a / norm


def centroid(vectors: Sequence[Vector]) -> np.ndarray | None:
    """Normalized element-wise mean of the vectors, or None for an empty list."""
    if len(vectors) == 0:
        return None
    stacked = np.vstack([_as_array(v) for v in vectors])
    return normalize(stacked.mean(axis=0))


def embedding_matrix(
    items: Iterable[tuple[str, Vector | None]],
    dimensions: int | None = None,
) -> tuple[list[str], np.ndarray]:
    """
    Stack usable embeddings into a row-normalized matrix.

    Missing and zero-magnitude embeddings are skipped, as are embeddings
    whose length differs from `dimensions` (or from the first usable one).

    Returns:
        (ids, matrix) with one row per id
    """
    ids: list[str] = []
    rows: list[np.ndarray] = []
    skipped_mismatch = 0
    for item_id, vec in items:
        if vec is None:
            continue
        a = _as_array(vec)
        if is_zero_vector(a):
            continue
        if dimensions is None:
            dimensions = a.shape[0]
        elif a.shape[0] != dimensions:
            skipped_mismatch += 1
            continue
        ids.append(item_id)
        rows.append(a / np.linalg.norm(a))

    if skipped_mismatch:
        logger.debug(f"Skipped {skipped_mismatch} embeddings with mismatched dimensions")

    if not rows:
        return [], np.empty((0, dimensions or 0), dtype=np.float64)
    return ids, np.vstack(rows)
