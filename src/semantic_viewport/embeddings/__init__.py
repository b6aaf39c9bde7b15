"""Embedding similarity primitives."""

from semantic_viewport.embeddings.similarity import (
    centroid,
    cosine_similarity,
    cosine_similarity_batch,
    dot,
    embedding_matrix,
    is_zero_vector,
    normalize,
)

__all__ = [
    "dot",
    "cosine_similarity",
    "cosine_similarity_batch",
    "normalize",
    "centroid",
    "is_zero_vector",
    "embedding_matrix",
]
