"""
Similarity Engine
Cosine similarity between feature vectors with memoized per-movie norms
"""

import logging
import threading
from typing import Callable, Dict, Optional

import numpy as np

from .stores import FeatureStore


logger = logging.getLogger(__name__)


class NormCache:
    """
    Write-once cache of feature-vector norms, keyed by movie name.

    Reads are lock-free. Inserts happen under a lock and the first writer
    wins, so concurrent callers always observe a single value per movie.
    Entries are never invalidated: feature vectors are immutable.
    """

    def __init__(self):
        self._norms: Dict[str, float] = {}
        self._lock = threading.Lock()

    def __contains__(self, movie_name: str) -> bool:
        return movie_name in self._norms

    def __len__(self) -> int:
        return len(self._norms)

    def get(self, movie_name: str) -> Optional[float]:
        return self._norms.get(movie_name)

    def get_or_compute(self, movie_name: str, compute: Callable[[], float]) -> float:
        """
        Return the cached norm for a movie, computing and storing it on a miss.

        Args:
            movie_name: Movie name used as cache key
            compute: Zero-argument callable producing the norm

        Returns:
            The cached norm
        """
        norm = self._norms.get(movie_name)
        if norm is not None:
            return norm

        with self._lock:
            norm = self._norms.get(movie_name)
            if norm is None:
                norm = compute()
                self._norms[movie_name] = norm
                logger.debug("Cached norm of %r: %f", movie_name, norm)
        return norm


class SimilarityEngine:
    """
    Cosine similarity over the vectors of a FeatureStore.

    Norms of named (movie) vectors are memoized in a NormCache owned by the
    engine. A vector passed with name None is virtual (e.g. a user taste
    vector): its norm is recomputed on every call and never cached.

    Degenerate inputs follow IEEE-754: a zero-norm vector yields nan.
    """

    def __init__(self, feature_store: FeatureStore):
        """
        Initialize the similarity engine.

        Args:
            feature_store: Store holding every movie's feature vector
        """
        self.feature_store = feature_store
        self.norm_cache = NormCache()

    @staticmethod
    def _compute_norm(vec: np.ndarray) -> float:
        return float(np.sqrt(np.dot(vec, vec)))

    def norm(self, vec: np.ndarray, name: Optional[str]) -> float:
        """
        Get the Euclidean norm of a vector, memoized for named vectors.

        Args:
            vec: Feature vector
            name: Movie name, or None for a virtual vector

        Returns:
            The norm of vec
        """
        if name is None:
            return self._compute_norm(vec)
        return self.norm_cache.get_or_compute(name, lambda: self._compute_norm(vec))

    def similarity(self,
                   vec_a: np.ndarray, name_a: Optional[str],
                   vec_b: np.ndarray, name_b: Optional[str]) -> float:
        """
        Compute the cosine similarity of two vectors of the store's dimension.

        Args:
            vec_a: First vector
            name_a: Movie name of vec_a, or None if virtual
            vec_b: Second vector
            name_b: Movie name of vec_b, or None if virtual

        Returns:
            Similarity in [-1, 1], or nan if either vector has zero norm
        """
        dot = np.dot(vec_a, vec_b)
        norms = np.float64(self.norm(vec_a, name_a) * self.norm(vec_b, name_b))
        with np.errstate(divide='ignore', invalid='ignore'):
            return float(dot / norms)

    def movie_similarity(self, movie_a: str, movie_b: str) -> float:
        """
        Compute the cosine similarity of two stored movies.

        Args:
            movie_a: First movie name
            movie_b: Second movie name

        Returns:
            Similarity of the two movies' feature vectors

        Raises:
            KeyError: If either movie is not in the feature store
        """
        return self.similarity(self.feature_store[movie_a], movie_a,
                               self.feature_store[movie_b], movie_b)
