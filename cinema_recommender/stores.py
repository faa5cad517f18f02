"""
In-memory stores for the Cinema Recommendation System
Holds movie feature vectors, sparse user ratings and the canonical movie order
"""

from types import MappingProxyType
from typing import Dict, Iterable, Iterator, Mapping, Sequence, Tuple

import numpy as np


class FeatureStore:
    """
    Read-only mapping from movie name to its feature vector.

    Every vector has the same dimension and is stored as a read-only
    float64 array.
    """

    def __init__(self, features: Mapping[str, Sequence[float]]):
        """
        Build the store from an already-parsed table.

        Args:
            features: Mapping from movie name to its feature scores

        Raises:
            ValueError: If the vectors do not all share one dimension
        """
        vectors = {}
        dims = set()
        for movie_name, values in features.items():
            vec = np.array(values, dtype=np.float64)
            if vec.ndim != 1:
                raise ValueError(f"Feature vector of {movie_name!r} must be 1-dimensional")
            vec.setflags(write=False)
            vectors[movie_name] = vec
            dims.add(vec.shape[0])

        if len(dims) > 1:
            raise ValueError(f"Feature vectors have mixed dimensions: {sorted(dims)}")

        self._vectors = MappingProxyType(vectors)
        self.dim = dims.pop() if dims else 0

    def __contains__(self, movie_name: str) -> bool:
        return movie_name in self._vectors

    def __getitem__(self, movie_name: str) -> np.ndarray:
        return self._vectors[movie_name]

    def __len__(self) -> int:
        return len(self._vectors)

    def __iter__(self) -> Iterator[str]:
        return iter(self._vectors)


class RatingStore:
    """
    Sparse user -> movie -> rating table plus the canonical movie order.

    A missing entry means the user did not rate the movie; it is never
    stored as a placeholder zero.
    """

    def __init__(self,
                 ratings: Mapping[str, Mapping[str, float]],
                 movie_order: Iterable[str]):
        """
        Build the store from an already-parsed table.

        Args:
            ratings: Mapping from user name to {movie name: rating}
            movie_order: Movie names in the order used for scanning and tie-breaks

        Raises:
            ValueError: If movie_order lists a movie twice
        """
        self.movie_order: Tuple[str, ...] = tuple(movie_order)
        if len(set(self.movie_order)) != len(self.movie_order):
            raise ValueError("Movie order contains duplicate names")

        self._ratings = MappingProxyType({
            user_name: MappingProxyType({movie: float(r) for movie, r in user_ratings.items()})
            for user_name, user_ratings in ratings.items()
        })

    def __contains__(self, user_name: str) -> bool:
        return user_name in self._ratings

    def __len__(self) -> int:
        return len(self._ratings)

    def user_ratings(self, user_name: str) -> Mapping[str, float]:
        """
        Get the movies a user rated along with their ratings.

        Args:
            user_name: User name

        Returns:
            Read-only mapping from movie name to rating

        Raises:
            KeyError: If the user is unknown
        """
        return self._ratings[user_name]

    def has_rated(self, user_name: str, movie_name: str) -> bool:
        return movie_name in self._ratings.get(user_name, {})

    def referenced_movies(self) -> set:
        """Get every movie name that appears in the order or in any rating."""
        movies = set(self.movie_order)
        for user_ratings in self._ratings.values():
            movies.update(user_ratings)
        return movies

    def unrated_movies(self, user_name: str) -> Iterator[str]:
        """
        Iterate, in movie order, over the movies a user has not rated.

        Args:
            user_name: User name (must be known)
        """
        rated = self._ratings[user_name]
        for movie_name in self.movie_order:
            if movie_name not in rated:
                yield movie_name

    def get_statistics(self) -> Dict:
        """
        Get rating table statistics.

        Returns:
            Dictionary with rating table statistics
        """
        n_ratings = sum(len(r) for r in self._ratings.values())
        n_cells = len(self._ratings) * len(self.movie_order)
        return {
            'n_users': len(self._ratings),
            'n_movies': len(self.movie_order),
            'n_ratings': n_ratings,
            'sparsity': 1 - n_ratings / n_cells if n_cells else 0.0,
        }
