"""
Collaborative Filtering Recommender
Item-based k-nearest-neighbor score prediction and recommendation
"""

import logging

import numpy as np

from .config import CF_PARAMS, NOT_FOUND, USER_NOT_FOUND, NO_RECOMMENDATION
from .similarity import SimilarityEngine
from .stores import FeatureStore, RatingStore
from .utils import top_k_indices


logger = logging.getLogger(__name__)


class CFPredictor:
    """
    Predicts a user's rating for a movie from the k movies they rated that
    are most similar to it.

    The prediction is the similarity-weighted average of those k ratings.
    It is not clamped to the rating scale, and a small, zero or negative sum
    of similarities is kept as is (large values, sign flips, inf or nan).
    """

    def __init__(self,
                 feature_store: FeatureStore,
                 rating_store: RatingStore,
                 similarity_engine: SimilarityEngine):
        """
        Initialize the predictor.

        Args:
            feature_store: Movie feature vectors
            rating_store: User ratings
            similarity_engine: Engine used to rank rated movies
        """
        self.feature_store = feature_store
        self.rating_store = rating_store
        self.similarity_engine = similarity_engine

    def predict(self, movie_name: str, user_name: str, k: int = CF_PARAMS['k']) -> float:
        """
        Predict the rating user_name would give movie_name.

        Args:
            movie_name: Movie to score
            user_name: User name
            k: Number of most similar rated movies to use (all of them if
               the user rated fewer than k)

        Returns:
            Predicted score, or NOT_FOUND if the movie or the user is unknown
        """
        if k < 0:
            raise ValueError(f"k must be non-negative, got {k}")

        if movie_name not in self.feature_store or user_name not in self.rating_store:
            return NOT_FOUND

        ratings = self.rating_store.user_ratings(user_name)
        rated_movies = list(ratings)
        similarities = np.array(
            [self.similarity_engine.movie_similarity(movie_name, rated) for rated in rated_movies],
            dtype=np.float64)
        values = np.array([ratings[rated] for rated in rated_movies], dtype=np.float64)

        nearest = top_k_indices(similarities, k)
        weights = similarities[nearest]
        numerator = np.sum(weights * values[nearest])
        denominator = np.sum(weights)

        with np.errstate(divide='ignore', invalid='ignore'):
            return float(numerator / denominator)


class CFRecommender:
    """
    Recommends the unseen movie with the highest predicted score.

    Only strictly positive predictions qualify; ties go to the movie that
    appears first in the movie order.
    """

    def __init__(self, rating_store: RatingStore, predictor: CFPredictor):
        self.rating_store = rating_store
        self.predictor = predictor

    def recommend(self, user_name: str, k: int = CF_PARAMS['k']) -> str:
        """
        Recommend a movie for a user by collaborative filtering.

        Args:
            user_name: User name
            k: Number of neighbors used for each prediction

        Returns:
            Movie name, USER_NOT_FOUND for an unknown user, or
            NO_RECOMMENDATION if no unseen movie predicts above zero
        """
        if user_name not in self.rating_store:
            return USER_NOT_FOUND

        best_movie = NO_RECOMMENDATION
        best_score = 0.0
        for movie_name in self.rating_store.unrated_movies(user_name):
            score = self.predictor.predict(movie_name, user_name, k)
            if score > best_score:
                best_movie = movie_name
                best_score = score

        logger.debug("CF recommendation for %r (k=%d): %r (score=%f)",
                     user_name, k, best_movie, best_score)
        return best_movie
