"""
Content-Based Recommender
Recommends the unseen movie closest to a user's taste vector
"""

import logging

import numpy as np

from .config import USER_NOT_FOUND, NO_RECOMMENDATION, INIT_SIMILARITY
from .similarity import SimilarityEngine
from .stores import FeatureStore, RatingStore
from .utils import average_rating


logger = logging.getLogger(__name__)


class ContentRecommender:
    """
    Content-Based Recommender System.

    Builds a taste vector for the user from the movies they rated, each
    movie's features weighted by how far its rating is from the user's mean,
    then picks the unseen movie whose features point the same way.
    """

    def __init__(self,
                 feature_store: FeatureStore,
                 rating_store: RatingStore,
                 similarity_engine: SimilarityEngine):
        """
        Initialize the content-based recommender.

        Args:
            feature_store: Movie feature vectors
            rating_store: User ratings and movie order
            similarity_engine: Engine used to score candidates
        """
        self.feature_store = feature_store
        self.rating_store = rating_store
        self.similarity_engine = similarity_engine

    def taste_vector(self, user_name: str) -> np.ndarray:
        """
        Build the taste vector of a known user.

        Movies rated above the user's mean push the vector toward their
        features; movies rated below pull it away.

        Args:
            user_name: User name (must be in the rating store)

        Returns:
            Vector of the feature dimension
        """
        ratings = self.rating_store.user_ratings(user_name)
        average = average_rating(ratings)

        taste = np.zeros(self.feature_store.dim, dtype=np.float64)
        for movie_name, rating in ratings.items():
            taste += (rating - average) * self.feature_store[movie_name]
        return taste

    def recommend(self, user_name: str) -> str:
        """
        Recommend the unseen movie most similar to the user's taste.

        Ties go to the movie appearing first in the movie order.

        Args:
            user_name: User name

        Returns:
            Movie name, USER_NOT_FOUND for an unknown user, or
            NO_RECOMMENDATION if the user has rated every movie
        """
        if user_name not in self.rating_store:
            return USER_NOT_FOUND

        taste = self.taste_vector(user_name)

        best_movie = NO_RECOMMENDATION
        best_similarity = INIT_SIMILARITY
        for movie_name in self.rating_store.unrated_movies(user_name):
            current = self.similarity_engine.similarity(
                taste, None, self.feature_store[movie_name], movie_name)
            if current > best_similarity:
                best_movie = movie_name
                best_similarity = current

        logger.debug("Content recommendation for %r: %r (similarity=%f)",
                     user_name, best_movie, best_similarity)
        return best_movie
