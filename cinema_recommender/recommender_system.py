"""
Recommender System
Loads the feature and rating tables once and answers recommendation queries
"""

import logging
from typing import Iterable, Mapping, Optional, Sequence

from .config import CF_PARAMS
from .collaborative_filtering import CFPredictor, CFRecommender
from .content_based import ContentRecommender
from .data_loader import DataLoader
from .similarity import SimilarityEngine
from .stores import FeatureStore, RatingStore


logger = logging.getLogger(__name__)


class RecommenderSystem:
    """
    Movie recommendation system.

    Combines a content-based recommender and an item-based collaborative
    filtering recommender over the same in-memory tables. Data is loaded
    once and only read afterwards.
    """

    def __init__(self):
        self.feature_store: Optional[FeatureStore] = None
        self.rating_store: Optional[RatingStore] = None
        self.similarity_engine: Optional[SimilarityEngine] = None
        self.content_model: Optional[ContentRecommender] = None
        self.cf_predictor: Optional[CFPredictor] = None
        self.cf_model: Optional[CFRecommender] = None

    def load_data(self,
                  movies_attributes_path: Optional[str] = None,
                  user_ranks_path: Optional[str] = None) -> 'RecommenderSystem':
        """
        Load both data files and build the recommenders.

        Args:
            movies_attributes_path: Path to the movie attributes file
            user_ranks_path: Path to the user ratings file

        Returns:
            self for method chaining

        Raises:
            DataLoadError: If either file cannot be read
        """
        loader = DataLoader().load_data(movies_attributes_path, user_ranks_path)
        return self.load_features(loader.features).load_ratings(loader.ratings, loader.movie_order)

    def load_features(self, table: Mapping[str, Sequence[float]]) -> 'RecommenderSystem':
        """
        Load the movie feature table.

        Any previously loaded ratings are dropped and must be loaded again.

        Args:
            table: Mapping from movie name to feature scores

        Returns:
            self for method chaining
        """
        self.feature_store = FeatureStore(table)
        self.similarity_engine = SimilarityEngine(self.feature_store)
        self.rating_store = None
        self.content_model = self.cf_predictor = self.cf_model = None
        logger.info("Feature store ready: %d movies, dimension %d",
                    len(self.feature_store), self.feature_store.dim)
        return self

    def load_ratings(self,
                     table: Mapping[str, Mapping[str, float]],
                     order: Iterable[str]) -> 'RecommenderSystem':
        """
        Load the user rating table and the movie order.

        Must be called after load_features().

        Args:
            table: Mapping from user name to {movie name: rating}
            order: Movie names in scanning order

        Returns:
            self for method chaining

        Raises:
            ValueError: If features are not loaded yet, or the ratings
                reference a movie without features
        """
        if self.feature_store is None:
            raise ValueError("Features not loaded. Call load_features() first.")

        rating_store = RatingStore(table, order)
        unknown = rating_store.referenced_movies() - set(self.feature_store)
        if unknown:
            raise ValueError(f"Ratings reference movies without features: {sorted(unknown)}")

        self.rating_store = rating_store
        self._build_models()
        logger.info("Rating store ready: %s", rating_store.get_statistics())
        return self

    def _build_models(self):
        self.content_model = ContentRecommender(
            self.feature_store, self.rating_store, self.similarity_engine)
        self.cf_predictor = CFPredictor(
            self.feature_store, self.rating_store, self.similarity_engine)
        self.cf_model = CFRecommender(self.rating_store, self.cf_predictor)

    def _check_loaded(self):
        if self.content_model is None:
            raise ValueError("Data not loaded. Call load_data() first.")

    def recommend_by_content(self, user_name: str) -> str:
        """
        Recommend a movie using the content-based recommender.

        Args:
            user_name: User name

        Returns:
            Movie name, USER_NOT_FOUND, or NO_RECOMMENDATION
        """
        self._check_loaded()
        return self.content_model.recommend(user_name)

    def predict_score(self, movie_name: str, user_name: str, k: int = CF_PARAMS['k']) -> float:
        """
        Predict a user's score for a movie by collaborative filtering.

        Args:
            movie_name: Movie name
            user_name: User name
            k: Number of most similar rated movies to use

        Returns:
            Predicted score, or NOT_FOUND
        """
        self._check_loaded()
        return self.cf_predictor.predict(movie_name, user_name, k)

    def recommend_by_cf(self, user_name: str, k: int = CF_PARAMS['k']) -> str:
        """
        Recommend a movie using collaborative filtering.

        Args:
            user_name: User name
            k: Number of neighbors used for each prediction

        Returns:
            Movie name, USER_NOT_FOUND, or NO_RECOMMENDATION
        """
        self._check_loaded()
        return self.cf_model.recommend(user_name, k)
