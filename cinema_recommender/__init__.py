# Cinema Recommendation System
# Core module for recommendation algorithms

from .config import *
from .data_loader import DataLoader, DataLoadError
from .stores import FeatureStore, RatingStore
from .similarity import NormCache, SimilarityEngine
from .content_based import ContentRecommender
from .collaborative_filtering import CFPredictor, CFRecommender
from .recommender_system import RecommenderSystem
from .utils import setup_logging

__version__ = "1.0.0"
