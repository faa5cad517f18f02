"""
Data Loader for the Cinema Recommendation System
Parses the movie attributes file and the user ratings file into plain tables
"""

import logging
import os
from typing import Dict, List, Optional, Tuple

import numpy as np
import pandas as pd

from .config import MOVIES_ATTRIBUTES_FILE, USER_RANKS_FILE, NO_RATING


logger = logging.getLogger(__name__)


class DataLoadError(OSError):
    """Raised when a data file cannot be opened or parsed."""


class DataLoader:
    """
    Data loader class for the two whitespace-separated input files.

    Attributes:
        features: Mapping from movie name to feature vector
        ratings: Mapping from user name to {movie name: rating}
        movie_order: Movie names in ratings-file column order
    """

    def __init__(self):
        self.features: Optional[Dict[str, np.ndarray]] = None
        self.ratings: Optional[Dict[str, Dict[str, float]]] = None
        self.movie_order: Optional[List[str]] = None

    def load_data(self,
                  movies_attributes_path: Optional[str] = None,
                  user_ranks_path: Optional[str] = None) -> 'DataLoader':
        """
        Load both data files.

        Args:
            movies_attributes_path: Path to the movie attributes file
            user_ranks_path: Path to the user ratings file

        Returns:
            self for method chaining

        Raises:
            DataLoadError: If either file cannot be read
        """
        self.features = self.load_movie_attributes(movies_attributes_path or MOVIES_ATTRIBUTES_FILE)
        self.ratings, self.movie_order = self.load_user_ratings(
            user_ranks_path or USER_RANKS_FILE, n_movies=len(self.features))
        return self

    @staticmethod
    def _check_readable(path: str):
        if not os.path.isfile(path) or not os.access(path, os.R_OK):
            logger.error("Unable to open file %s", path)
            raise DataLoadError(f"Unable to open file {path}")

    @staticmethod
    def load_movie_attributes(path: str) -> Dict[str, np.ndarray]:
        """
        Parse the movie attributes file.

        Each line holds a movie name followed by its feature scores, all
        whitespace-separated. Every movie must have the same number of scores.

        Args:
            path: Path to the movie attributes file

        Returns:
            Dictionary mapping movie name to feature vector
        """
        DataLoader._check_readable(path)
        try:
            df = pd.read_csv(path, sep=r'\s+', header=None, index_col=0, dtype={0: str})
            if df.isna().any().any():
                logger.error("Movies in %s do not all have the same number of features", path)
                raise DataLoadError(f"Movies in {path} do not all have the same number of features")
            features = {str(name): row.to_numpy(dtype=np.float64) for name, row in df.iterrows()}
        except pd.errors.EmptyDataError as e:
            logger.error("Movie attributes file %s is empty", path)
            raise DataLoadError(f"Movie attributes file {path} is empty") from e
        except (ValueError, pd.errors.ParserError) as e:
            logger.error("Could not parse movie attributes file %s: %s", path, e)
            raise DataLoadError(f"Could not parse movie attributes file {path}: {e}") from e

        if not features:
            logger.error("Movie attributes file %s is empty", path)
            raise DataLoadError(f"Movie attributes file {path} is empty")

        logger.info("Loaded movie attributes: %d movies, %d features each",
                    len(features), df.shape[1])
        return features

    @staticmethod
    def load_user_ratings(path: str,
                          n_movies: Optional[int] = None) -> Tuple[Dict[str, Dict[str, float]], List[str]]:
        """
        Parse the user ratings file.

        The first line lists movie names in column order. Every following
        line holds a user name and one rating per column, where NO_RATING
        marks a movie the user did not rate. Users who rated nothing are
        left out of the table.

        Args:
            path: Path to the user ratings file
            n_movies: If given, read at most this many columns

        Returns:
            Tuple of (ratings, movie_order)
        """
        DataLoader._check_readable(path)
        try:
            with open(path, 'r', encoding='utf-8') as f:
                movie_order = f.readline().split()
        except (OSError, ValueError) as e:
            logger.error("Could not read header of user ratings file %s: %s", path, e)
            raise DataLoadError(f"Could not read header of user ratings file {path}: {e}") from e
        if n_movies is not None:
            movie_order = movie_order[:n_movies]

        try:
            df = pd.read_csv(
                path, sep=r'\s+', header=None, skiprows=1, dtype={0: str},
                na_values=[NO_RATING], keep_default_na=False,
            )
            # Columns beyond the known movies are ignored
            df = df.iloc[:, :len(movie_order) + 1].copy()
            columns = movie_order[:df.shape[1] - 1]
            df.columns = ['user'] + columns
            if columns:
                df[columns] = df[columns].apply(pd.to_numeric)
        except pd.errors.EmptyDataError:
            df, columns = pd.DataFrame(columns=['user']), []
        except (ValueError, pd.errors.ParserError) as e:
            logger.error("Could not parse user ratings file %s: %s", path, e)
            raise DataLoadError(f"Could not parse user ratings file {path}: {e}") from e

        ratings: Dict[str, Dict[str, float]] = {}
        for _, row in df.iterrows():
            user_ratings = {movie: float(row[movie]) for movie in columns if pd.notna(row[movie])}
            if user_ratings:
                ratings[str(row['user'])] = user_ratings

        logger.info("Loaded user ratings: %d users, %d movies", len(ratings), len(movie_order))
        return ratings, movie_order
