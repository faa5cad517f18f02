"""
Utility functions for the Cinema Recommendation System
Includes logging setup and small vector helpers shared by the recommenders
"""

import logging
from typing import Dict, Union

import numpy as np

from .config import LOG_LEVEL, LOG_FORMAT


# =============================================================================
# LOGGING
# =============================================================================

def setup_logging(level: Union[int, str] = LOG_LEVEL) -> None:
    """Configure stdlib logging with the project-wide format."""
    root_logger = logging.getLogger()
    if root_logger.handlers:
        # Already configured (e.g. by pytest or a host application).
        root_logger.setLevel(level)
        return

    logging.basicConfig(level=level, format=LOG_FORMAT)


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def average_rating(ratings: Dict[str, float]) -> float:
    """
    Compute the arithmetic mean of a user's ratings.

    Args:
        ratings: Sparse mapping from movie name to rating

    Returns:
        Mean rating, or nan when the mapping is empty
    """
    if not ratings:
        return float('nan')
    return float(np.fromiter(ratings.values(), dtype=np.float64).mean())


def top_k_indices(scores: np.ndarray, k: int) -> np.ndarray:
    """
    Indices of the k highest scores, best first.

    nan scores rank below every real score, so they are only picked
    when fewer than k real scores exist.

    Args:
        scores: 1-d array of scores
        k: Number of indices to return (all of them if k > len(scores))

    Returns:
        Array of indices into scores
    """
    scores = np.asarray(scores, dtype=np.float64)
    # numpy sorts nan after every real value
    return np.argsort(-scores, kind='stable')[:k]
