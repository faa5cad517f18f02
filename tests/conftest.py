from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Ensure `import cinema_recommender` works without an installed package.
REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT))

from cinema_recommender import RecommenderSystem  # noqa: E402


CATALOGUE_FEATURES = {
    "Titanic": [7, 2, 9, 1],
    "Twilight": [3, 1, 8, 2],
    "StarWars": [2, 9, 1, 8],
    "Matrix": [1, 8, 2, 9],
    "Amelie": [6, 1, 7, 1],
}

CATALOGUE_ORDER = ["Titanic", "Twilight", "StarWars", "Matrix", "Amelie"]

CATALOGUE_RATINGS = {
    "Sofia": {"Titanic": 9, "StarWars": 2, "Amelie": 8},
    "Nadav": {"Twilight": 3, "StarWars": 8, "Matrix": 9},
    "Rina": {movie: 5 for movie in CATALOGUE_ORDER},
}


def build_system(features, ratings, order) -> RecommenderSystem:
    return RecommenderSystem().load_features(features).load_ratings(ratings, order)


@pytest.fixture
def scenario() -> RecommenderSystem:
    """Three 2-d movies; user "u" rated A=5 and B=1."""
    return build_system(
        {"A": [1, 0], "B": [0, 1], "C": [1, 1]},
        {"u": {"A": 5, "B": 1}},
        ["A", "B", "C"],
    )


@pytest.fixture
def catalogue() -> RecommenderSystem:
    return build_system(CATALOGUE_FEATURES, CATALOGUE_RATINGS, CATALOGUE_ORDER)
