from __future__ import annotations

import math

import numpy as np

from cinema_recommender.utils import average_rating, top_k_indices


def test_average_rating() -> None:
    assert average_rating({"A": 5, "B": 1}) == 3.0
    assert math.isnan(average_rating({}))


def test_top_k_indices_ranks_nan_last() -> None:
    scores = np.array([0.2, np.nan, 0.9, -0.5])

    assert list(top_k_indices(scores, 2)) == [2, 0]
    assert list(top_k_indices(scores, 10)) == [2, 0, 3, 1]
    assert list(top_k_indices(scores, 0)) == []
