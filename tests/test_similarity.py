from __future__ import annotations

import threading
import warnings
from concurrent.futures import ThreadPoolExecutor

import numpy as np
import pytest
from sklearn.metrics.pairwise import cosine_similarity

from cinema_recommender import FeatureStore, NormCache, SimilarityEngine
from conftest import CATALOGUE_FEATURES


@pytest.fixture
def engine() -> SimilarityEngine:
    return SimilarityEngine(FeatureStore(CATALOGUE_FEATURES))


@pytest.mark.parametrize("movie", sorted(CATALOGUE_FEATURES))
def test_self_similarity_is_one(engine: SimilarityEngine, movie: str) -> None:
    vec = engine.feature_store[movie]
    assert engine.similarity(vec, movie, vec, movie) == pytest.approx(1.0)


def test_similarity_is_symmetric_and_matches_sklearn(engine: SimilarityEngine) -> None:
    names = sorted(CATALOGUE_FEATURES)
    matrix = np.array([CATALOGUE_FEATURES[n] for n in names], dtype=float)
    expected = cosine_similarity(matrix)

    for i, a in enumerate(names):
        for j, b in enumerate(names):
            ab = engine.movie_similarity(a, b)
            ba = engine.movie_similarity(b, a)
            assert ab == pytest.approx(ba)
            assert ab == pytest.approx(expected[i, j])


def test_opposite_vectors_score_minus_one() -> None:
    engine = SimilarityEngine(FeatureStore({"up": [1, 2], "down": [-1, -2]}))
    assert engine.movie_similarity("up", "down") == pytest.approx(-1.0)


def test_norm_is_computed_once_per_movie(engine: SimilarityEngine, monkeypatch) -> None:
    calls = []
    compute = SimilarityEngine._compute_norm

    def counting(vec):
        calls.append(1)
        return compute(vec)

    monkeypatch.setattr(engine, "_compute_norm", counting)
    vec = engine.feature_store["Titanic"]

    first = engine.norm(vec, "Titanic")
    second = engine.norm(vec, "Titanic")

    assert first == second == np.sqrt(135.0)
    assert len(calls) == 1
    assert "Titanic" in engine.norm_cache
    assert len(engine.norm_cache) == 1


def test_virtual_vector_norm_is_never_cached(engine: SimilarityEngine, monkeypatch) -> None:
    calls = []
    compute = SimilarityEngine._compute_norm

    def counting(vec):
        calls.append(1)
        return compute(vec)

    monkeypatch.setattr(engine, "_compute_norm", counting)
    taste = np.array([3.0, 4.0, 0.0, 0.0])

    assert engine.norm(taste, None) == 5.0
    assert engine.norm(taste, None) == 5.0
    assert len(calls) == 2
    assert len(engine.norm_cache) == 0


def test_similarity_caches_only_named_vectors(engine: SimilarityEngine) -> None:
    taste = np.array([1.0, 0.0, 1.0, 0.0])
    engine.similarity(taste, None, engine.feature_store["Matrix"], "Matrix")

    assert "Matrix" in engine.norm_cache
    assert len(engine.norm_cache) == 1


def test_zero_vector_similarity_is_nan_without_warning() -> None:
    engine = SimilarityEngine(FeatureStore({"blank": [0, 0], "x": [1, 0]}))
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        assert np.isnan(engine.movie_similarity("blank", "x"))
        assert np.isnan(engine.movie_similarity("blank", "blank"))


def test_unknown_movie_raises_key_error(engine: SimilarityEngine) -> None:
    with pytest.raises(KeyError):
        engine.movie_similarity("Titanic", "Ghost")


def test_norm_cache_first_write_wins_under_concurrency() -> None:
    cache = NormCache()
    calls = []
    lock = threading.Lock()

    def compute() -> float:
        with lock:
            calls.append(1)
            return float(len(calls))

    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(lambda _: cache.get_or_compute("m", compute), range(64)))

    assert len(calls) == 1
    assert set(results) == {1.0}
    assert cache.get("m") == 1.0
