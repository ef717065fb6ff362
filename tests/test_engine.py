"""
Tests for ResonanceEngine: the learning step, guards, concurrency and telemetry
"""

import threading
from concurrent.futures import ThreadPoolExecutor

import pytest
import numpy as np

from adaptive_resonance import (
    ResonanceEngine,
    FuzzyKernel,
    BinaryKernel,
    HypersphereKernel,
    ResonanceParameters,
    FuzzyParameters,
    BinaryParameters,
    HypersphereParameters,
    Success,
    NO_MATCH,
    InvalidArgumentError,
    DimensionMismatchError,
    CapacityExceededError,
    IllegalStateError,
)

from conftest import ScriptedKernel, ScriptedWeight


class TestLearning:
    def test_learn_and_recognize(self, fuzzy_engine):
        first = fuzzy_engine.learn([1, 0, 1, 0])
        again = fuzzy_engine.learn([1, 0, 1, 0])
        other = fuzzy_engine.learn([0, 1, 0, 1])

        assert first.category_index == 0 and first.created
        assert again.category_index == 0 and not again.created
        assert other.category_index == 1 and other.created
        assert fuzzy_engine.category_count() == 2

    def test_first_pattern_bootstraps(self, fuzzy_engine):
        result = fuzzy_engine.learn([0.3, 0.6])
        assert isinstance(result, Success)
        assert result.category_index == 0
        assert result.activation_value == 1.0
        np.testing.assert_allclose(result.weight.weights, [0.3, 0.6, 0.7, 0.4])

    def test_category_count_never_decreases(self, fuzzy_engine, random_patterns):
        count = 0
        for pattern in random_patterns[:50]:
            index = fuzzy_engine.learn(pattern).category_index
            assert index < fuzzy_engine.category_count()
            assert fuzzy_engine.category_count() >= count
            count = fuzzy_engine.category_count()

    def test_learning_updates_weight(self, fuzzy_engine):
        fuzzy_engine.learn([0.5, 0.5])
        result = fuzzy_engine.learn([0.6, 0.5])
        assert result.category_index == 0
        assert fuzzy_engine.get_category(0) is result.weight
        assert result.weight.update_count == 1
        assert fuzzy_engine.usage_count(0) == 2
        assert fuzzy_engine.total_activations == 2

    def test_vigilance_controls_granularity(self):
        patterns = [[0.1, 0.1], [0.2, 0.2], [0.8, 0.8], [0.9, 0.9]]
        counts = []
        for vigilance in (0.5, 0.85, 0.99):
            with ResonanceEngine(FuzzyKernel(), FuzzyParameters(vigilance=vigilance)) as art:
                art.learn_batch(patterns)
                counts.append(art.category_count())
        assert counts == sorted(counts)
        assert counts[-1] == 4

    def test_per_call_parameters(self, fuzzy_engine):
        fuzzy_engine.learn([0.5, 0.5])
        strict = FuzzyParameters(vigilance=0.99)
        assert fuzzy_engine.learn([0.6, 0.5], strict).created
        assert fuzzy_engine.category_count() == 2


class TestPrediction:
    def test_predict_empty_engine(self, fuzzy_engine):
        assert fuzzy_engine.predict([0.5, 0.5]) is NO_MATCH

    def test_predict_is_read_only(self, fuzzy_engine):
        fuzzy_engine.learn([1, 0, 1, 0])
        before = fuzzy_engine.get_categories()

        first = fuzzy_engine.predict([1, 0, 1, 0])
        second = fuzzy_engine.predict([1, 0, 1, 0])
        assert first.category_index == second.category_index == 0
        assert first.activation_value == second.activation_value
        assert first.weight is before[0]
        assert fuzzy_engine.predict([0, 1, 0, 1]) is NO_MATCH

        assert fuzzy_engine.category_count() == 1
        assert fuzzy_engine.get_categories()[0] is before[0]

    def test_activation_value(self, fuzzy_engine):
        fuzzy_engine.learn([0.5, 0.5])
        value = fuzzy_engine.activation_value([0.5, 0.5], 0)
        assert value == pytest.approx(2.0 / 2.001)
        with pytest.raises(IndexError):
            fuzzy_engine.activation_value([0.5, 0.5], 3)

    def test_batches(self, fuzzy_engine):
        labels = fuzzy_engine.learn_batch([[1, 0, 1, 0], [1, 0, 1, 0], [0, 1, 0, 1]])
        assert labels == [0, 0, 1]
        predicted = fuzzy_engine.predict_batch([[0, 1, 0, 1], [0.5, 0.5, 0.5, 0.5]])
        assert predicted == [1, None]
        with pytest.raises(InvalidArgumentError):
            fuzzy_engine.learn_batch([[1, 0, 1, 0]], epochs=0)


class TestReferenceKernels:
    def test_hypersphere(self):
        params = HypersphereParameters(vigilance=0.5, default_radius=0.0, max_radius=1.0)
        with ResonanceEngine(HypersphereKernel(), params) as art:
            assert art.learn([0.0, 0.0]).category_index == 0
            grown = art.learn([0.3, 0.0])
            assert grown.category_index == 0
            assert grown.weight.radius == pytest.approx(0.3)
            assert art.learn([5.0, 5.0]).category_index == 1
            assert art.predict([0.1, 0.0]).category_index == 0

    def test_binary(self):
        params = BinaryParameters(vigilance=0.75, choice_l=2.0)
        with ResonanceEngine(BinaryKernel(), params) as art:
            assert art.learn([1, 1, 0, 0]).category_index == 0
            assert art.learn([1, 1, 1, 0]).category_index == 1
            assert art.learn([1, 1, 0, 0]).category_index == 0
            assert art.category_count() == 2


class TestGuards:
    def test_dimension_mismatch(self, fuzzy_engine):
        fuzzy_engine.learn([1, 0, 1, 0])
        with pytest.raises(DimensionMismatchError) as excinfo:
            fuzzy_engine.learn([1, 0])
        assert excinfo.value.expected == 4
        assert excinfo.value.actual == 2
        with pytest.raises(DimensionMismatchError):
            fuzzy_engine.predict([1, 0])
        assert fuzzy_engine.category_count() == 1

    def test_capacity_exceeded(self):
        params = FuzzyParameters(vigilance=0.75, max_categories=2)
        with ResonanceEngine(FuzzyKernel(), params) as art:
            art.learn([1, 0, 0])
            art.learn([0, 1, 0])
            with pytest.raises(CapacityExceededError) as excinfo:
                art.learn([0, 0, 1])
            assert (excinfo.value.current, excinfo.value.maximum) == (2, 2)
            assert art.category_count() == 2
            # A pattern that still resonates is fine at capacity
            assert art.learn([1, 0, 0]).category_index == 0

    def test_invalid_arguments(self, fuzzy_engine):
        with pytest.raises(InvalidArgumentError):
            fuzzy_engine.learn(None)
        with pytest.raises(InvalidArgumentError):
            fuzzy_engine.learn([0.5, 1.5])
        with pytest.raises(InvalidArgumentError):
            fuzzy_engine.learn([0.5, 0.5], BinaryParameters())
        with pytest.raises(InvalidArgumentError):
            fuzzy_engine.predict([])

    def test_invalid_construction(self):
        with pytest.raises(InvalidArgumentError):
            ResonanceEngine(FuzzyKernel(), ResonanceParameters())
        with pytest.raises(InvalidArgumentError):
            ResonanceEngine(object())

    def test_default_parameters(self):
        with ResonanceEngine(BinaryKernel()) as art:
            assert isinstance(art.parameters, BinaryParameters)


class TestLifecycle:
    def test_closed_engine_rejects_calls(self):
        art = ResonanceEngine(FuzzyKernel())
        art.learn([0.5])
        art.close()
        assert art.closed
        with pytest.raises(IllegalStateError):
            art.learn([0.5])
        with pytest.raises(IllegalStateError):
            art.predict([0.5])
        with pytest.raises(IllegalStateError):
            art.clear()
        art.close()

    def test_shared_executor_survives_close(self):
        with ThreadPoolExecutor(max_workers=2) as pool:
            art = ResonanceEngine(FuzzyKernel(), executor=pool)
            art.close()
            assert pool.submit(lambda: 42).result() == 42

    def test_clear(self, fuzzy_engine):
        fuzzy_engine.learn([1, 0, 1, 0])
        fuzzy_engine.learn([0, 1, 0, 1])
        fuzzy_engine.clear()
        assert fuzzy_engine.category_count() == 0
        assert fuzzy_engine.predict([1, 0, 1, 0]) is NO_MATCH
        result = fuzzy_engine.learn([0, 1, 0, 1])
        assert result.category_index == 0 and result.created

    def test_clear_during_learn(self):
        art = ResonanceEngine(ScriptedKernel(), ResonanceParameters())
        try:
            art.learn([0.0, 0.0])
            art.kernel.on_activation = art._store.clear
            with pytest.raises(IllegalStateError):
                art.learn([0.0, 0.0])
        finally:
            art.kernel.on_activation = None
            art.close()

    def test_replaced_winner_that_rejects_is_not_updated(self):
        art = ResonanceEngine(ScriptedKernel(), ResonanceParameters(vigilance=0.5))
        stale = ScriptedWeight(0.9, accept=True)
        replacement = ScriptedWeight(0.9, accept=False)
        art._store.append(stale)

        def replace_once():
            art.kernel.on_activation = None
            art._store.replace(0, replacement)

        try:
            art.kernel.on_activation = replace_once
            result = art.learn([0.0, 0.0])
            assert result.category_index == 1
            assert result.created
            assert art.get_category(0) is replacement
            assert art.usage_count(0) == 1
        finally:
            art.kernel.on_activation = None
            art.close()

    def test_replaced_winner_that_accepts_is_rescored(self):
        art = ResonanceEngine(ScriptedKernel(), ResonanceParameters(vigilance=0.5))
        art._store.append(ScriptedWeight(0.9, accept=True))
        replacement = ScriptedWeight(0.4, accept=True)

        def replace_once():
            art.kernel.on_activation = None
            art._store.replace(0, replacement)

        try:
            art.kernel.on_activation = replace_once
            result = art.learn([0.0, 0.0])
            assert result.category_index == 0
            assert not result.created
            assert result.activation_value == 0.4
            assert art.usage_count(0) == 2
        finally:
            art.kernel.on_activation = None
            art.close()

    def test_engines_learning_inside_shared_pool(self):
        params = FuzzyParameters(vigilance=0.9, parallel_threshold=0, leaf_size=1)
        with ThreadPoolExecutor(max_workers=2) as pool:
            engines = [ResonanceEngine(FuzzyKernel(), params, executor=pool)
                       for _ in range(2)]
            for art in engines:
                art.learn([0.1, 0.1])
                art.learn([0.9, 0.9])

            futures = [pool.submit(art.learn, [0.5, 0.5]) for art in engines]
            results = [future.result(timeout=10) for future in futures]

            assert [r.category_index for r in results] == [2, 2]
            for art in engines:
                assert art.performance_snapshot().parallel_tasks > 0
                art.close()


class TestConcurrency:
    def test_concurrent_learners_share_one_category(self, fuzzy_engine):
        workers = 8
        barrier = threading.Barrier(workers)

        def learn():
            barrier.wait()
            return fuzzy_engine.learn([0.2, 0.8]).category_index

        with ThreadPoolExecutor(max_workers=workers) as pool:
            labels = list(pool.map(lambda _: learn(), range(workers)))

        assert labels == [0] * workers
        assert fuzzy_engine.category_count() == 1
        assert fuzzy_engine.usage_count(0) == workers

    def test_concurrent_distinct_patterns(self):
        patterns = [np.eye(4)[i] for i in range(4)] * 10
        params = FuzzyParameters(vigilance=0.9)
        with ResonanceEngine(FuzzyKernel(), params) as art:
            with ThreadPoolExecutor(max_workers=8) as pool:
                labels = list(pool.map(lambda p: art.learn(p).category_index, patterns))
            assert art.category_count() == 4
            for i in range(4):
                assert len({labels[j] for j in range(i, len(patterns), 4)}) == 1

    def test_parallel_engine_matches_sequential(self, parallel_engine, random_patterns):
        params = FuzzyParameters(vigilance=0.9, parallel_threshold=10_000)
        with ResonanceEngine(FuzzyKernel(), params) as sequential:
            expected = sequential.learn_batch(random_patterns)
        assert parallel_engine.learn_batch(random_patterns) == expected
        assert parallel_engine.performance_snapshot().parallel_tasks > 0


class TestTelemetry:
    def test_counters(self, fuzzy_engine):
        fuzzy_engine.learn([1, 0, 1, 0])
        fuzzy_engine.learn([1, 0, 1, 0])
        fuzzy_engine.predict([1, 0, 1, 0])

        snap = fuzzy_engine.performance_snapshot()
        assert snap.learning_calls == 2
        assert snap.prediction_calls == 1
        assert snap.activation_calls == 2
        assert snap.match_calls == 2
        assert snap.vector_ops == 4
        assert snap.category_count == 1
        assert snap.cache_size == 1
        assert (snap.cache_hits, snap.cache_misses) == (2, 1)
        assert snap.avg_compute_time_ms >= 0.0

    def test_failed_calls_are_counted(self, fuzzy_engine):
        with pytest.raises(InvalidArgumentError):
            fuzzy_engine.learn(None)
        assert fuzzy_engine.performance_snapshot().learning_calls == 1

    def test_reset(self, fuzzy_engine):
        fuzzy_engine.learn([1, 0, 1, 0])
        fuzzy_engine.reset_performance_tracking()
        snap = fuzzy_engine.performance_snapshot()
        assert snap.learning_calls == 0
        assert snap.vector_ops == 0
        assert snap.cache_size == 0
        assert snap.category_count == 1

    def test_cache_disabled(self):
        params = FuzzyParameters(enable_cache=False)
        with ResonanceEngine(FuzzyKernel(), params) as art:
            art.learn([0.5, 0.5])
            assert art.performance_snapshot().cache_size == 0

    def test_optimize_memory(self):
        params = FuzzyParameters(vigilance=0.99, max_cache_size=4,
                                 memory_optimization_threshold=0.5)
        with ResonanceEngine(FuzzyKernel(), params) as art:
            art.learn([0.1, 0.1])
            assert not art.optimize_memory()
            art.learn([0.5, 0.5])
            art.learn([0.9, 0.9])
            assert art.optimize_memory()
            assert art.performance_snapshot().cache_size == 0
            assert art.category_count() == 3


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
