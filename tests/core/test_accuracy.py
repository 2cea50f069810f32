"""
Tests for alignment and error metrics.
"""
import math
from datetime import datetime, timedelta, timezone

import pytest

from outlook.core.domain.accuracy import AlignedPair, ErrorMetrics, align, compute_metrics
from outlook.core.domain.series import NO_DATA, AggregatedSeries

T0 = datetime(2025, 6, 30, 0, tzinfo=timezone.utc)


def at(hour: int) -> datetime:
    return T0 + timedelta(hours=hour)


def pairs_of(forecast, actual):
    return [AlignedPair(at(i), f, a) for i, (f, a) in enumerate(zip(forecast, actual))]


def test_align_is_full_outer_join_in_order():
    forecast = AggregatedSeries("f", {at(2): 3.0, at(0): 1.0})
    actual = AggregatedSeries("a", {at(1): 2.0, at(0): 1.5})

    pairs = align(forecast, actual)

    assert [p.instant for p in pairs] == [at(0), at(1), at(2)]
    assert pairs[0] == AlignedPair(at(0), 1.0, 1.5)
    assert pairs[1] == AlignedPair(at(1), NO_DATA, 2.0)
    assert pairs[2] == AlignedPair(at(2), 3.0, NO_DATA)


def test_align_length_is_union_of_keys():
    forecast = AggregatedSeries("f", {at(h): 1.0 for h in range(0, 10)})
    actual = AggregatedSeries("a", {at(h): 1.0 for h in range(5, 15)})
    assert len(align(forecast, actual)) == 15


def test_align_empty_series():
    assert align(AggregatedSeries("f"), AggregatedSeries("a")) == []


def test_metrics_reference_case():
    metrics = compute_metrics(pairs_of([10, 20, 30], [12, 18, 33]))

    assert metrics.sample_count == 3
    assert metrics.mae == pytest.approx(7 / 3)
    assert metrics.rmse == pytest.approx(math.sqrt(17 / 3))
    assert metrics.bias == pytest.approx(-1.0)
    assert metrics.mape == pytest.approx((2 / 12 + 2 / 18 + 3 / 33) / 3 * 100)


def test_metrics_empty_input_is_all_zero():
    assert compute_metrics([]) == ErrorMetrics(mae=0, rmse=0, bias=0, mape=0, sample_count=0)


def test_incomplete_pairs_are_ignored():
    pairs = [
        AlignedPair(at(0), 10.0, 12.0),
        AlignedPair(at(1), NO_DATA, 5.0),
        AlignedPair(at(2), 5.0, NO_DATA),
        AlignedPair(at(3), float("nan"), 1.0),
        AlignedPair(at(4), 1.0, float("inf")),
    ]
    metrics = compute_metrics(pairs)
    assert metrics.sample_count == 1
    assert metrics.mae == pytest.approx(2.0)


def test_only_incomplete_pairs_is_all_zero():
    metrics = compute_metrics([AlignedPair(at(0), NO_DATA, 5.0)])
    assert metrics == ErrorMetrics()


def test_zero_actual_excluded_from_mape_only():
    metrics = compute_metrics(pairs_of([5, 11], [0, 10]))

    assert metrics.sample_count == 2
    assert metrics.mae == pytest.approx(3.0)
    assert metrics.bias == pytest.approx(3.0)
    assert metrics.rmse == pytest.approx(math.sqrt((25 + 1) / 2))
    assert metrics.mape == pytest.approx(10.0)


def test_all_zero_actuals_give_zero_mape():
    metrics = compute_metrics(pairs_of([5, 3], [0, 0]))
    assert metrics.mape == 0.0
    assert metrics.mae == pytest.approx(4.0)


def test_negative_actual_uses_absolute_value_in_mape():
    metrics = compute_metrics(pairs_of([-8], [-10]))
    assert metrics.mape == pytest.approx(20.0)
    assert metrics.bias == pytest.approx(2.0)


def test_abs_error():
    assert AlignedPair(at(0), 10.0, 12.5).abs_error == pytest.approx(2.5)
    assert AlignedPair(at(0), NO_DATA, 12.5).abs_error is None
