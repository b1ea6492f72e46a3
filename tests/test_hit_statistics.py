import math

import pytest

from ntagcluster.geometry import Vector3
from ntagcluster.hit_statistics import (
    beta_array,
    burst_count,
    burst_ratio,
    burst_significance,
    dark_likelihood,
    legendre,
    noisy_pmt_count,
    noisy_pmt_ratio,
    set_as_signal,
    set_burst_flag,
    signal_count,
    signal_ratio,
)
from ntagcluster.pmt_hit import PMTHit
from ntagcluster.pmt_hit_cluster import PMTHitCluster


def _cluster(positions, vertex=None):
    hits = [
        PMTHit(t=10.0 * k, q=1.0, i=k + 1, position=pos) for k, pos in enumerate(positions)
    ]
    cluster = PMTHitCluster(hits)
    if vertex is not None:
        cluster.set_vertex(vertex)
    return cluster


@pytest.mark.parametrize("order", range(6))
def test_legendre_at_one_and_minus_one(order):
    assert legendre(order, 1.0) == pytest.approx(1.0)
    assert legendre(order, -1.0) == pytest.approx((-1.0) ** order)


def test_legendre_low_orders():
    assert legendre(0, 0.3) == 1.0
    assert legendre(1, 0.3) == pytest.approx(0.3)


def test_legendre_negative_order():
    with pytest.raises(ValueError):
        legendre(-1, 0.5)


def test_beta_array_aligned_hits():
    cluster = _cluster([Vector3(100, 0, 0)] * 4, vertex=Vector3())
    beta = beta_array(cluster)
    assert beta[0] == 0.0
    assert beta[1:] == pytest.approx([1.0] * 5)


def test_beta_array_opposite_hits():
    cluster = _cluster([Vector3(100, 0, 0), Vector3(-100, 0, 0)], vertex=Vector3())
    beta = beta_array(cluster)
    assert beta[1:] == pytest.approx([legendre(k, -1.0) for k in range(1, 6)])


def test_beta_array_without_vertex_is_zero():
    cluster = _cluster([Vector3(100, 0, 0)] * 3)
    assert beta_array(cluster) == [0.0] * 6


def test_beta_array_single_hit_is_nan():
    cluster = _cluster([Vector3(100, 0, 0)], vertex=Vector3())
    beta = beta_array(cluster)
    assert len(beta) == 6
    assert beta[0] == 0.0
    assert [math.isnan(value) for value in beta[1:]] == [True] * 5


def test_signal_flags_and_ratio():
    cluster = _cluster([Vector3()] * 4)
    set_as_signal(cluster)
    assert signal_count(cluster) == len(cluster)
    assert signal_ratio(cluster) == pytest.approx(1.0)
    set_as_signal(cluster, False)
    assert signal_count(cluster) == 0


def test_signal_ratio_empty_is_nan():
    result = signal_ratio(PMTHitCluster())
    assert [math.isnan(result)] == [True]


def test_burst_flags():
    cluster = _cluster([Vector3()] * 2)
    cluster.elements[0].dt = 10.0
    cluster.elements[1].dt = 50000.0
    set_burst_flag(cluster)
    assert burst_count(cluster) == 1
    assert burst_ratio(cluster) == pytest.approx(0.5)
    set_burst_flag(cluster, 100000.0)
    assert burst_count(cluster) == 2


def test_noisy_pmts():
    cluster = _cluster([Vector3()] * 2)
    rates = {1: 5.0, 2: 1.0}
    assert noisy_pmt_count(cluster, rates, 2.0) == 1
    assert noisy_pmt_ratio(cluster, rates, 2.0) == pytest.approx(0.5)


def test_burst_significance_matches_expectation():
    cluster = _cluster([Vector3()] * 2)
    for hit in cluster:
        hit.b = True
    rates = {1: 1000.0, 2: 1000.0}
    assert burst_significance(cluster, rates, 2000.0) == pytest.approx(0.0, abs=1e-9)


def test_burst_significance_grows_with_observed():
    cluster = _cluster([Vector3()] * 2)
    rates = {1: 1000.0, 2: 1000.0}
    low = burst_significance(cluster, rates, 2000.0)
    for hit in cluster:
        hit.b = True
    high = burst_significance(cluster, rates, 2000.0)
    assert high > low


def test_burst_significance_zero_expectation():
    cluster = _cluster([Vector3()])
    cluster.elements[0].b = True
    assert burst_significance(cluster, {}, 2000.0) == math.inf


def test_dark_likelihood_average_rates():
    cluster = _cluster([Vector3()] * 3)
    rates = {1: 2.0, 2: 2.0, 3: 2.0}
    assert dark_likelihood(cluster, rates, 2.0) == pytest.approx(0.5)


def test_dark_likelihood_monotonic_and_bounded():
    cluster = _cluster([Vector3()] * 2)
    quiet = dark_likelihood(cluster, {1: 1.0, 2: 1.0}, 2.0)
    noisy = dark_likelihood(cluster, {1: 4.0, 2: 4.0}, 2.0)
    assert 0.0 < quiet < 0.5 < noisy < 1.0
    assert dark_likelihood(cluster, {}, 2.0) == 0.0