"""Summary statistics and flags computed over the hits of a cluster."""

from __future__ import annotations

import logging
import math
from itertools import combinations
from typing import Mapping

from .pmt_hit_cluster import PMTHitCluster

_log = logging.getLogger(__name__)

_FLAT_DARK_RATIO = 0.5


def legendre(order: int, x: float) -> float:
    """Legendre polynomial of the given order evaluated at ``x``."""
    if order < 0:
        raise ValueError(f"Legendre order must be non-negative, got {order}")
    previous, current = 1.0, x
    if order == 0:
        return previous
    for n in range(1, order):
        previous, current = current, ((2 * n + 1) * x * current - n * previous) / (n + 1)
    return current


def _sigmoid(x: float) -> float:
    if x == -math.inf:
        return 0.0
    if x == math.inf:
        return 1.0
    return 1.0 / (1.0 + math.exp(-x))


def beta_array(cluster: PMTHitCluster) -> list[float]:
    """Isotropy parameters beta_0..beta_5 of the hit directions.

    beta_k is the mean of P_k(cos theta) over all hit pairs; beta_0 stays 0.
    A cluster without a vertex or without hits gives all zeros.
    """
    beta = [0.0] * 6
    if not cluster.has_vertex:
        _log.warning("beta_array: the hit cluster has no set vertex, returning zeros")
        return beta
    n_hits = len(cluster)
    if not n_hits:
        _log.warning("beta_array: the hit cluster is empty, returning zeros")
        return beta

    directions = [hit.direction for hit in cluster]
    for first, second in combinations(directions, 2):
        cos_theta = first.dot(second)
        for k in range(1, 6):
            beta[k] += legendre(k, cos_theta)

    pairs_norm = n_hits * (n_hits - 1)
    for k in range(1, 6):
        beta[k] = 2.0 * beta[k] / pairs_norm if pairs_norm else math.nan
    return beta


def set_as_signal(cluster: PMTHitCluster, flag: bool = True) -> None:
    """Mark every hit as signal (or not)."""
    for hit in cluster:
        hit.s = bool(flag)


def set_burst_flag(cluster: PMTHitCluster, burst_width: float = 30000) -> None:
    """Flag hits that follow the previous hit on their cable within ``burst_width``."""
    for hit in cluster:
        hit.b = hit.dt < burst_width


def signal_count(cluster: PMTHitCluster) -> int:
    return sum(1 for hit in cluster if hit.s)


def burst_count(cluster: PMTHitCluster) -> int:
    return sum(1 for hit in cluster if hit.b)


def _ratio(count: int, total: int) -> float:
    return count / total if total else math.nan


def signal_ratio(cluster: PMTHitCluster) -> float:
    """Fraction of signal hits; NaN for an empty cluster."""
    return _ratio(signal_count(cluster), len(cluster))


def burst_ratio(cluster: PMTHitCluster) -> float:
    """Fraction of burst hits; NaN for an empty cluster."""
    return _ratio(burst_count(cluster), len(cluster))


def noisy_pmt_count(
    cluster: PMTHitCluster, dark_rates: Mapping[int, float], dark_average: float
) -> int:
    """Number of hits on cables whose dark rate exceeds the average."""
    return sum(1 for hit in cluster if dark_rates.get(hit.i, 0.0) > dark_average)


def noisy_pmt_ratio(
    cluster: PMTHitCluster, dark_rates: Mapping[int, float], dark_average: float
) -> float:
    """Fraction of hits on noisy cables; NaN for an empty cluster."""
    return _ratio(noisy_pmt_count(cluster, dark_rates, dark_average), len(cluster))


def burst_significance(
    cluster: PMTHitCluster, dark_rates: Mapping[int, float], burst_window: float
) -> float:
    """Excess of burst hits over the dark-noise expectation, in standard deviations."""
    observed = burst_count(cluster)
    expected = sum(
        dark_rates.get(hit.i, 0.0) * _FLAT_DARK_RATIO * burst_window * 1e-6 for hit in cluster
    )
    if expected == 0:
        if observed == 0:
            return math.nan
        return math.inf
    return (observed - expected) / math.sqrt(expected)


def dark_likelihood(
    cluster: PMTHitCluster, dark_rates: Mapping[int, float], dark_average: float
) -> float:
    """Sigmoid of the log product of dark-rate ratios of the hit cables."""
    product = 1.0
    for hit in cluster:
        product *= dark_rates.get(hit.i, 0.0) / dark_average
    if product <= 0:
        return _sigmoid(-math.inf)
    return _sigmoid(math.log(product))