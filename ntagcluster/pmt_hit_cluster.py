"""Collection of PMT hits with vertex handling, slicing and hit reduction."""

from __future__ import annotations

import copy
import logging
import math
import sys
from bisect import bisect_left, bisect_right
from dataclasses import dataclass
from typing import Callable, Collection, Iterable

from .cluster import Cluster, TreeOut
from .geometry import Vector3
from .pmt_hit import PMTHit

_log = logging.getLogger(__name__)

MAX_ID_PMT = 11146
"""Highest inner-detector PMT cable ID."""
MAX_OD_PMT = 1885
"""Number of outer-detector PMTs; their cable IDs start at 20001."""
OD_CABLE_OFFSET = 20000

_INF = math.inf


@dataclass
class HitReductionResult:
    """Bookkeeping of one hit-removal step."""

    title: str = ""
    n_before_whole: int = 0
    n_match: int = 0
    n_after_whole: int = 0
    n_before_range: int = 0
    n_removed: int = 0
    n_after_range: int = 0
    n_removed_by_signal: int = 0
    n_removed_by_noise: int = 0
    t_min: float = -_INF
    t_max: float = _INF


def _is_valid_cable(cable: int) -> bool:
    return 1 <= cable <= MAX_ID_PMT or OD_CABLE_OFFSET + 1 <= cable <= OD_CABLE_OFFSET + MAX_OD_PMT


class PMTHitCluster(Cluster[PMTHit], TreeOut):
    """Hits of one event; only hits with a meaningful cable ID are kept."""

    def __init__(self, hits: Iterable[PMTHit] = (), name: str = "") -> None:
        TreeOut.__init__(self)
        self.is_sorted = False
        self.vertex: Vector3 | None = None
        self.mean_direction = Vector3()
        Cluster.__init__(self, name, hits)

    # -- filling ---------------------------------------------------------

    def append(self, hit: PMTHit) -> None:
        """Append a copy of ``hit`` if its cable ID is valid."""
        if _is_valid_cable(hit.i):
            self.elements.append(copy.copy(hit))

    def extend(self, other: Iterable[PMTHit], in_gate_only: bool = False) -> None:
        """Append hits of another cluster, optionally only in-gate ones."""
        for hit in list(other):
            if not in_gate_only or hit.f & (1 << 1):
                self.append(hit)

    def append_by_coincidence(self, other: "PMTHitCluster") -> bool:
        """Append the hits of ``other`` that follow a hit coincident with our last hit.

        A coincident hit has the same cable and lies within 100 ns of the last hit.
        Returns whether such a hit was found.
        """
        last_hit = self.last()
        lower, upper = last_hit.t - 100, last_hit.t + 100
        self.sort()
        other.sort()

        do_append = False
        for hit in list(other):
            if do_append:
                self.append(hit)
            if lower < hit.t < upper and hit.i == last_hit.i:
                do_append = True
        return do_append

    def clear(self) -> None:
        self.elements.clear()
        self.is_sorted = False
        self.vertex = None
        self.mean_direction = Vector3()

    # -- vertex ----------------------------------------------------------

    @property
    def has_vertex(self) -> bool:
        return self.vertex is not None

    def set_vertex(self, vertex: Vector3) -> None:
        """Subtract the time of flight from ``vertex`` for every hit and sort."""
        if self.vertex is None or self.vertex != vertex:
            if self.vertex is not None:
                self.remove_vertex()
            self.vertex = vertex
            self._set_tof()
            self.sort()

    def remove_vertex(self) -> None:
        """Restore raw hit times."""
        if self.vertex is not None:
            self._set_tof(unset=True)
            self.vertex = None
            self.is_sorted = False

    def _set_tof(self, unset: bool = False) -> None:
        if self.vertex is None:
            _log.warning("Vertex is not set for hit cluster, skipping ToF-subtraction")
            return
        self.is_sorted = False
        for hit in self.elements:
            if unset:
                hit.unset_tof_and_direction()
            else:
                hit.set_tof_and_direction(self.vertex)

    # -- hit reduction ---------------------------------------------------

    def remove_hits(
        self,
        predicate: Callable[[PMTHit], bool],
        t_min: float = -_INF,
        t_max: float = _INF,
    ) -> HitReductionResult:
        """Remove hits matching ``predicate`` with ``t_min < t < t_max``."""

        def cut(hit: PMTHit) -> bool:
            return t_min < hit.t < t_max and predicate(hit)

        result = HitReductionResult(
            t_min=t_min,
            t_max=t_max,
            n_before_whole=len(self),
            n_before_range=self.count_range(t_min, t_max),
            n_match=self.count_if(predicate),
        )
        kept = [hit for hit in self.elements if not cut(hit)]
        result.n_removed = len(self.elements) - len(kept)
        self.elements = kept
        result.n_after_whole = len(self)
        result.n_after_range = self.count_range(t_min, t_max)
        return result

    def remove_bad_channels(
        self,
        bad_channels: Collection[int],
        t_min: float = -_INF,
        t_max: float = _INF,
    ) -> HitReductionResult:
        """Remove hits on the given bad cables, and hits of the other detector part.

        Whether the cluster is inner- or outer-detector is judged by its first hit.
        """
        if not self.elements:
            return HitReductionResult(title="Bad PMTs", t_min=t_min, t_max=t_max)

        def id_cut(hit: PMTHit) -> bool:
            return hit.i > MAX_ID_PMT or hit.i in bad_channels

        def od_cut(hit: PMTHit) -> bool:
            return (
                hit.i < OD_CABLE_OFFSET
                or hit.i > OD_CABLE_OFFSET + MAX_OD_PMT
                or hit.i in bad_channels
            )

        cut = id_cut if self.elements[0].i <= MAX_ID_PMT else od_cut
        result = self.remove_hits(cut, t_min, t_max)
        result.title = "Bad PMTs"
        return result

    def remove_negative_hits(self, t_min: float = -_INF, t_max: float = _INF) -> HitReductionResult:
        result = self.remove_hits(lambda hit: hit.q < 0, t_min, t_max)
        result.title = "Q < 0"
        return result

    def remove_large_q_hits(
        self, q_threshold: float = 10, t_min: float = -_INF, t_max: float = _INF
    ) -> HitReductionResult:
        result = self.remove_hits(lambda hit: hit.q > q_threshold, t_min, t_max)
        result.title = f"Q > {q_threshold:3.2f}"
        return result

    def count_if(self, predicate: Callable[[PMTHit], bool]) -> int:
        return sum(1 for hit in self.elements if predicate(hit))

    def count_range(self, t_min: float, t_max: float) -> int:
        """Number of hits with ``t_min < t < t_max``."""
        return self.count_if(lambda hit: t_min < hit.t < t_max)

    # -- geometry --------------------------------------------------------

    def find_mean_direction(self) -> Vector3:
        """Set and return the unit vector along the mean hit direction."""
        total = Vector3()
        for hit in self.elements:
            total = total + hit.direction
        mean = total / len(self.elements) if self.elements else total
        self.mean_direction = mean.unit()
        return self.mean_direction

    # -- ordering and slicing --------------------------------------------

    def sort(self) -> None:
        self.elements.sort(key=lambda hit: hit.t)
        self.is_sorted = True

    def slice(self, start_index: int, low_t: float, up_t: float | None = None) -> "PMTHitCluster":
        """Hits around the hit at ``start_index``.

        With two bounds, hits in ``[t0 + low_t, t0 + up_t]``; with one,
        ``low_t`` is a width and the window is ``[t0, t0 + low_t]``.
        """
        start_t = self.elements[start_index].t
        if up_t is None:
            return self.slice_range(start_t, 0, low_t)
        return self.slice_range(start_t, low_t, up_t)

    def slice_range(self, start_t: float, low_t: float, up_t: float) -> "PMTHitCluster":
        """Hits with times in ``[start_t + low_t, start_t + up_t]``."""
        selected = PMTHitCluster()
        if not self.elements:
            return selected
        if not self.is_sorted:
            self.sort()
        if low_t > up_t:
            _log.warning("Slice: lower bound is larger than upper bound")

        low = self.lower_bound_index(start_t + low_t)
        up = self.upper_bound_index(start_t + up_t)
        if self.vertex is not None:
            selected.set_vertex(self.vertex)
        for hit in self.elements[low:up + 1]:
            selected.append(hit)
        return selected

    def slice_by(self, func: Callable[[PMTHit], float], low: float, high: float) -> "PMTHitCluster":
        """New cluster of hits with ``low < func(hit) < high``."""
        return PMTHitCluster(hit for hit in self.elements if low < func(hit) < high)

    def apply_cut(self, func: Callable[[PMTHit], float], low: float, high: float) -> None:
        """Drop hits with ``func(hit)`` outside ``[low, high]``."""
        self.elements = [hit for hit in self.elements if low <= func(hit) <= high]

    def index_of(self, hit: PMTHit) -> int:
        """Index of the first hit matching ``hit`` in time, charge and cable."""
        for index, element in enumerate(self.elements):
            if abs(hit.t - element.t) < 1 and abs(hit.q - element.q) < 1e-5 and hit.i == element.i:
                return index
        raise ValueError(f"hit t: {hit.t} q: {hit.q} i: {hit.i} not found in cluster")

    def lower_bound_index(self, t: float) -> int:
        """Index of the first hit with time not before ``t`` (hits must be sorted)."""
        return bisect_left(self.elements, t, key=lambda hit: hit.t)

    def upper_bound_index(self, t: float) -> int:
        """Index of the last hit with time not after ``t``, or 0 (hits must be sorted)."""
        index = bisect_right(self.elements, t, key=lambda hit: hit.t)
        return index - 1 if index else index

    # -- time handling ---------------------------------------------------

    def add_time_offset(self, offset: float) -> None:
        for hit in self.elements:
            hit.t += offset

    def apply_deadtime(self, deadtime: float, do_remove: bool = True) -> HitReductionResult:
        """Set each hit's time since the previous kept hit on its cable.

        With ``do_remove``, hits within ``deadtime`` of that previous hit are dropped.
        """
        result = HitReductionResult(
            title=f"{deadtime:3.0f} ns deadtime",
            t_min=_INF,
            t_max=_INF,
            n_before_whole=len(self),
            n_before_range=len(self),
        )
        saved_vertex = self.vertex
        self.remove_vertex()

        last_time: dict[int, float] = {}
        last_is_signal: dict[int, bool] = {}
        lowest = -sys.float_info.max
        kept: list[PMTHit] = []

        self.sort()
        for hit in self.elements:
            t_diff = hit.t - last_time.get(hit.i, lowest)
            hit.dt = t_diff
            if not do_remove or t_diff > deadtime:
                kept.append(hit)
                last_time[hit.i] = hit.t
                last_is_signal[hit.i] = hit.s
            elif hit.s or last_is_signal.get(hit.i, False):
                result.n_removed_by_signal += 1

        result.n_after_range = len(kept)
        result.n_after_whole = len(kept)
        result.n_removed = result.n_before_range - result.n_after_range
        result.n_match = result.n_removed
        result.n_removed_by_noise = result.n_removed - result.n_removed_by_signal

        self.elements = kept
        if saved_vertex is not None:
            self.set_vertex(saved_vertex)
        return result

    def check_nan(self) -> None:
        """Raise ValueError if any hit time or charge is NaN or infinite."""
        for hit in self.elements:
            if not (math.isfinite(hit.t) and math.isfinite(hit.q)):
                raise ValueError(f"hit on cable {hit.i} has non-finite t={hit.t} or q={hit.q}")

    # -- operators -------------------------------------------------------

    def _copy(self) -> "PMTHitCluster":
        new = PMTHitCluster(name=self.name)
        new.elements = [copy.copy(hit) for hit in self.elements]
        new.is_sorted = self.is_sorted
        new.vertex = self.vertex
        new.mean_direction = self.mean_direction
        new.tree = self.tree
        return new

    def __iadd__(self, offset: float) -> "PMTHitCluster":
        self.add_time_offset(offset)
        return self

    def __isub__(self, offset: float) -> "PMTHitCluster":
        self.add_time_offset(-offset)
        return self

    def __add__(self, offset: float) -> "PMTHitCluster":
        new = self._copy()
        new.add_time_offset(offset)
        return new

    def __sub__(self, offset: float) -> "PMTHitCluster":
        new = self._copy()
        new.add_time_offset(-offset)
        return new