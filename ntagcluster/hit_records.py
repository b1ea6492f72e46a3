"""Conversion between hit clusters and flat hit records."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from .pmt_hit import PMTHit
from .pmt_hit_cluster import MAX_ID_PMT, OD_CABLE_OFFSET, PMTHitCluster

_SIGNAL_BIT = 1 << 12
_IN_GATE_T_MIN = 479.2
_IN_GATE_T_MAX = 1779.2
PC2PE = 2.46


@dataclass
class TQRecord:
    """Hit times, charges and packed cable words of one event."""

    t: list[float] = field(default_factory=list)
    q: list[float] = field(default_factory=list)
    cables: list[int] = field(default_factory=list)
    nhits: int = 0
    pc2pe: float = PC2PE
    tqreal_version: int = 2
    qbconst_version: int = 510000
    tqmap_version: int = 60000
    pgain_version: int = 50000
    it0xsk: int = 0


@dataclass
class DetectorHitRecord:
    """Hits of one detector part, in processed and raw form."""

    times: list[float] = field(default_factory=list)
    charges: list[float] = field(default_factory=list)
    cables: list[int] = field(default_factory=list)
    flags: list[int] = field(default_factory=list)
    raw_cables: list[int] = field(default_factory=list)
    raw_times: list[float] = field(default_factory=list)
    raw_charges: list[float] = field(default_factory=list)
    pc2pe: float = PC2PE

    @property
    def n_hits(self) -> int:
        return len(self.times)

    def add(self, hit: PMTHit, t0_offset: float) -> None:
        flag = hit.f + (int(hit.s) << 12)
        if _IN_GATE_T_MIN < hit.t < _IN_GATE_T_MAX:
            flag |= 1
        self.times.append(hit.t)
        self.charges.append(hit.q)
        self.cables.append(hit.i)
        self.flags.append(flag)
        self.raw_cables.append(hit.i + (hit.f << 16))
        self.raw_times.append(hit.t + t0_offset)
        self.raw_charges.append(hit.q)


def cluster_from_arrays(
    times: Iterable[float],
    charges: Iterable[float],
    cables: Iterable[int],
    flags: Iterable[int],
) -> PMTHitCluster:
    """Cluster from parallel hit arrays; bit 12 of a flag marks a signal hit."""
    cluster = PMTHitCluster()
    for t, q, cable, flag in zip(times, charges, cables, flags, strict=True):
        cluster.append(PMTHit(t, q, cable, flag, bool(flag & _SIGNAL_BIT)))
    return cluster


def cluster_from_tq(record: TQRecord, flag: int = 2) -> PMTHitCluster:
    """Cluster from a TQ record; the cable ID is the low 16 bits of each cable word."""
    cluster = PMTHitCluster()
    for t, q, cable in zip(record.t, record.q, record.cables, strict=True):
        cluster.append(PMTHit(t, q, cable & 0x0000FFFF, flag))
    return cluster


def to_tq_record(cluster: PMTHitCluster) -> TQRecord:
    """TQ record of the cluster with flag and signal bits packed into the cable words."""
    record = TQRecord(nhits=len(cluster))
    for hit in cluster:
        record.cables.append(hit.i + (hit.f << 16) + (int(hit.s) << 28))
        record.t.append(hit.t)
        record.q.append(hit.q)
    return record


def to_detector_records(
    cluster: PMTHitCluster, t0_offset: float = 0.0
) -> tuple[DetectorHitRecord, DetectorHitRecord]:
    """Inner- and outer-detector hit records; raw times are shifted by ``t0_offset``."""
    inner = DetectorHitRecord()
    outer = DetectorHitRecord()
    for hit in cluster:
        if hit.i <= MAX_ID_PMT:
            inner.add(hit, t0_offset)
    for hit in cluster:
        if hit.i >= OD_CABLE_OFFSET:
            outer.add(hit, t0_offset)
    return inner, outer


def hit_table(cluster: PMTHitCluster, as_residual: bool = False) -> dict[str, list]:
    """Columns of the time-sorted hits.

    Unless ``as_residual``, times are the raw ones; the cluster's vertex is
    restored afterwards.
    """
    saved_vertex = cluster.vertex
    if not as_residual:
        cluster.remove_vertex()
    cluster.sort()
    table: dict[str, list] = {
        "t": [hit.t for hit in cluster],
        "tof": [hit.tof for hit in cluster],
        "dt": [hit.dt for hit in cluster],
        "q": [hit.q for hit in cluster],
        "i": [hit.i for hit in cluster],
        "s": [int(hit.s) for hit in cluster],
        "b": [int(hit.b) for hit in cluster],
        "n": [int(hit.n) for hit in cluster],
    }
    if not as_residual and saved_vertex is not None:
        cluster.set_vertex(saved_vertex)
    return table