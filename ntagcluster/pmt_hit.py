"""A single photomultiplier-tube hit."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field

from .geometry import Vector3

C_WATER = 21.5833
"""Speed of light in pure water, in cm/ns."""


@dataclass(eq=False)
class PMTHit:
    """Time, charge and cable ID of a PMT hit, with time-of-flight bookkeeping.

    ``t`` is the hit time with the time of flight from the current vertex
    already subtracted; ``tof`` is that time of flight (0 without a vertex).
    """

    t: float
    q: float
    i: int
    f: int = 2
    s: bool = False
    tof: float = 0.0
    dt: float = 0.0
    b: bool = False
    n: bool = False
    position: Vector3 = field(default_factory=Vector3)
    direction: Vector3 = field(default_factory=Vector3)

    def __post_init__(self) -> None:
        self.s = bool(self.s)
        self.b = bool(self.b)
        self.n = bool(self.n)

    def set_tof_and_direction(self, vertex: Vector3) -> None:
        """Subtract the time of flight from ``vertex`` and set the hit direction."""
        self.t += self.tof
        displacement = self.position - vertex
        self.direction = displacement.unit()
        self.tof = displacement.mag() / C_WATER
        self.t -= self.tof

    def unset_tof_and_direction(self) -> None:
        """Restore the raw hit time and forget the direction."""
        self.t += self.tof
        self.tof = 0.0
        self.direction = Vector3()

    def shifted(self, offset: float) -> "PMTHit":
        """A copy of the hit with ``offset`` added to its time."""
        hit = copy.copy(self)
        hit.t += offset
        return hit

    def format(self) -> str:
        """One-line description of the hit."""
        dt_text = "" if self.dt > 1e308 else f"{self.dt:.6f}"
        return (
            f"T: {self.t:g} Q: {self.q:g} I: {self.i} ToF: {self.tof:g}"
            f" S: {int(self.s)} B: {int(self.b)} Tag: {int(self.n)} dT: {dt_text}"
        )

    def __add__(self, offset: float) -> "PMTHit":
        return self.shifted(offset)

    def __sub__(self, offset: float) -> "PMTHit":
        return self.shifted(-offset)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PMTHit):
            return NotImplemented
        return abs(self.q - other.q) < 1e-3 and self.i == other.i

    def __lt__(self, other: "PMTHit") -> bool:
        return self.t < other.t

    __hash__ = None  # type: ignore[assignment]