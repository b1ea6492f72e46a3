"""A simulated particle with its production vertex, momentum and parentage."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from .geometry import Vector3
from .particle_table import interaction_name, particle_mass, particle_name

_DAUGHTER_TOLERANCE = 1e-2


@dataclass(eq=False)
class Particle:
    """Particle produced in a simulated event.

    ``time`` is in microseconds, ``momentum`` in MeV/c and ``vertex`` in cm.
    ``parent_index`` is the index of the parent in its cluster, or -1.
    """

    pid: int = 0
    time: float = 0.0
    vertex: Vector3 = field(default_factory=Vector3)
    momentum: Vector3 = field(default_factory=Vector3)
    parent_pid: int = 0
    int_id: int = 0
    parent_vertex: Vector3 = field(default_factory=Vector3)
    parent_momentum: Vector3 = field(default_factory=Vector3)
    parent_index: int = -1

    @property
    def name(self) -> str:
        return particle_name(self.pid)

    @property
    def int_name(self) -> str:
        return interaction_name(self.int_id)

    def energy(self) -> float:
        """Kinetic energy in MeV."""
        mass = particle_mass(self.pid)
        return math.sqrt(self.momentum.mag2() + mass * mass) - mass

    def is_daughter_of(self, other: "Particle") -> bool:
        """Whether ``other`` matches this particle's recorded parent."""
        return (
            self.parent_pid == other.pid
            and (self.parent_vertex - other.vertex).mag() < _DAUGHTER_TOLERANCE
            and (self.parent_momentum - other.momentum).mag() < _DAUGHTER_TOLERANCE
        )

    def add_t0(self, t0: float) -> None:
        """Shift the particle time by ``t0``."""
        self.time += t0

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Particle):
            return NotImplemented
        return (
            self.pid == other.pid
            and self.vertex == other.vertex
            and self.momentum == other.momentum
        )

    __hash__ = None  # type: ignore[assignment]