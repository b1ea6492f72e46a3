"""Simulated objects that a tagger is expected to find: decay electrons, captures, gammas."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum

from .geometry import Vector3
from .particle import Particle

_EARLY_KEY = "Early"


class TaggableType(IntEnum):
    """Kind of a taggable object, and the kind it was tagged as."""

    MISSED = 0
    E = 1
    N = 2
    E_OR_N = 3
    G = 4


@dataclass
class Taggable:
    """A true signal with its time (us), energy (MeV), vertex and parent information.

    ``early_index`` and ``delayed_index`` point at the matching candidates in
    the early and delayed candidate clusters, or are -1.
    """

    type: TaggableType = TaggableType.MISSED
    time: float = 0.0
    energy: float = 0.0
    vertex: Vector3 = field(default_factory=Vector3)
    early_index: int = -1
    delayed_index: int = -1
    tagged_type: TaggableType = TaggableType.MISSED
    parent_vertex: Vector3 = field(default_factory=Vector3)
    parent_t: float = 0.0
    parent_e: float = 0.0
    parent_int_id: int = 0
    parent_index: int = -1

    def set_parent(self, parent: Particle, index: int) -> None:
        """Record the time, energy and interaction of the parent particle."""
        self.parent_t = parent.time
        self.parent_e = parent.energy()
        self.parent_int_id = parent.int_id
        self.parent_index = index

    def set_candidate_index(self, key: str, index: int) -> None:
        """Set the early candidate index for ``"Early"``, the delayed one otherwise."""
        if key == _EARLY_KEY:
            self.early_index = index
        else:
            self.delayed_index = index

    def candidate_index(self, key: str) -> int:
        """Early candidate index for ``"Early"``, the delayed one otherwise."""
        if key == _EARLY_KEY:
            return self.early_index
        return self.delayed_index

    def format(self) -> str:
        """One-line description of vertex, time and energy."""
        v = self.vertex
        return (
            f"Vertex: {v.x:.2g} ,{v.y:.2g} ,{v.z:.2g}"
            f" Time: {self.time:.2g} ns Energy: {self.energy:.2g} MeV"
        )