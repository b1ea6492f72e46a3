"""Cluster of simulated particles read from primary and secondary vectors."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Sequence

from .cluster import Cluster, TreeOut
from .geometry import Vector3
from .particle import Particle
from .particle_table import g3_to_pdg, neut_mode_name, particle_name

_NEUTRINO_G3_CODE = 4
_NUCLEUS_CODE_MIN = 1_000_000_000
_DETSIM_CODE_MIN = 100_000
_NS_TO_US = 1e-3

_COLUMNS = (
    "PID", "ParentPID", "ParentIndex",
    "ParentPX", "ParentPY", "ParentPZ",
    "ParentVX", "ParentVY", "ParentVZ",
    "IntID", "t", "x", "y", "z", "px", "py", "pz", "KE",
)


def _vec(values: Sequence[float] | Vector3) -> Vector3:
    if isinstance(values, Vector3):
        return values
    return Vector3.from_sequence(values)


@dataclass
class PrimaryVectors:
    """Primary particles of an event, all starting at one vertex.

    ``codes`` are Geant3 particle codes. Neutrinos (code 4) take their PDG
    code from ``neut_pids`` at the same index. ``neut_mode`` and the first
    entries of ``neut_pids``/``neut_momenta`` describe the incoming neutrino.
    """

    codes: list[int] = field(default_factory=list)
    vertex: Sequence[float] | Vector3 = field(default_factory=Vector3)
    momenta: list[Sequence[float]] = field(default_factory=list)
    neut_mode: int = 0
    neut_pids: list[int] = field(default_factory=list)
    neut_momenta: list[Sequence[float]] = field(default_factory=list)


@dataclass
class SecondaryParticles:
    """Secondary particles as parallel lists; times are in ns."""

    codes: list[int] = field(default_factory=list)
    times: list[float] = field(default_factory=list)
    vertices: list[Sequence[float]] = field(default_factory=list)
    momenta: list[Sequence[float]] = field(default_factory=list)
    parent_pids: list[int] = field(default_factory=list)
    interaction_ids: list[int] = field(default_factory=list)
    parent_vertices: list[Sequence[float]] = field(default_factory=list)
    parent_momenta: list[Sequence[float]] = field(default_factory=list)


def _secondary_pdg(code: int) -> int:
    if code > _NUCLEUS_CODE_MIN:
        return code
    if code > _DETSIM_CODE_MIN:
        return g3_to_pdg(code)
    return code


class ParticleCluster(Cluster[Particle], TreeOut):
    """Time-ordered particles of one simulated event with parent links."""

    def __init__(
        self,
        primaries: PrimaryVectors | None = None,
        secondaries: SecondaryParticles | None = None,
        name: str = "",
    ) -> None:
        TreeOut.__init__(self)
        Cluster.__init__(self, name)
        self.neut_mode = 0
        self.neutrino_pid = 0
        self.neutrino_momentum = Vector3()
        self._columns: dict[str, list[Any]] = {key: [] for key in _COLUMNS}
        if primaries is not None or secondaries is not None:
            self.read_vectors(primaries or PrimaryVectors(), secondaries or SecondaryParticles())

    def read_vectors(self, primaries: PrimaryVectors, secondaries: SecondaryParticles) -> None:
        """Replace the contents with the given primaries and secondaries."""
        self.clear()
        self.neut_mode = primaries.neut_mode
        self.neutrino_pid = primaries.neut_pids[0] if primaries.neut_pids else 0
        self.neutrino_momentum = (
            _vec(primaries.neut_momenta[0]) if primaries.neut_momenta else Vector3()
        )

        vertex = _vec(primaries.vertex)
        for index, (code, momentum) in enumerate(
            zip(primaries.codes, primaries.momenta, strict=True)
        ):
            if code == _NEUTRINO_G3_CODE:
                if index >= len(primaries.neut_pids):
                    raise ValueError(f"primary {index} is a neutrino but has no NEUT PID")
                pid = primaries.neut_pids[index]
            else:
                pid = g3_to_pdg(code)
            self.append(Particle(pid, 0.0, vertex, _vec(momentum)))

        for code, time, vtx, mom, parent_pid, int_id, parent_vtx, parent_mom in zip(
            secondaries.codes,
            secondaries.times,
            secondaries.vertices,
            secondaries.momenta,
            secondaries.parent_pids,
            secondaries.interaction_ids,
            secondaries.parent_vertices,
            secondaries.parent_momenta,
            strict=True,
        ):
            self.append(
                Particle(
                    _secondary_pdg(code),
                    time * _NS_TO_US,
                    _vec(vtx),
                    _vec(mom),
                    parent_pid,
                    int_id,
                    _vec(parent_vtx),
                    _vec(parent_mom),
                )
            )

        self.sort()
        self.find_parents()

    def set_t0(self, t0: float) -> None:
        for particle in self.elements:
            particle.add_t0(t0)

    def sort(self) -> None:
        """Order particles by time."""
        self.elements.sort(key=lambda particle: particle.time)

    def find_parents(self) -> None:
        """Set each particle's parent index to the last matching parent."""
        for parent_index, parent in enumerate(self.elements):
            for particle in self.elements:
                if particle is not parent and particle.is_daughter_of(parent):
                    particle.parent_index = parent_index

    def format_elements(self) -> str:
        """Table of the particles, preceded by the neutrino interaction if any."""
        lines: list[str] = []
        if self.neut_mode:
            lines.append("NEUT MC")
            lines.append("\033[4m Neutrino Type      Interaction  Momentum (GeV/c)\033[0m")
            lines.append(
                f" {particle_name(self.neutrino_pid):>13}"
                f" {neut_mode_name(self.neut_mode):>16}"
                f" {self.neutrino_momentum.mag():>14.2f}"
            )
            lines.append("")

        lines.append("MC Particles")
        lines.append(
            "\033[4m No.   Particle Time (us) Interaction  Parent(Index) KE (MeV) \033[0m"
        )
        for number, particle in enumerate(self.elements, start=1):
            parent_name = particle_name(particle.parent_pid)
            if parent_name == "0":
                parent_name = "-"
            parent_index = (
                f"({particle.parent_index + 1})" if particle.parent_index >= 0 else "(-)"
            )
            if particle.time < 10:
                time_text = f" {particle.time:>8.2f} "
            else:
                time_text = f"{int(particle.time + 0.5):>8}  "
            ke = particle.energy()
            ke_text = f"{ke:>8.1f}" if ke < 10 else f"{int(ke + 0.5):>6}"
            lines.append(
                f"{number:>3}  {particle.name:>10} {time_text}"
                f"{particle.int_name:>11} {parent_name + parent_index:>14} {ke_text}"
            )
        return "\n".join(lines) + "\n"

    def rows(self) -> dict[str, list[Any]]:
        """Column-wise values of every particle, keyed by branch name."""
        columns: dict[str, list[Any]] = {key: [] for key in _COLUMNS}
        for particle in self.elements:
            values = (
                particle.pid, particle.parent_pid, particle.parent_index,
                particle.parent_momentum.x, particle.parent_momentum.y, particle.parent_momentum.z,
                particle.parent_vertex.x, particle.parent_vertex.y, particle.parent_vertex.z,
                particle.int_id, particle.time,
                particle.vertex.x, particle.vertex.y, particle.vertex.z,
                particle.momentum.x, particle.momentum.y, particle.momentum.z,
                particle.energy(),
            )
            for key, value in zip(_COLUMNS, values):
                columns[key].append(value)
        return columns

    def make_branches(self) -> None:
        if self.tree is not None:
            for key in _COLUMNS:
                self.tree.branch(key, lambda key=key: self._columns[key])

    def fill_tree(self) -> None:
        self._columns = self.rows()
        if self.tree is not None:
            self.tree.fill()