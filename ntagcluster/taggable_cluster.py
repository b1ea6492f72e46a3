"""Cluster of taggable objects derived from the simulated particles of an event."""

from __future__ import annotations

from typing import Any, Callable, Iterable, Sequence

from .cluster import Cluster, TreeOut
from .geometry import Vector3
from .particle import Particle
from .particle_table import G3IntCode, PDGCode
from .taggable import Taggable, TaggableType

_TANK_RADIUS = 1690.0
_TANK_HALF_HEIGHT = 1810.0
_SAME_CAPTURE_TIME = 1e-4
_MIN_GAMMA_ENERGY = 1.0

_COLUMNS = (
    "Type", "TaggedType", "t", "E", "tagvx", "tagvy", "tagvz",
    "DistFromPV", "DWall", "EarlyIndex", "DelayedIndex",
    "parvx", "parvy", "parvz", "ParentE", "ParentT", "ParentIntID", "ParentIndex",
)

_TYPE_NAMES = {TaggableType.E: "mu-e", TaggableType.N: "nCapture"}
_TAGGED_NAMES = {TaggableType.MISSED: "-", TaggableType.E: "e", TaggableType.N: "n"}


def tank_dwall(vertex: Vector3) -> float:
    """Distance from ``vertex`` to the nearest wall of the cylindrical tank, in cm."""
    return min(_TANK_RADIUS - vertex.perp(), _TANK_HALF_HEIGHT - abs(vertex.z))


class TaggableCluster(Cluster[Taggable], TreeOut):
    """Decay electrons, neutron captures and gammas of one simulated event."""

    def __init__(
        self,
        particles: Sequence[Particle] | None = None,
        name: str = "",
        dwall: Callable[[Vector3], float] = tank_dwall,
    ) -> None:
        TreeOut.__init__(self)
        Cluster.__init__(self, name)
        self.prompt_vertex = Vector3()
        self.dwall = dwall
        self._columns: dict[str, list[Any]] = {key: [] for key in _COLUMNS}
        if particles is not None:
            self.read_particle_cluster(particles)

    def read_particle_cluster(self, particles: Sequence[Particle]) -> None:
        """Replace the contents with the taggables found among ``particles``.

        Capture gammas sharing a time are merged into one capture whose
        energy is their sum.
        """
        self.clear()
        for particle in list(particles):
            if particle.int_id == G3IntCode.N_CAPTURE and particle.pid == PDGCode.GAMMA:
                is_new_capture = True
                for capture in self.elements:
                    if abs(particle.time - capture.time) < _SAME_CAPTURE_TIME:
                        is_new_capture = False
                        capture.energy += particle.energy()
                if is_new_capture:
                    self.add_particle(TaggableType.N, particle, particles)
            elif particle.int_id == G3IntCode.DECAY and abs(particle.pid) == PDGCode.ELECTRON:
                self.add_particle(TaggableType.E, particle, particles)
            elif particle.pid == PDGCode.GAMMA and particle.energy() > _MIN_GAMMA_ENERGY:
                self.add_particle(TaggableType.G, particle, particles)

    def add_particle(
        self, taggable_type: TaggableType, particle: Particle, particles: Sequence[Particle]
    ) -> None:
        """Append a taggable made from ``particle``, linking its parent if known."""
        taggable = Taggable(taggable_type, particle.time, particle.energy(), particle.vertex)
        if particle.parent_index >= 0:
            parent = particles[particle.parent_index]
            taggable.set_parent(parent, particle.parent_index)
        self.append(taggable)

    def sort(self) -> None:
        """Order taggables by time."""
        self.elements.sort(key=lambda taggable: taggable.time)

    def _distance_from_prompt(self, taggable: Taggable) -> float:
        if taggable.vertex.mag() < 1e-3:
            return -1.0
        return (taggable.vertex - self.prompt_vertex).mag()

    def format_elements(self) -> str:
        """Table of the taggables with their matched candidates."""
        lines = [
            "MC Taggables",
            "\033[4m No. Type     Time (us) Dist (cm) DWall (cm) Energy (MeV)"
            " Early Delayed TaggedAs\033[0m",
        ]
        for number, taggable in enumerate(self.elements, start=1):
            time = taggable.time
            if time < 10:
                time_text = f" {time:>8.2f} "
            else:
                time_text = f"{int(time + 0.5):>6}    "
            distance = self._distance_from_prompt(taggable)
            distance_text = -1 if distance < 0 else int(distance)
            early = taggable.candidate_index("Early") + 1
            delayed = taggable.candidate_index("Delayed") + 1
            type_name = _TYPE_NAMES.get(taggable.type, "gamma")
            tagged_name = _TAGGED_NAMES.get(taggable.tagged_type, "e/n")
            lines.append(
                f"{number:>3}  {type_name:>8} {time_text}"
                f"{distance_text:>8} "
                f"{int(self.dwall(taggable.vertex)):>10}  "
                f"{taggable.energy:>11.2f}  "
                f"{(str(early) if early else '-'):>5} "
                f"{(str(delayed) if delayed else '-'):>7} "
                f"{tagged_name:>8}"
            )
        return "\n".join(lines) + "\n"

    def rows(self) -> dict[str, list[Any]]:
        """Column-wise values of every taggable, keyed by branch name."""
        columns: dict[str, list[Any]] = {key: [] for key in _COLUMNS}
        for taggable in self.elements:
            vertex = taggable.vertex
            values = (
                int(taggable.type), int(taggable.tagged_type), taggable.time, taggable.energy,
                vertex.x, vertex.y, vertex.z,
                self._distance_from_prompt(taggable), self.dwall(vertex),
                taggable.candidate_index("Early"), taggable.candidate_index("Delayed"),
                taggable.parent_vertex.x, taggable.parent_vertex.y, taggable.parent_vertex.z,
                taggable.parent_e, taggable.parent_t, taggable.parent_int_id,
                taggable.parent_index,
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

    def extend_from(self, taggables: Iterable[Taggable]) -> None:
        """Append several taggables."""
        self.extend(taggables)