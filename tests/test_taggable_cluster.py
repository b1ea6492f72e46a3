import pytest

from ntagcluster.cluster import OutputTree
from ntagcluster.geometry import Vector3
from ntagcluster.particle import Particle
from ntagcluster.particle_cluster import ParticleCluster
from ntagcluster.taggable import Taggable, TaggableType
from ntagcluster.taggable_cluster import TaggableCluster


def _particles(*items):
    cluster = ParticleCluster()
    for item in items:
        cluster.append(item)
    return cluster


def _capture_gamma(time, pz, vertex=Vector3(100, 0, 0)):
    return Particle(22, time, vertex, Vector3(0, 0, pz), int_id=18)


def test_capture_gammas_with_same_time_merge():
    particles = _particles(_capture_gamma(100.0, 2.0), _capture_gamma(100.0, 3.0))
    cluster = TaggableCluster(particles)
    assert len(cluster) == 1
    assert cluster[0].type == TaggableType.N
    assert cluster[0].energy == pytest.approx(5.0)


def test_capture_gammas_at_different_times_stay_separate():
    particles = _particles(_capture_gamma(100.0, 2.0), _capture_gamma(300.0, 3.0))
    cluster = TaggableCluster(particles)
    assert [t.type for t in cluster] == [TaggableType.N, TaggableType.N]
    assert [t.time for t in cluster] == [100.0, 300.0]


@pytest.mark.parametrize("pid", [11, -11])
def test_decay_electrons(pid):
    particles = _particles(Particle(pid, 2.0, Vector3(), Vector3(0, 0, 30), int_id=5))
    cluster = TaggableCluster(particles)
    assert len(cluster) == 1
    assert cluster[0].type == TaggableType.E


def test_gamma_energy_threshold():
    particles = _particles(
        Particle(22, 1.0, Vector3(), Vector3(0, 0, 2.0), int_id=7),
        Particle(22, 1.0, Vector3(), Vector3(0, 0, 0.5), int_id=7),
    )
    cluster = TaggableCluster(particles)
    assert len(cluster) == 1
    assert cluster[0].type == TaggableType.G
    assert cluster[0].energy == pytest.approx(2.0)


def test_other_particles_ignored():
    particles = _particles(Particle(2112, 1.0, Vector3(), Vector3(0, 0, 5), int_id=12))
    assert len(TaggableCluster(particles)) == 0


def test_parent_is_linked():
    parent = Particle(2112, 50.0, Vector3(), Vector3(0, 0, 4))
    gamma = _capture_gamma(100.0, 2.0)
    gamma.parent_index = 0
    cluster = TaggableCluster(_particles(parent, gamma))
    assert cluster[0].parent_index == 0
    assert cluster[0].parent_t == 50.0
    assert cluster[0].parent_e == pytest.approx(parent.energy())


def test_read_replaces_contents():
    cluster = TaggableCluster(_particles(_capture_gamma(100.0, 2.0)))
    cluster.read_particle_cluster(_particles())
    assert len(cluster) == 0


def test_sort_orders_by_time():
    cluster = TaggableCluster()
    cluster.append(Taggable(TaggableType.N, 30.0, 1.0, Vector3()))
    cluster.append(Taggable(TaggableType.E, 2.0, 1.0, Vector3()))
    cluster.sort()
    assert [t.time for t in cluster] == [2.0, 30.0]


def test_rows_columns():
    cluster = TaggableCluster(dwall=lambda vertex: 42.0)
    cluster.prompt_vertex = Vector3(0, 0, 0)
    cluster.append(Taggable(TaggableType.N, 30.0, 1.0, Vector3(3, 4, 0)))
    cluster.append(Taggable(TaggableType.E, 2.0, 1.0, Vector3()))
    rows = cluster.rows()
    assert rows["DistFromPV"] == [pytest.approx(5.0), -1.0]
    assert rows["DWall"] == [42.0, 42.0]
    assert rows["Type"] == [int(TaggableType.N), int(TaggableType.E)]
    assert rows["EarlyIndex"] == [-1, -1]
    assert len({len(values) for values in rows.values()}) == 1


def test_format_elements():
    cluster = TaggableCluster(dwall=lambda vertex: 42.0)
    early = Taggable(TaggableType.E, 2.0, 30.0, Vector3())
    early.set_candidate_index("Early", 0)
    early.tagged_type = TaggableType.E
    cluster.append(early)
    cluster.append(Taggable(TaggableType.N, 200.0, 2.2, Vector3()))
    text = cluster.format_elements()
    lines = text.splitlines()
    assert lines[0] == "MC Taggables"
    assert lines[2].split() == ["1", "mu-e", "2.00", "-1", "42", "30.00", "1", "-", "e"]
    assert lines[3].split()[1] == "nCapture"
    assert lines[3].split()[-1] == "-"


def test_tree_fill():
    cluster = TaggableCluster()
    tree = OutputTree()
    cluster.set_tree(tree)
    cluster.make_branches()
    cluster.append(Taggable(TaggableType.G, 5.0, 3.0, Vector3()))
    cluster.fill_tree()
    assert "Type" in tree.branch_names
    assert tree.rows[0]["t"] == [5.0]
    assert tree.rows[0]["Type"] == [int(TaggableType.G)]