import pytest

from ntagcluster.geometry import Vector3
from ntagcluster.particle import Particle
from ntagcluster.taggable import Taggable, TaggableType


def test_defaults():
    taggable = Taggable()
    assert taggable.candidate_index("Early") == -1
    assert taggable.candidate_index("Delayed") == -1
    assert taggable.tagged_type == TaggableType.MISSED
    assert taggable.parent_index == -1


def test_constructor_fields():
    taggable = Taggable(TaggableType.N, 200.0, 4.5, Vector3(1, 2, 3))
    assert taggable.type == TaggableType.N
    assert taggable.time == 200.0
    assert taggable.energy == 4.5
    assert taggable.vertex == Vector3(1, 2, 3)


@pytest.mark.parametrize("key", ["Delayed", "anything"])
def test_non_early_keys_go_to_delayed(key):
    taggable = Taggable()
    taggable.set_candidate_index(key, 7)
    assert taggable.delayed_index == 7
    assert taggable.early_index == -1
    assert taggable.candidate_index("Delayed") == 7


def test_early_index():
    taggable = Taggable()
    taggable.set_candidate_index("Early", 3)
    assert taggable.candidate_index("Early") == 3
    assert taggable.candidate_index("Delayed") == -1


def test_set_parent():
    parent = Particle(22, 5.0, Vector3(), Vector3(0, 0, 3), int_id=18)
    taggable = Taggable(TaggableType.G, 5.0, 3.0, Vector3())
    taggable.set_parent(parent, 4)
    assert taggable.parent_t == 5.0
    assert taggable.parent_e == pytest.approx(3.0)
    assert taggable.parent_int_id == 18
    assert taggable.parent_index == 4
    assert taggable.parent_vertex == Vector3()


def test_format():
    taggable = Taggable(TaggableType.E, 1.5, 20.0, Vector3(1, 2, 3))
    assert taggable.format() == "Vertex: 1 ,2 ,3 Time: 1.5 ns Energy: 20 MeV"