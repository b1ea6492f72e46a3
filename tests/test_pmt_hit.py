import pytest

from ntagcluster.geometry import Vector3
from ntagcluster.pmt_hit import C_WATER, PMTHit


def test_set_tof_subtracts_flight_time():
    hit = PMTHit(100.0, 1.0, 5, position=Vector3(C_WATER * 10, 0, 0))
    hit.set_tof_and_direction(Vector3())
    assert hit.tof == pytest.approx(10.0)
    assert hit.t == pytest.approx(90.0)
    assert hit.direction == Vector3(1.0, 0.0, 0.0)


def test_unset_restores_raw_time():
    hit = PMTHit(100.0, 1.0, 5, position=Vector3(0, C_WATER * 4, 0))
    hit.set_tof_and_direction(Vector3())
    hit.unset_tof_and_direction()
    assert hit.t == pytest.approx(100.0)
    assert hit.tof == 0.0
    assert hit.direction == Vector3()


def test_resetting_vertex_uses_raw_time():
    hit = PMTHit(50.0, 1.0, 5, position=Vector3(C_WATER * 10, 0, 0))
    hit.set_tof_and_direction(Vector3())
    hit.set_tof_and_direction(Vector3(C_WATER * 5, 0, 0))
    assert hit.tof == pytest.approx(5.0)
    assert hit.t + hit.tof == pytest.approx(50.0)


def test_shifted_leaves_original():
    hit = PMTHit(10.0, 2.0, 7)
    moved = hit.shifted(5.0)
    assert moved.t == 15.0
    assert hit.t == 10.0
    assert (hit - 3.0).t == 7.0
    assert (hit + 1.0).t == 11.0


def test_equality_by_charge_and_cable():
    assert PMTHit(1.0, 2.0, 3) == PMTHit(500.0, 2.0005, 3)
    assert not PMTHit(1.0, 2.0, 3) == PMTHit(1.0, 2.0, 4)
    assert not PMTHit(1.0, 2.0, 3) == PMTHit(1.0, 2.1, 3)


def test_ordering_by_time():
    hits = [PMTHit(3.0, 0, 1), PMTHit(1.0, 0, 2), PMTHit(2.0, 0, 3)]
    assert [hit.i for hit in sorted(hits)] == [2, 3, 1]


def test_signal_flag_is_boolean():
    assert PMTHit(0.0, 0.0, 1, 0, 4096).s is True
    assert PMTHit(0.0, 0.0, 1, 0, 0).s is False


def test_format():
    hit = PMTHit(1.0, 2.0, 3)
    assert hit.format() == "T: 1 Q: 2 I: 3 ToF: 0 S: 0 B: 0 Tag: 0 dT: 0.000000"


def test_format_hides_huge_dt():
    hit = PMTHit(1.0, 2.0, 3, dt=1.7e308)
    assert hit.format().endswith("dT: ")