import pytest

from beam_statics.domain.beam import BeamConfig, default_beam
from beam_statics.domain.loads import (
    PointLoad, UniformLoad, VaryingLoad, AppliedMoment, Torque, load_kind, is_distributed
)
from beam_statics.domain.supports import Support

from conftest import make_beam


def test_lists_are_stored_as_tuples():
    beam = make_beam([Support("A", "pin", 0.0)], [PointLoad("P", 1.0, 10.0)])
    assert isinstance(beam.supports, tuple)
    assert isinstance(beam.loads, tuple)


def test_beam_is_immutable():
    beam = default_beam()
    with pytest.raises(Exception):
        beam.length = 5.0


def test_default_beam_matches_editor_defaults():
    beam = default_beam()
    assert beam.length == 10.0
    assert beam.E == 200e9
    assert beam.G == 77e9
    assert [s.kind for s in beam.supports] == ["pin", "roller"]
    assert beam.loads[0].magnitude == 10000.0
    assert beam.EI == pytest.approx(200e9 * 1e-4)
    assert beam.GJ == pytest.approx(77e9 * 1e-4)


@pytest.mark.parametrize("L", [0.0, -1.0])
def test_non_positive_length_rejected(L):
    with pytest.raises(ValueError, match="Longitud"):
        make_beam([], [], L=L)


def test_support_outside_beam_rejected():
    with pytest.raises(ValueError, match="fuera de la viga"):
        make_beam([Support("A", "pin", 10.5)], [])


def test_load_outside_beam_rejected():
    with pytest.raises(ValueError, match="fuera de la viga"):
        make_beam([], [PointLoad("P", -0.1, 1.0)])


def test_inverted_span_rejected():
    with pytest.raises(ValueError, match="invertido"):
        make_beam([], [UniformLoad("w", 6.0, 4.0, 1.0)])


def test_distributed_end_outside_beam_rejected():
    with pytest.raises(ValueError, match="fin"):
        make_beam([], [VaryingLoad("q", 2.0, 12.0, 1.0, 2.0)])


def test_unknown_support_kind_rejected():
    with pytest.raises(ValueError, match="tipo desconocido"):
        make_beam([Support("A", "hinge", 0.0)], [])


def test_duplicate_support_ids_rejected():
    with pytest.raises(ValueError, match="duplicado"):
        make_beam([Support("A", "pin", 0.0), Support("A", "roller", 10.0)], [])


def test_non_positive_stiffness_is_not_validated():
    beam = make_beam([Support("A", "fixed", 0.0)], [], E=0.0)
    assert beam.EI == 0.0


def test_load_kind_tags():
    assert load_kind(PointLoad("a", 0.0, 1.0)) == "point"
    assert load_kind(UniformLoad("b", 0.0, 1.0, 1.0)) == "udl"
    assert load_kind(VaryingLoad("c", 0.0, 1.0, 1.0, 2.0)) == "uvl"
    assert load_kind(AppliedMoment("d", 0.0, 1.0)) == "moment"
    assert load_kind(Torque("e", 0.0, 1.0)) == "torque"
    assert is_distributed(UniformLoad("b", 0.0, 1.0, 1.0))
    assert not is_distributed(PointLoad("a", 0.0, 1.0))


def test_load_kind_rejects_foreign_objects():
    with pytest.raises(TypeError):
        load_kind(object())


def test_point_load_has_no_span_fields():
    p = PointLoad("a", 0.0, 1.0)
    assert not hasattr(p, "end_position")
    assert not hasattr(p, "end_magnitude")


def test_with_loads_returns_new_beam():
    beam = default_beam()
    other = beam.with_loads([PointLoad("x", 2.0, 1.0)])
    assert other is not beam
    assert beam.loads[0].id == "l1"
    assert other.loads[0].id == "x"
    assert other.supports == beam.supports


def test_support_by_id():
    beam = default_beam()
    assert beam.support_by_id("s2").position == 10.0
    with pytest.raises(KeyError):
        beam.support_by_id("nope")
