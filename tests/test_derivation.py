import pytest

from beam_statics.domain.beam import default_beam
from beam_statics.domain.loads import PointLoad, Torque, UniformLoad, VaryingLoad, AppliedMoment
from beam_statics.domain.supports import Support
from beam_statics.domain.units import UNIT_SYSTEMS
from beam_statics.engine.analysis import analyze
from beam_statics.services.derivation import build_steps, describe_load

from conftest import make_beam


def _titles(steps):
    return [s.title for s in steps]


def test_simply_supported_steps():
    beam = default_beam()
    steps = build_steps(beam, analyze(beam))
    titles = _titles(steps)
    assert titles[0].startswith("0.")
    assert "2b. Reacciones — simplemente apoyada" in titles
    assert not any(t.startswith("6.") for t in titles)
    reac = next(s for s in steps if s.title.startswith("2b."))
    assert "R_A = 5000.00 N" in reac.result
    assert "R_B = 5000.00 N" in reac.result


def test_cantilever_and_torsion_steps():
    beam = make_beam([Support("F", "fixed", 0.0)], [PointLoad("P", 10.0, 100.0), Torque("T", 10.0, 5.0)])
    steps = build_steps(beam, analyze(beam))
    titles = _titles(steps)
    assert "2b. Reacciones — voladizo" in titles
    assert "6. Torsión y ángulo de giro" in titles
    bc = next(s for s in steps if s.title.startswith("7."))
    assert "Empotramiento" in bc.description


def test_unsolvable_step_carries_diagnostic():
    beam = make_beam([], [PointLoad("P", 5.0, 100.0)])
    res = analyze(beam)
    steps = build_steps(beam, res)
    step = next(s for s in steps if s.title.startswith("2b."))
    assert step.title.endswith("sin resolver")
    assert "No hay apoyos" in step.description


def test_steps_use_display_units_only():
    beam = default_beam()
    res = analyze(beam)
    steps = build_steps(beam, res, UNIT_SYSTEMS["kNm"])
    stress = next(s for s in steps if s.title.startswith("5."))
    assert stress.result.endswith("MPa")
    # el resultado numérico sigue en SI
    assert res.max_stress == pytest.approx(25000.0 * 0.25 / 1e-4)


def test_describe_load_variants():
    si = UNIT_SYSTEMS["SI"]
    assert describe_load(UniformLoad("w", 0.0, 2.0, 10.0), si).startswith("UDL")
    assert describe_load(VaryingLoad("q", 0.0, 2.0, 1.0, 3.0), si).startswith("UVL")
    assert describe_load(AppliedMoment("M", 1.0, 3.0), si).startswith("Momento")
