import numpy as np
import pytest

from beam_statics.domain.loads import PointLoad, UniformLoad
from beam_statics.domain.supports import Support
from beam_statics.engine.deflection import (
    BC_FIXED, BC_NONE, BC_TWO_SUPPORTS, integrate_deflection, trapezoid_scan
)
from beam_statics.engine.diagrams import build_internal_forces
from beam_statics.engine.equilibrium import solve_reactions

from conftest import E, I, make_beam


def _deflection(beam):
    sol = solve_reactions(beam)
    forces = build_internal_forces(beam, sol.reactions.values())
    return integrate_deflection(beam, forces.moment)


def test_trapezoid_scan_is_a_running_integral():
    out = trapezoid_scan(np.array([1.0, 1.0, 3.0]), 0.5)
    assert np.allclose(out, [0.0, 0.5, 1.5])
    assert not out.flags.writeable


def test_cantilever_tip_deflection_and_slope(cantilever_tip):
    P, L = 5000.0, 3.0
    res = _deflection(cantilever_tip)
    assert res.boundary == BC_FIXED
    assert res.deflection.values[0] == pytest.approx(0.0, abs=1e-15)
    assert res.slope.values[0] == pytest.approx(0.0, abs=1e-15)
    assert res.deflection.values[-1] == pytest.approx(-P * L**3 / (3 * E * I), rel=1e-4)
    assert res.slope.values[-1] == pytest.approx(-P * L**2 / (2 * E * I), rel=1e-4)
    assert res.max_deflection == pytest.approx(P * L**3 / (3 * E * I), rel=1e-4)


def test_cantilever_fixed_at_right_end():
    P, L = 2000.0, 4.0
    beam = make_beam([Support("F", "fixed", L)], [PointLoad("P", 0.0, P)], L=L)
    res = _deflection(beam)
    assert res.deflection.values[-1] == pytest.approx(0.0, abs=1e-15)
    # la estación del empotramiento ya incluye su par (M = 0 ahí): error O(dx/L)
    assert res.deflection.values[0] == pytest.approx(-P * L**3 / (3 * E * I), rel=1e-2)


def test_simply_supported_udl_midspan_deflection(simply_supported_udl):
    w, L = 1000.0, 10.0
    res = _deflection(simply_supported_udl)
    assert res.boundary == BC_TWO_SUPPORTS
    y = res.deflection.values
    assert y[0] == pytest.approx(0.0, abs=1e-12)
    assert y[-1] == pytest.approx(0.0, abs=1e-12)
    assert y[250] == pytest.approx(-5 * w * L**4 / (384 * E * I), rel=1e-3)
    assert res.max_deflection == pytest.approx(5 * w * L**4 / (384 * E * I), rel=1e-3)
    # pendiente nula al centro por simetría
    assert res.slope.values[250] == pytest.approx(0.0, abs=1e-9)


def test_simply_supported_point_load_midspan_deflection(simply_supported_point):
    P, L = 10000.0, 10.0
    res = _deflection(simply_supported_point)
    assert res.deflection.values[250] == pytest.approx(-P * L**3 / (48 * E * I), rel=1e-3)


def test_overhang_supports_have_zero_deflection():
    beam = make_beam(
        [Support("A", "pin", 2.0), Support("B", "roller", 8.0)],
        [UniformLoad("w", 0.0, 10.0, 500.0)],
    )
    res = _deflection(beam)
    y = res.deflection.values
    assert y[100] == pytest.approx(0.0, abs=1e-12)
    assert y[400] == pytest.approx(0.0, abs=1e-12)


def test_insufficient_boundary_conditions_give_zero_series():
    beam = make_beam([Support("A", "pin", 0.0)], [PointLoad("P", 5.0, 100.0)])
    res = _deflection(beam)
    assert res.boundary == BC_NONE
    assert np.all(res.slope.values == 0.0)
    assert np.all(res.deflection.values == 0.0)
    assert res.max_deflection == 0.0
    assert res.notes


def test_coincident_supports_are_degenerate():
    beam = make_beam(
        [Support("A", "pin", 4.0), Support("B", "roller", 4.0)],
        [PointLoad("P", 5.0, 100.0)],
    )
    res = _deflection(beam)
    assert res.boundary == BC_NONE
    assert np.all(res.deflection.values == 0.0)
    assert "coinciden" in res.notes[0]


def test_zero_flexural_rigidity_is_not_repaired(cantilever_tip):
    beam = make_beam(cantilever_tip.supports, cantilever_tip.loads, L=3.0, E=0.0)
    res = _deflection(beam)
    assert not np.all(np.isfinite(res.deflection.values))
