import numpy as np
import pytest

from beam_statics.domain.loads import PointLoad, Torque
from beam_statics.domain.supports import Support
from beam_statics.engine.torsion import integrate_twist

from conftest import make_beam

G = 77e9
J = 1e-4


def test_no_torque_means_flat_zero_twist(simply_supported_point):
    res = integrate_twist(simply_supported_point)
    assert not res.has_torsion
    assert len(res.angle_of_twist) == 501
    assert np.all(res.angle_of_twist.values == 0.0)
    assert res.max_angle_of_twist == 0.0
    assert res.notes == []


def test_fixed_at_origin_reacts_all_torques():
    T, L = 400.0, 10.0
    beam = make_beam([Support("F", "fixed", 0.0)], [Torque("T", L, T)], L=L)
    res = integrate_twist(beam)
    dx = L / 500
    assert res.has_torsion
    assert res.reaction_torque == pytest.approx(-T)
    phi = res.angle_of_twist.values
    assert phi[0] == 0.0
    assert phi[1] == pytest.approx(-T / (G * J) * dx)
    # en la última estación T(x) = 0: no suma
    assert phi[-1] == pytest.approx(-T / (G * J) * dx * 499)
    assert res.max_angle_of_twist == pytest.approx(T / (G * J) * dx * 499)


def test_intermediate_torque_changes_slope_of_twist():
    L = 10.0
    beam = make_beam(
        [Support("F", "fixed", 0.0)],
        [Torque("T1", 4.0, 300.0), Torque("T2", 10.0, -100.0)],
        L=L,
    )
    res = integrate_twist(beam)
    dx = L / 500
    phi = res.angle_of_twist.values
    # tramo [0, 4): T = -200
    assert phi[100] == pytest.approx(-200.0 / (G * J) * dx * 100)
    # tramo [4, 10): T = +100
    inc = phi[300] - phi[299]
    assert inc == pytest.approx(100.0 / (G * J) * dx)


def test_without_fixed_origin_reaction_torque_is_zero():
    beam = make_beam(
        [Support("A", "pin", 0.0), Support("B", "roller", 10.0)],
        [Torque("T", 2.0, 100.0), PointLoad("P", 5.0, 10.0)],
    )
    res = integrate_twist(beam)
    assert res.has_torsion
    assert res.reaction_torque == 0.0
    assert res.angle_of_twist.values[50] == 0.0
    assert res.angle_of_twist.values[-1] > 0.0
    assert len(res.notes) == 1


def test_fixed_support_away_from_origin_does_not_react():
    beam = make_beam([Support("F", "fixed", 10.0)], [Torque("T", 5.0, 100.0)])
    res = integrate_twist(beam)
    assert res.reaction_torque == 0.0
    assert res.notes
