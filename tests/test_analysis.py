import logging

import numpy as np
import pytest

from beam_statics.domain.beam import default_beam
from beam_statics.domain.loads import PointLoad, UniformLoad, VaryingLoad, AppliedMoment, Torque
from beam_statics.domain.supports import Support
from beam_statics.engine.analysis import analyze
from beam_statics.engine.settings import AnalysisSettings

from conftest import E, I, make_beam

SERIES = ("shear", "moment", "slope", "deflection", "angle_of_twist")


def test_default_beam_end_to_end():
    res = analyze(default_beam())
    assert res.solvable
    assert res.classification == "simply_supported"
    assert set(res.reactions) == {"s1", "s2"}
    assert res.max_moment == pytest.approx(10000.0 * 10.0 / 4.0)
    assert res.max_shear == pytest.approx(5000.0)
    assert res.max_stress == pytest.approx(25000.0 * 0.25 / 1e-4)
    assert res.max_deflection == pytest.approx(10000.0 * 10.0**3 / (48 * 200e9 * 1e-4), rel=1e-3)
    assert not res.has_torsion
    assert res.max_angle_of_twist == 0.0
    assert res.notes == []


def test_every_series_has_501_stations_over_the_beam():
    res = analyze(default_beam())
    for name in SERIES:
        s = getattr(res, name)
        assert len(s) == 501
        assert s.x[0] == 0.0
        assert s.x[-1] == pytest.approx(10.0)
        pts = list(s)
        assert pts[0] == (0.0, float(s.values[0]))


def test_series_are_read_only():
    res = analyze(default_beam())
    with pytest.raises(ValueError):
        res.moment.values[0] = 1.0


def test_analysis_is_idempotent():
    beam = make_beam(
        [Support("F", "fixed", 0.0)],
        [
            PointLoad("P", 7.0, 1200.0),
            UniformLoad("w", 1.0, 4.0, 300.0),
            VaryingLoad("q", 4.0, 10.0, 100.0, 900.0),
            AppliedMoment("M", 6.0, 800.0),
            Torque("T", 9.0, 50.0),
        ],
    )
    a = analyze(beam)
    b = analyze(beam)
    for name in SERIES:
        assert np.array_equal(getattr(a, name).values, getattr(b, name).values)
    for name in ("max_shear", "max_moment", "max_deflection", "max_stress", "max_angle_of_twist"):
        assert getattr(a, name) == getattr(b, name)
    assert a.reactions == b.reactions
    assert a.moment_inference == b.moment_inference


def test_midspan_moment_location_from_inference(simply_supported_udl):
    res = analyze(simply_supported_udl)
    assert res.moment_inference.max_position == pytest.approx(5.0)
    assert res.moment_inference.max_value == pytest.approx(12500.0)
    # V cruza por cero al centro
    assert res.shear_inference.zero_crossings[0] == pytest.approx(5.0, abs=0.02)


def test_cantilever_tip(cantilever_tip):
    res = analyze(cantilever_tip)
    P, L = 5000.0, 3.0
    assert res.classification == "cantilever"
    assert res.reactions["F"].Mz == pytest.approx(-P * L)
    assert res.max_deflection == pytest.approx(P * L**3 / (3 * E * I), rel=1e-4)
    assert abs(res.slope.values[-1]) == pytest.approx(P * L**2 / (2 * E * I), rel=1e-4)
    assert res.deflection_inference.min_position == pytest.approx(L)


def test_equilibrium_of_reactions_and_loads():
    beam = make_beam(
        [Support("A", "pin", 1.0), Support("B", "roller", 9.0)],
        [
            PointLoad("P", 5.0, 2000.0),
            UniformLoad("w", 0.0, 10.0, 400.0),
            VaryingLoad("q", 2.0, 6.0, 0.0, 1000.0),
        ],
    )
    res = analyze(beam)
    applied = 2000.0 + 400.0 * 10.0 + 1000.0 / 2.0 * 4.0
    assert sum(r.Fy for r in res.reactions.values()) - applied == pytest.approx(0.0, abs=1e-8)


def test_unsolvable_configuration_degrades_gracefully(caplog):
    beam = make_beam([Support("A", "roller", 3.0)], [PointLoad("P", 5.0, 100.0)])
    caplog.set_level(logging.WARNING, logger="beam_statics")
    res = analyze(beam)
    assert not res.solvable
    assert res.reactions == {}
    assert res.notes
    assert np.all(res.deflection.values == 0.0)
    assert res.max_moment == pytest.approx(500.0)
    assert any("no resueltas" in rec.getMessage() for rec in caplog.records)


def test_three_simple_supports_are_not_approximated():
    beam = make_beam(
        [Support("A", "pin", 0.0), Support("B", "roller", 5.0), Support("C", "roller", 10.0)],
        [UniformLoad("w", 0.0, 10.0, 1000.0)],
    )
    res = analyze(beam)
    assert res.classification == "unsolvable"
    assert res.reactions == {}


def test_torsion_flag_and_reaction():
    beam = make_beam([Support("F", "fixed", 0.0)], [Torque("T", 10.0, 100.0)])
    res = analyze(beam)
    assert res.has_torsion
    assert res.reaction_torque == pytest.approx(-100.0)
    assert res.max_angle_of_twist > 0.0
    # un torsor solo no flexiona
    assert res.max_moment == 0.0
    assert res.max_deflection == 0.0


def test_custom_station_count():
    res = analyze(default_beam(), AnalysisSettings(n_intervals=100))
    assert len(res.shear) == 101
    assert res.max_moment == pytest.approx(25000.0)
