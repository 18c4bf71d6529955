import pytest

from beam_statics.domain.units import UNIT_SYSTEMS, get_unit_system


def test_si_formatting():
    u = UNIT_SYSTEMS["SI"]
    assert u.force_str(1234.5) == "1234.50 N"
    assert u.moment_str(10.0) == "10.00 N·m"
    assert u.deflection_str(0.0125) == "12.500 mm"
    assert u.length_str(2.0) == "2.000 m"


def test_knm_formatting():
    u = get_unit_system("kNm")
    assert u.force_str(1500.0) == "1.500 kN"
    assert u.stress_str(2.5e6) == "2.500 MPa"


def test_imperial_formatting():
    u = get_unit_system("Imperial")
    assert u.force_str(1000.0) == "224.800 lbf"
    assert u.length_str(1.0) == "3.281 ft"
    assert u.deflection_str(0.0254) == "1.0000 in"


def test_unknown_unit_system():
    with pytest.raises(ValueError, match="desconocido"):
        get_unit_system("cgs")
