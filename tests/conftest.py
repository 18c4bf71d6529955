import pytest

from beam_statics.domain.beam import BeamConfig
from beam_statics.domain.loads import PointLoad, UniformLoad
from beam_statics.domain.supports import Support

E = 200e9
I = 1e-4


def make_beam(supports, loads, L=10.0, E=E, I=I, G=77e9, J=1e-4, depth=0.5):
    return BeamConfig(length=L, E=E, G=G, I=I, J=J, depth=depth, supports=supports, loads=loads)


@pytest.fixture
def simply_supported_point():
    """L=10 m, P=10 kN al centro."""
    return make_beam(
        [Support("A", "pin", 0.0), Support("B", "roller", 10.0)],
        [PointLoad("P", 5.0, 10000.0)],
    )


@pytest.fixture
def simply_supported_udl():
    """L=10 m, w=1 kN/m en toda la luz."""
    return make_beam(
        [Support("A", "pin", 0.0), Support("B", "roller", 10.0)],
        [UniformLoad("w", 0.0, 10.0, 1000.0)],
    )


@pytest.fixture
def cantilever_tip():
    """Empotrada en x=0, P=5 kN en el extremo libre (L=3 m)."""
    return make_beam(
        [Support("F", "fixed", 0.0)],
        [PointLoad("P", 3.0, 5000.0)],
        L=3.0,
    )
