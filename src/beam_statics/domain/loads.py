from __future__ import annotations
from dataclasses import dataclass
from typing import Union

# Convención: magnitudes de fuerza / intensidad positivas hacia abajo.
# Momentos aplicados: + antihorario (un momento m a la izquierda del corte suma -m a M(x)).


@dataclass(frozen=True)
class PointLoad:
    id: str
    position: float   # m
    magnitude: float  # N (down+)


@dataclass(frozen=True)
class UniformLoad:
    """Carga distribuida uniforme (UDL) sobre [position, end_position]."""
    id: str
    position: float
    end_position: float
    magnitude: float  # N/m (down+)

    @property
    def span(self) -> float:
        return float(self.end_position - self.position)


@dataclass(frozen=True)
class VaryingLoad:
    """
    Carga distribuida linealmente variable (UVL):
    magnitude en position, end_magnitude en end_position.
    """
    id: str
    position: float
    end_position: float
    magnitude: float      # N/m al inicio (down+)
    end_magnitude: float  # N/m al final (down+)

    @property
    def span(self) -> float:
        return float(self.end_position - self.position)


@dataclass(frozen=True)
class AppliedMoment:
    id: str
    position: float
    magnitude: float  # N·m (+ antihorario)


@dataclass(frozen=True)
class Torque:
    id: str
    position: float
    magnitude: float  # N·m alrededor del eje x


Load = Union[PointLoad, UniformLoad, VaryingLoad, AppliedMoment, Torque]

_KIND_BY_TYPE = {
    PointLoad: "point",
    UniformLoad: "udl",
    VaryingLoad: "uvl",
    AppliedMoment: "moment",
    Torque: "torque",
}


def load_kind(load: Load) -> str:
    """Tag corto del tipo de carga ("point", "udl", "uvl", "moment", "torque")."""
    try:
        return _KIND_BY_TYPE[type(load)]
    except KeyError:
        raise TypeError(f"Tipo de carga no soportado: {type(load).__name__}") from None


def is_distributed(load: Load) -> bool:
    return isinstance(load, (UniformLoad, VaryingLoad))
