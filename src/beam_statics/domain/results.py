from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple

import numpy as np


@dataclass(frozen=True)
class Reaction:
    """
    Reacción de un apoyo.
      - Fy: + hacia arriba (N)
      - Mz: solo empotramientos, par ejercido por el apoyo, horario+ (N·m);
            None en apoyos simples (en un empotramiento a la izquierda coincide con M(x) sagging+)
    """
    support_id: str
    position: float  # m
    Fy: float
    Mz: Optional[float] = None


@dataclass(frozen=True)
class LoadResultant:
    """Resultante equivalente de una carga y su momento respecto del apoyo de referencia."""
    load_id: str
    kind: str
    force: float        # N (down+)
    centroid: float     # m
    moment_ref: float   # N·m (horario+ respecto de x_ref)


@dataclass(frozen=True)
class ReactionSolution:
    classification: str                 # "cantilever" | "simply_supported" | "unsolvable"
    reactions: Dict[str, Reaction]
    x_ref: Optional[float]              # posición del apoyo de referencia (None si no se resolvió)
    sum_force: float                    # Σ resultantes (down+)
    sum_moment: float                   # Σ momentos respecto de x_ref (horario+)
    resultants: List[LoadResultant] = field(default_factory=list)
    notes: List[str] = field(default_factory=list)

    @property
    def solvable(self) -> bool:
        return self.classification != "unsolvable"

    @property
    def residual_fy(self) -> float:
        """ΣFy de reacciones (+arriba) menos cargas verticales (down+): debería ~0."""
        return float(sum(r.Fy for r in self.reactions.values()) - self.sum_force)

    @property
    def residual_moment(self) -> float:
        """ΣM respecto de x_ref (horario+) de cargas + reacciones: debería ~0."""
        if self.x_ref is None:
            return float(self.sum_moment)
        M = float(self.sum_moment)
        for r in self.reactions.values():
            # fuerza hacia arriba a la derecha de x_ref => antihorario
            M -= float(r.Fy) * (float(r.position) - float(self.x_ref))
            if r.Mz is not None:
                M += float(r.Mz)
        return M


@dataclass(frozen=True, eq=False)
class SampledSeries:
    """
    Serie muestreada en estaciones equiespaciadas sobre [0, L] (ambos extremos incluidos).
    Los arrays se guardan como solo-lectura.
    """
    x: np.ndarray
    values: np.ndarray

    def __post_init__(self):
        x = np.array(self.x, dtype=float)
        v = np.array(self.values, dtype=float)
        if x.shape != v.shape:
            raise ValueError(f"Serie inconsistente: {x.shape} posiciones vs {v.shape} valores.")
        x.setflags(write=False)
        v.setflags(write=False)
        object.__setattr__(self, "x", x)
        object.__setattr__(self, "values", v)

    def __len__(self) -> int:
        return int(self.x.size)

    def __iter__(self) -> Iterator[Tuple[float, float]]:
        return self.points()

    def points(self) -> Iterator[Tuple[float, float]]:
        for xi, vi in zip(self.x.tolist(), self.values.tolist()):
            yield xi, vi

    def max_abs(self) -> float:
        if self.values.size == 0:
            return 0.0
        return float(np.max(np.abs(self.values)))

    def value_at_station(self, i: int) -> float:
        return float(self.values[i])

    @classmethod
    def zeros(cls, x: np.ndarray) -> "SampledSeries":
        return cls(x=x, values=np.zeros_like(np.asarray(x, dtype=float)))


@dataclass(frozen=True)
class ChartInference:
    max_value: float
    max_position: float
    min_value: float
    min_position: float
    zero_crossings: Tuple[float, ...]
    summary: str


@dataclass(frozen=True)
class SolverStep:
    """Paso de la memoria de cálculo (texto de presentación, no numérico)."""
    title: str
    description: str
    equations: List[str] = field(default_factory=list)
    result: Optional[str] = None


@dataclass(frozen=True, eq=False)
class AnalysisResult:
    reactions: Dict[str, Reaction]

    shear: SampledSeries
    moment: SampledSeries
    slope: SampledSeries
    deflection: SampledSeries
    angle_of_twist: SampledSeries

    max_shear: float
    max_moment: float
    max_deflection: float
    max_stress: float
    max_angle_of_twist: float

    has_torsion: bool

    shear_inference: ChartInference
    moment_inference: ChartInference
    deflection_inference: ChartInference

    classification: str = ""
    reaction_torque: float = 0.0
    deflection_boundary: str = ""
    x_ref: Optional[float] = None
    resultants: List[LoadResultant] = field(default_factory=list)
    notes: List[str] = field(default_factory=list)

    @property
    def solvable(self) -> bool:
        return self.classification != "unsolvable"
