from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Tuple

import numpy as np

from beam_statics.domain.beam import BeamConfig
from beam_statics.domain.results import SampledSeries
from beam_statics.engine.diagrams import station_index
from beam_statics.engine.settings import AnalysisSettings, DEFAULT_SETTINGS

logger = logging.getLogger(__name__)

BC_FIXED = "fixed"
BC_TWO_SUPPORTS = "two_supports"
BC_NONE = "none"


@dataclass(frozen=True, eq=False)
class DeflectionResult:
    slope: SampledSeries
    deflection: SampledSeries
    max_deflection: float
    boundary: str
    C1: float = 0.0
    C2: float = 0.0
    notes: List[str] = field(default_factory=list)


def trapezoid_scan(values: np.ndarray, dx: float) -> np.ndarray:
    """
    Integral acumulada por trapecios, F(0) = 0:
      F(x_i) = F(x_{i-1}) + (v_{i-1} + v_i)/2 · dx
    """
    v = np.asarray(values, dtype=float)
    out = np.concatenate(([0.0], np.cumsum(((v[:-1] + v[1:]) / 2.0) * dx)))
    out.setflags(write=False)
    return out


def integration_constants(
    beam: BeamConfig,
    S: np.ndarray,
    D: np.ndarray,
    n_intervals: int,
) -> Tuple[str, float, float, List[str]]:
    """
    Resuelve C1, C2 con condiciones de borde (en la estación más cercana):

    - empotramiento en k:  θ=0, y=0  =>  C1 = -S_k,  C2 = -D_k - C1·x_k
    - sin empotramiento, >=2 apoyos (A, B los de menor x):
        y_A = y_B = 0  =>  C1 = -(D_B - D_A)/(x_B - x_A),  C2 = -D_A - C1·x_A
    - otro caso: sin constantes (pendiente y flecha se reportan nulas)
    """
    L = float(beam.length)
    fixed = next((s for s in beam.supports if s.is_fixed), None)

    if fixed is not None:
        k = station_index(fixed.position, L, n_intervals)
        x_k = float(fixed.position)
        C1 = -float(S[k])
        C2 = -float(D[k]) - C1 * x_k
        return BC_FIXED, C1, C2, []

    if len(beam.supports) >= 2:
        a, b = sorted(beam.supports, key=lambda s: float(s.position))[:2]
        x_a = float(a.position)
        x_b = float(b.position)
        if x_b - x_a <= 0.0:
            return BC_NONE, 0.0, 0.0, [
                f'Flecha no determinada: apoyos "{a.id}" y "{b.id}" coinciden en x={x_a:g} m.'
            ]
        i_a = station_index(x_a, L, n_intervals)
        i_b = station_index(x_b, L, n_intervals)
        C1 = -(float(D[i_b]) - float(D[i_a])) / (x_b - x_a)
        C2 = -float(D[i_a]) - C1 * x_a
        return BC_TWO_SUPPORTS, C1, C2, []

    return BC_NONE, 0.0, 0.0, [
        "Flecha no determinada: condiciones de borde insuficientes (pendiente y flecha = 0)."
    ]


def integrate_deflection(
    beam: BeamConfig,
    moment: SampledSeries,
    settings: AnalysisSettings = DEFAULT_SETTINGS,
) -> DeflectionResult:
    """
    Doble integración de la curvatura M/(E·I):

      S(x) = ∫M dx       = E·I·θ(x) - C1
      D(x) = ∫S dx       = E·I·y(x) - C1·x - C2

      θ(x) = (S + C1)/(E·I)
      y(x) = (D + C1·x + C2)/(E·I)
    """
    x = moment.x
    n = int(settings.n_intervals)
    dx = float(beam.length) / n

    S = trapezoid_scan(moment.values, dx)
    D = trapezoid_scan(S, dx)

    boundary, C1, C2, notes = integration_constants(beam, S, D, n)

    if boundary == BC_NONE:
        slope = SampledSeries.zeros(x)
        defl = SampledSeries.zeros(x)
    else:
        # E·I <= 0 es precondición del llamador (resultado inf/nan)
        EI = np.float64(beam.EI)
        with np.errstate(divide="ignore", invalid="ignore"):
            slope = SampledSeries(x=x, values=(S + C1) / EI)
            defl = SampledSeries(x=x, values=(D + C1 * x + C2) / EI)

    logger.debug("Flecha: borde=%s, C1=%g, C2=%g, y_max=%g m", boundary, C1, C2, defl.max_abs())
    return DeflectionResult(
        slope=slope,
        deflection=defl,
        max_deflection=defl.max_abs(),
        boundary=boundary,
        C1=C1,
        C2=C2,
        notes=notes,
    )
