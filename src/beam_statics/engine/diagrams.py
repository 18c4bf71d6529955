from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Tuple

import numpy as np

from beam_statics.domain.beam import BeamConfig
from beam_statics.domain.loads import (
    Load, PointLoad, UniformLoad, VaryingLoad, AppliedMoment, Torque
)
from beam_statics.domain.results import Reaction, SampledSeries
from beam_statics.engine.settings import AnalysisSettings, DEFAULT_SETTINGS


def stations(length: float, n_intervals: int) -> Tuple[np.ndarray, float]:
    """Estaciones x_i = i·dx, i = 0..n (incluye ambos extremos). Devuelve (x, dx)."""
    dx = float(length) / int(n_intervals)
    x = np.arange(int(n_intervals) + 1, dtype=float) * dx
    return x, dx


def station_index(position: float, length: float, n_intervals: int) -> int:
    """Índice de la estación más cercana a 'position' (redondeo half-up)."""
    k = int(np.floor(float(position) / float(length) * int(n_intervals) + 0.5))
    return min(max(k, 0), int(n_intervals))


@dataclass(frozen=True, eq=False)
class InternalForces:
    """
    V(x) y M(x) por corte a la izquierda (left-of-cut).

    Convención:
    - V: Σ fuerzas verticales a la izquierda del corte (+ arriba)
    - M: Σ fuerza·brazo a la izquierda del corte (sagging+)
    """
    shear: SampledSeries
    moment: SampledSeries
    dx: float
    max_shear: float
    max_moment: float


# -------------------------
# Contribuciones vectorizadas (una carga sobre todas las estaciones)
# -------------------------
def _active(x: np.ndarray, a: float, eps: float) -> np.ndarray:
    return x >= (a - eps)


def load_contributions(
    load: Load,
    x: np.ndarray,
    *,
    eps: float = DEFAULT_SETTINGS.zero_eps,
    tol: float = DEFAULT_SETTINGS.centroid_tol,
) -> Tuple[np.ndarray, np.ndarray]:
    """Devuelve (dV, dM) de una carga 'down+' para las estaciones x."""
    dV = np.zeros_like(x, dtype=float)
    dM = np.zeros_like(x, dtype=float)

    if isinstance(load, PointLoad):
        a = float(load.position)
        H = _active(x, a, eps)
        P = float(load.magnitude)
        dV = np.where(H, -P, 0.0)
        dM = np.where(H, -P * (x - a), 0.0)

    elif isinstance(load, AppliedMoment):
        H = _active(x, float(load.position), eps)
        dM = np.where(H, -float(load.magnitude), 0.0)

    elif isinstance(load, UniformLoad):
        a = float(load.position)
        b = float(load.end_position)
        H = _active(x, a, eps)
        eff = np.where(H, np.minimum(x, b) - a, 0.0)
        eff = np.maximum(eff, 0.0)
        P = float(load.magnitude) * eff
        cen = a + eff / 2.0
        dV = -P
        dM = -P * (x - cen)

    elif isinstance(load, VaryingLoad):
        a = float(load.position)
        b = float(load.end_position)
        span = b - a
        if span > 0.0:
            w1 = float(load.magnitude)
            w2 = float(load.end_magnitude)
            H = _active(x, a, eps)
            u = np.maximum(np.where(H, np.minimum(x, b) - a, 0.0), 0.0)
            wu = w1 + (w2 - w1) * (u / span)
            P = ((w1 + wu) / 2.0) * u
            denom = w1 + wu
            ok = np.abs(denom) > tol
            safe = np.where(ok, denom, 1.0)
            x_c = np.where(ok, (u / 3.0) * ((w1 + 2.0 * wu) / safe), u / 2.0)
            dV = -P
            dM = -P * (x - (a + x_c))

    elif isinstance(load, Torque):
        pass  # no participa en flexión

    else:
        raise TypeError(f"Tipo de carga no soportado: {type(load).__name__}")

    return dV, dM


def reaction_contributions(
    reaction: Reaction,
    x: np.ndarray,
    *,
    eps: float = DEFAULT_SETTINGS.zero_eps,
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Reacción expresada como 'carga' con signo invertido:
      - fuerza puntual de magnitud -Fy (down+)
      - momento aplicado de magnitud -Mz (si existe)
    Reacciones menores que eps se ignoran.
    """
    dV = np.zeros_like(x, dtype=float)
    dM = np.zeros_like(x, dtype=float)
    a = float(reaction.position)
    H = _active(x, a, eps)

    if abs(float(reaction.Fy)) > eps:
        P = -float(reaction.Fy)
        dV = dV + np.where(H, -P, 0.0)
        dM = dM + np.where(H, -P * (x - a), 0.0)

    if reaction.Mz is not None and abs(float(reaction.Mz)) > eps:
        m = -float(reaction.Mz)
        dM = dM + np.where(H, -m, 0.0)

    return dV, dM


def build_internal_forces(
    beam: BeamConfig,
    reactions: Iterable[Reaction],
    settings: AnalysisSettings = DEFAULT_SETTINGS,
) -> InternalForces:
    """
    Muestrea V(x) y M(x) en n+1 estaciones.

    Cargas aplicadas y reacciones se mantienen como dos conjuntos separados y
    recién se combinan al sumar en cada estación (conjunto efectivo).
    """
    x, dx = stations(beam.length, settings.n_intervals)
    eps = float(settings.zero_eps)

    V_app = np.zeros_like(x)
    M_app = np.zeros_like(x)
    for ld in beam.loads:
        dV, dM = load_contributions(ld, x, eps=eps, tol=settings.centroid_tol)
        V_app += dV
        M_app += dM

    V_rea = np.zeros_like(x)
    M_rea = np.zeros_like(x)
    for r in reactions:
        dV, dM = reaction_contributions(r, x, eps=eps)
        V_rea += dV
        M_rea += dM

    V = V_app + V_rea
    M = M_app + M_rea

    # residuos de cancelación (p.ej. V(L) = R_A - wL + R_B)
    V[np.abs(V) < eps] = 0.0
    M[np.abs(M) < eps] = 0.0

    shear = SampledSeries(x=x, values=V)
    moment = SampledSeries(x=x, values=M)
    return InternalForces(
        shear=shear,
        moment=moment,
        dx=dx,
        max_shear=shear.max_abs(),
        max_moment=moment.max_abs(),
    )
