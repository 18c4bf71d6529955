from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from beam_statics.domain.loads import (
    Load, PointLoad, UniformLoad, VaryingLoad, AppliedMoment, Torque, load_kind
)
from beam_statics.domain.results import LoadResultant
from beam_statics.engine.settings import DEFAULT_SETTINGS


def trapezoid_resultant(w1: float, w2: float, length: float, *, tol: float) -> Tuple[float, float]:
    """
    Resultante de una distribuida trapezoidal w1 -> w2 sobre 'length'.
    Devuelve (P, x_c) con x_c medido desde el inicio del tramo.

      P   = (w1 + w2)/2 · length
      x_c = length/3 · (w1 + 2·w2)/(w1 + w2)     (length/2 si w1 + w2 ≈ 0)
    """
    P = ((w1 + w2) / 2.0) * length
    denom = w1 + w2
    if abs(denom) > tol:
        x_c = (length / 3.0) * ((w1 + 2.0 * w2) / denom)
    else:
        x_c = length / 2.0
    return P, x_c


def resultant_of(load: Load, x_ref: float, *, tol: float = DEFAULT_SETTINGS.centroid_tol) -> Optional[LoadResultant]:
    """
    Reduce una carga a fuerza equivalente + momento respecto de x_ref (horario+).
    Torques no participan en la flexión: devuelve None.
    """
    kind = load_kind(load)

    if isinstance(load, PointLoad):
        P = float(load.magnitude)
        x = float(load.position)
        return LoadResultant(load.id, kind, P, x, P * (x - x_ref))

    if isinstance(load, UniformLoad):
        length = load.span
        P = float(load.magnitude) * length
        cen = float(load.position) + length / 2.0
        return LoadResultant(load.id, kind, P, cen, P * (cen - x_ref))

    if isinstance(load, VaryingLoad):
        length = load.span
        P, x_c = trapezoid_resultant(float(load.magnitude), float(load.end_magnitude), length, tol=tol)
        cen = float(load.position) + x_c
        return LoadResultant(load.id, kind, P, cen, P * (cen - x_ref))

    if isinstance(load, AppliedMoment):
        # + antihorario => resta en la suma horaria
        return LoadResultant(load.id, kind, 0.0, float(load.position), -float(load.magnitude))

    if isinstance(load, Torque):
        return None

    raise TypeError(f"Tipo de carga no soportado: {type(load).__name__}")


def sum_resultants(
    loads: Sequence[Load],
    x_ref: float,
    *,
    tol: float = DEFAULT_SETTINGS.centroid_tol,
) -> Tuple[float, float, List[LoadResultant]]:
    """
    Devuelve:
      sum_force: Σ fuerzas equivalentes (down+)
      sum_moment: Σ momentos respecto de x_ref (horario+)
      rows: resultantes individuales (para la memoria)
    """
    sum_force = 0.0
    sum_moment = 0.0
    rows: List[LoadResultant] = []
    for ld in loads:
        r = resultant_of(ld, x_ref, tol=tol)
        if r is None:
            continue
        sum_force += r.force
        sum_moment += r.moment_ref
        rows.append(r)
    return sum_force, sum_moment, rows
