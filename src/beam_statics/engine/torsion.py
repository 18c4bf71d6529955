from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List

import numpy as np

from beam_statics.domain.beam import BeamConfig
from beam_statics.domain.loads import Torque
from beam_statics.domain.results import SampledSeries
from beam_statics.engine.diagrams import stations
from beam_statics.engine.settings import AnalysisSettings, DEFAULT_SETTINGS

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class TorsionResult:
    angle_of_twist: SampledSeries
    max_angle_of_twist: float
    has_torsion: bool
    reaction_torque: float = 0.0
    notes: List[str] = field(default_factory=list)


def integrate_twist(beam: BeamConfig, settings: AnalysisSettings = DEFAULT_SETTINGS) -> TorsionResult:
    """
    Ángulo de giro φ(x) por acumulación hacia adelante desde x=0:

      T(x)   = T_reac + Σ T_i (x_i <= x)
      φ(0)   = 0
      φ(x_i) = φ(x_{i-1}) + T(x_i)/(G·J) · dx

    T_reac = -ΣT_i solo si hay un empotramiento exactamente en x=0; en otro
    caso se toma 0 (el equilibrio torsional no se impone: limitación del modelo).
    """
    x, dx = stations(beam.length, settings.n_intervals)
    eps = float(settings.zero_eps)
    torques = [ld for ld in beam.loads if isinstance(ld, Torque)]

    if not torques:
        return TorsionResult(
            angle_of_twist=SampledSeries.zeros(x),
            max_angle_of_twist=0.0,
            has_torsion=False,
        )

    notes: List[str] = []
    fixed_at_start = next(
        (s for s in beam.supports if s.is_fixed and abs(float(s.position)) <= eps),
        None,
    )
    if fixed_at_start is not None:
        T_reac = -sum(float(t.magnitude) for t in torques)
    else:
        T_reac = 0.0
        notes.append(
            "Torsión: sin empotramiento en x=0, se toma torque de reacción = 0 "
            "(equilibrio torsional no impuesto)."
        )

    T = np.full_like(x, T_reac)
    for t in torques:
        T += np.where(x >= float(t.position) - eps, float(t.magnitude), 0.0)

    # G·J <= 0 es precondición del llamador (resultado inf/nan)
    with np.errstate(divide="ignore", invalid="ignore"):
        increments = (T[1:] / np.float64(beam.GJ)) * dx
    phi = np.concatenate(([0.0], np.cumsum(increments)))

    twist = SampledSeries(x=x, values=phi)
    logger.debug("Torsión: T_reac=%g N·m, φ_max=%g rad", T_reac, twist.max_abs())
    return TorsionResult(
        angle_of_twist=twist,
        max_angle_of_twist=twist.max_abs(),
        has_torsion=True,
        reaction_torque=float(T_reac),
        notes=notes,
    )
