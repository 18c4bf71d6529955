from __future__ import annotations

import logging
from typing import List, Sequence, Tuple

from beam_statics.domain.beam import BeamConfig
from beam_statics.domain.results import Reaction, ReactionSolution
from beam_statics.domain.supports import Support
from beam_statics.engine.resultants import sum_resultants
from beam_statics.engine.settings import AnalysisSettings, DEFAULT_SETTINGS

logger = logging.getLogger(__name__)

CANTILEVER = "cantilever"
SIMPLY_SUPPORTED = "simply_supported"
UNSOLVABLE = "unsolvable"

CLASSIFICATION_LABELS = {
    CANTILEVER: "Viga en voladizo (empotrada)",
    SIMPLY_SUPPORTED: "Viga simplemente apoyada",
    UNSOLVABLE: "Viga sin resolver (apoyos insuficientes o hiperestática)",
}


def _sorted_supports(supports: Sequence[Support]) -> List[Support]:
    # sorted() es estable: a igual posición se respeta el orden de ingreso
    return sorted(supports, key=lambda s: float(s.position))


def classify_supports(supports: Sequence[Support]) -> Tuple[str, str]:
    """
    Clasifica el conjunto de apoyos. Devuelve (clasificación, motivo).

      - exactamente un empotramiento y nada más  -> voladizo
      - exactamente dos apoyos, ninguno empotrado -> simplemente apoyada
      - cualquier otro caso                       -> sin resolver (no se aproxima)
    """
    n = len(supports)
    n_fixed = sum(1 for s in supports if s.is_fixed)

    if n == 1 and n_fixed == 1:
        return CANTILEVER, ""
    if n == 2 and n_fixed == 0:
        a, b = _sorted_supports(supports)
        if float(b.position) - float(a.position) <= 0.0:
            return UNSOLVABLE, f'Apoyos "{a.id}" y "{b.id}" en la misma posición x={a.position:g} m: luz nula.'
        return SIMPLY_SUPPORTED, ""

    if n == 0:
        return UNSOLVABLE, "No hay apoyos definidos."
    if n == 1:
        return UNSOLVABLE, f'Un solo apoyo simple ("{supports[0].id}"): mecanismo, faltan restricciones.'
    if n_fixed > 0:
        return UNSOLVABLE, (
            f"Combinación de {n_fixed} empotramiento(s) con {n - n_fixed} apoyo(s) adicional(es): "
            "estáticamente indeterminada."
        )
    return UNSOLVABLE, f"{n} apoyos simples: viga continua (hiperestática), no soportada."


def solve_reactions(beam: BeamConfig, settings: AnalysisSettings = DEFAULT_SETTINGS) -> ReactionSolution:
    """
    Resuelve reacciones por equilibrio global (solución cerrada, 2 incógnitas):

    Voladizo (empotramiento en x_f):
      ΣFy = 0   =>  R = ΣP
      ΣM_f = 0  =>  Mz = -ΣM_f(cargas)          (horario+)

    Simplemente apoyada (A en x_A < B en x_B):
      ΣM_A = 0  =>  R_B = ΣM_A(cargas) / (x_B - x_A)
      ΣFy = 0   =>  R_A = ΣP - R_B

    Otros casos: reacciones vacías + nota de diagnóstico (sin fallback numérico).
    """
    classification, reason = classify_supports(beam.supports)
    tol = settings.centroid_tol

    if classification == CANTILEVER:
        fixed = beam.supports[0]
        x_f = float(fixed.position)
        sum_force, sum_moment, rows = sum_resultants(beam.loads, x_f, tol=tol)

        Ry = sum_force
        Mz = -sum_moment
        logger.debug("Voladizo en x=%g: R=%g N, Mz=%g N·m", x_f, Ry, Mz)
        return ReactionSolution(
            classification=classification,
            reactions={fixed.id: Reaction(support_id=fixed.id, position=x_f, Fy=Ry, Mz=Mz)},
            x_ref=x_f,
            sum_force=sum_force,
            sum_moment=sum_moment,
            resultants=rows,
        )

    if classification == SIMPLY_SUPPORTED:
        a, b = _sorted_supports(beam.supports)
        x_a = float(a.position)
        x_b = float(b.position)
        span = x_b - x_a
        sum_force, sum_moment, rows = sum_resultants(beam.loads, x_a, tol=tol)

        R_b = sum_moment / span
        R_a = sum_force - R_b
        logger.debug("Simplemente apoyada [%g, %g]: R_A=%g N, R_B=%g N", x_a, x_b, R_a, R_b)
        return ReactionSolution(
            classification=classification,
            reactions={
                a.id: Reaction(support_id=a.id, position=x_a, Fy=R_a),
                b.id: Reaction(support_id=b.id, position=x_b, Fy=R_b),
            },
            x_ref=x_a,
            sum_force=sum_force,
            sum_moment=sum_moment,
            resultants=rows,
        )

    # Sin resolver: no se intenta aproximar
    sum_force, _, rows = sum_resultants(beam.loads, 0.0, tol=tol)
    notes = [f"Reacciones no resueltas: {reason} Se requieren 2 apoyos simples o 1 empotramiento."]
    return ReactionSolution(
        classification=classification,
        reactions={},
        x_ref=None,
        sum_force=sum_force,
        sum_moment=0.0,
        resultants=rows,
        notes=notes,
    )
