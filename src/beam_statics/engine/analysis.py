# path: src/beam_statics/engine/analysis.py
from __future__ import annotations

import logging
from typing import List, Optional

from beam_statics.domain.beam import BeamConfig
from beam_statics.domain.results import AnalysisResult
from beam_statics.domain.units import SI
from beam_statics.engine.deflection import integrate_deflection
from beam_statics.engine.diagrams import build_internal_forces
from beam_statics.engine.equilibrium import solve_reactions
from beam_statics.engine.inference import compute_chart_inference
from beam_statics.engine.settings import AnalysisSettings, DEFAULT_SETTINGS
from beam_statics.engine.stress import max_bending_stress
from beam_statics.engine.torsion import integrate_twist

logger = logging.getLogger(__name__)


def analyze(beam: BeamConfig, settings: Optional[AnalysisSettings] = None) -> AnalysisResult:
    """
    Análisis estático completo (función pura, sin I/O):

      reacciones -> V(x), M(x) -> {σ_max, φ(x), θ(x)/y(x)} -> inferencias

    Configuraciones de apoyo no resolubles no lanzan excepción: las reacciones
    quedan vacías, se agrega una nota y el resto de las etapas continúa.
    """
    settings = settings or DEFAULT_SETTINGS
    notes: List[str] = []

    sol = solve_reactions(beam, settings)
    notes.extend(sol.notes)
    logger.debug("Clasificación: %s (%d reacciones)", sol.classification, len(sol.reactions))

    forces = build_internal_forces(beam, sol.reactions.values(), settings)
    sigma = max_bending_stress(forces.max_moment, beam.depth, beam.I)

    tors = integrate_twist(beam, settings)
    notes.extend(tors.notes)

    defl = integrate_deflection(beam, forces.moment, settings)
    notes.extend(defl.notes)

    for n in notes:
        logger.warning("%s", n)

    result = AnalysisResult(
        reactions=dict(sol.reactions),
        shear=forces.shear,
        moment=forces.moment,
        slope=defl.slope,
        deflection=defl.deflection,
        angle_of_twist=tors.angle_of_twist,
        max_shear=forces.max_shear,
        max_moment=forces.max_moment,
        max_deflection=defl.max_deflection,
        max_stress=sigma,
        max_angle_of_twist=tors.max_angle_of_twist,
        has_torsion=tors.has_torsion,
        shear_inference=compute_chart_inference(forces.shear, "esfuerzo de corte", SI.force_str),
        moment_inference=compute_chart_inference(forces.moment, "momento flector", SI.moment_str),
        deflection_inference=compute_chart_inference(defl.deflection, "flecha", SI.deflection_str),
        classification=sol.classification,
        reaction_torque=tors.reaction_torque,
        deflection_boundary=defl.boundary,
        x_ref=sol.x_ref,
        resultants=list(sol.resultants),
        notes=notes,
    )

    logger.debug(
        "|V|max=%g N, |M|max=%g N·m, σmax=%g Pa, |y|max=%g m, |φ|max=%g rad",
        result.max_shear, result.max_moment, result.max_stress,
        result.max_deflection, result.max_angle_of_twist,
    )
    return result
