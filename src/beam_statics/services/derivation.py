from __future__ import annotations

from typing import List, Optional

from beam_statics.domain.beam import BeamConfig
from beam_statics.domain.loads import (
    PointLoad, UniformLoad, VaryingLoad, AppliedMoment, Torque
)
from beam_statics.domain.results import AnalysisResult, SolverStep
from beam_statics.domain.units import SI, UnitSystem
from beam_statics.engine.deflection import BC_FIXED, BC_TWO_SUPPORTS
from beam_statics.engine.equilibrium import (
    CANTILEVER, SIMPLY_SUPPORTED, CLASSIFICATION_LABELS
)

# Nota: esta etapa NO calcula nada del motor. Solo arma texto a partir de
# BeamConfig + AnalysisResult ya calculados.


def describe_load(ld, u: UnitSystem) -> str:
    if isinstance(ld, PointLoad):
        return f"Carga puntual: P = {u.force_str(ld.magnitude)} en x = {u.length_str(ld.position)}"
    if isinstance(ld, UniformLoad):
        return (f"UDL: w = {ld.magnitude:g} N/m desde x = {u.length_str(ld.position)} "
                f"hasta {u.length_str(ld.end_position)}")
    if isinstance(ld, VaryingLoad):
        return (f"UVL: w₁ = {ld.magnitude:g} N/m → w₂ = {ld.end_magnitude:g} N/m desde "
                f"x = {u.length_str(ld.position)} hasta {u.length_str(ld.end_position)}")
    if isinstance(ld, AppliedMoment):
        return f"Momento aplicado: M = {u.moment_str(ld.magnitude)} en x = {u.length_str(ld.position)}"
    if isinstance(ld, Torque):
        return f"Torsor: T = {u.moment_str(ld.magnitude)} en x = {u.length_str(ld.position)}"
    return ""


def _load_equation(ld) -> str:
    if isinstance(ld, PointLoad):
        return f"P = {ld.magnitude:.2f} N @ x={ld.position:.2f} m"
    if isinstance(ld, UniformLoad):
        return f"w = {ld.magnitude:.2f} N/m [{ld.position:.2f} → {ld.end_position:.2f} m]"
    if isinstance(ld, VaryingLoad):
        return (f"w(x) = {ld.magnitude:.2f} + {ld.end_magnitude - ld.magnitude:.2f}·"
                f"(x−{ld.position:.2f})/{ld.span:.2f} N/m")
    if isinstance(ld, Torque):
        return f"T = {ld.magnitude:.2f} N·m @ x={ld.position:.2f} m"
    return f"M = {ld.magnitude:.2f} N·m @ x={ld.position:.2f} m"


def build_steps(beam: BeamConfig, result: AnalysisResult, units: Optional[UnitSystem] = None) -> List[SolverStep]:
    """
    Memoria de cálculo paso a paso (presentación). Se llama DESPUÉS de analyze();
    los valores numéricos salen de 'result', nunca se recalculan.
    """
    u = units or SI
    steps: List[SolverStep] = []
    n_st = len(result.shear)
    dx = beam.length / max(n_st - 1, 1)

    # 0) Planteo
    steps.append(SolverStep(
        title="0. Planteo del problema",
        description=(
            f"Longitud de la viga L = {beam.length:g} m.\n"
            f"Material: E = {beam.E / 1e9:.0f} GPa, G = {beam.G / 1e9:.0f} GPa.\n"
            f"Sección: I = {beam.I:.2e} m⁴, J = {beam.J:.2e} m⁴, altura = {beam.depth:g} m.\n"
            f"Gravedad: g = {beam.gravity:g} m/s²."
        ),
        equations=[f"L = {beam.length:g} m", f"E = {beam.E:.2e} Pa", f"I = {beam.I:.2e} m⁴"],
        result=f"Clasificación: {CLASSIFICATION_LABELS.get(result.classification, result.classification)}",
    ))

    # 1) Cargas
    lines = [f"  • {describe_load(ld, u)}" for ld in beam.loads]
    steps.append(SolverStep(
        title="1. Cargas aplicadas",
        description=f"{len(beam.loads)} carga(s) aplicada(s):\n" + "\n".join(lines),
        equations=[_load_equation(ld) for ld in beam.loads],
    ))

    # 2a) Resultantes
    eq_lines: List[str] = []
    for r in result.resultants:
        if r.kind == "moment":
            eq_lines.append(f"Momento {r.load_id}: aporta {r.moment_ref:.2f} N·m a ΣM (horario+)")
        else:
            eq_lines.append(
                f"{r.kind.upper()} {r.load_id}: P={r.force:.2f} N (centroide @ {r.centroid:.2f} m) "
                f"→ M = {r.moment_ref:.2f} N·m"
            )
    steps.append(SolverStep(
        title="2a. Resultantes de cargas",
        description="Reducción de cargas distribuidas a fuerzas equivalentes:\n" + "\n".join(eq_lines),
        equations=eq_lines,
    ))

    # 2b) Reacciones
    steps.append(_reaction_step(beam, result))

    # 3) / 4) Corte y momento
    steps.append(SolverStep(
        title="3. Diagrama de corte (SFD)",
        description=(
            "V(x) se obtiene sumando las fuerzas verticales a la IZQUIERDA del corte en x:\n\n"
            "  V(x) = Σ reacciones a la izquierda − Σ cargas a la izquierda\n\n"
            f"|V| máximo = {u.force_str(result.max_shear)}"
        ),
        equations=["V(x) = ΣFᵧ(izq. de x)", "UDL: V(x) = V₀ − w·(x−a)", f"|V|_max = {result.max_shear:.2f} N"],
        result=f"SFD calculado en {n_st} estaciones, dx = {dx:.4f} m",
    ))
    steps.append(SolverStep(
        title="4. Diagrama de momento flector (BMD)",
        description=(
            "M(x) se obtiene tomando momentos de las fuerzas a la IZQUIERDA del corte:\n\n"
            "  M(x) = Σ momentos de reacción + Σ fuerza × brazo\n\n"
            "Convención: momento positivo = sagging (tracción abajo).\n\n"
            f"|M| máximo = {u.moment_str(result.max_moment)}\n"
            "El máximo ocurre donde V = 0 (cambio de signo del corte)."
        ),
        equations=["M(x) = Σ Fᵢ·(x − xᵢ)", "dM/dx = V(x)", f"|M|_max = {result.max_moment:.2f} N·m"],
        result=result.moment_inference.summary,
    ))

    # 5) Tensión
    y = beam.depth / 2.0
    steps.append(SolverStep(
        title="5. Tensión de flexión",
        description=(
            "Fórmula de flexión σ = M·y / I:\n\n"
            f"  y = altura/2 = {y:.3f} m\n"
            f"  M_max = {u.moment_str(result.max_moment)}\n"
            f"  I = {beam.I:.3e} m⁴"
        ),
        equations=[
            "σ = M·y / I",
            f"σ_max = {result.max_moment:.2f} × {y:.3f} / {beam.I:.2e}",
            f"σ_max = {u.stress_str(result.max_stress)}",
        ],
        result=f"Tensión máxima de flexión = {u.stress_str(result.max_stress)}",
    ))

    # 6) Torsión
    if result.has_torsion:
        GJ = beam.GJ
        steps.append(SolverStep(
            title="6. Torsión y ángulo de giro",
            description=(
                "Se detectaron torsores. φ(x) se integra como T(x)/(GJ):\n\n"
                f"  GJ = {GJ:.3e} N·m²\n"
                f"  T_reacción = {result.reaction_torque:.2f} N·m"
            ),
            equations=["φ(x) = ∫₀ˣ T/(GJ) dξ", f"GJ = {GJ:.3e} N·m²"],
            result=f"|φ| máximo = {result.max_angle_of_twist:.6f} rad",
        ))

    # 7) / 8) Pendiente y flecha
    if result.deflection_boundary == BC_FIXED:
        bc = "  • Empotramiento: y = 0, θ = 0 en el extremo empotrado"
    elif result.deflection_boundary == BC_TWO_SUPPORTS:
        bc = "  • Apoyos simples: y = 0 en ambos apoyos"
    else:
        bc = "  • Sin condiciones de borde suficientes: θ = y = 0 (resultado degenerado)"
    steps.append(SolverStep(
        title="7. Pendiente y flecha",
        description=(
            "Doble integración de la ecuación de la elástica:\n\n"
            "  EI·d²y/dx² = M(x)  → θ(x) = dy/dx → y(x)\n\n"
            "Condiciones de borde:\n" + bc
        ),
        equations=["EI·d²y/dx² = M(x)", "EI·θ(x) = ∫M dx + C₁", "EI·y(x) = ∫∫M dx² + C₁·x + C₂"],
    ))
    steps.append(SolverStep(
        title="8. Flecha máxima",
        description=f"  δ_max = {u.deflection_str(result.max_deflection)}",
        equations=[f"δ_max = {result.max_deflection * 1000.0:.4f} mm"],
        result=f"Flecha máxima = {u.deflection_str(result.max_deflection)}",
    ))

    return steps


def _reaction_step(beam: BeamConfig, result: AnalysisResult) -> SolverStep:
    sum_F = sum(r.force for r in result.resultants)
    sum_M = sum(r.moment_ref for r in result.resultants)

    if result.classification == CANTILEVER:
        (r,) = result.reactions.values()
        Mz = r.Mz if r.Mz is not None else 0.0
        return SolverStep(
            title="2b. Reacciones — voladizo",
            description=(
                f"Empotramiento en x = {r.position:.2f} m:\n\n"
                f"  ΣFᵧ = 0  →  R = ΣP = {r.Fy:.2f} N (hacia arriba)\n"
                f"  ΣM = 0   →  M = −ΣM_cargas = {Mz:.2f} N·m"
            ),
            equations=[f"ΣFᵧ = 0: R_A = {r.Fy:.2f} N", f"ΣM_A = 0: M_A = {Mz:.2f} N·m"],
            result=f"R_A = {r.Fy:.2f} N ↑,  M_A = {Mz:.2f} N·m",
        )

    if result.classification == SIMPLY_SUPPORTED:
        ra, rb = sorted(result.reactions.values(), key=lambda r: r.position)
        span = rb.position - ra.position
        return SolverStep(
            title="2b. Reacciones — simplemente apoyada",
            description=(
                f"Apoyos A (x={ra.position:.2f} m) y B (x={rb.position:.2f} m), luz L = {span:.2f} m.\n\n"
                f"  ΣM_A = 0:  R_B = {sum_M:.2f} / {span:.2f} = {rb.Fy:.2f} N\n"
                f"  ΣFᵧ = 0:   R_A = {sum_F:.2f} − {rb.Fy:.2f} = {ra.Fy:.2f} N"
            ),
            equations=[
                f"ΣM_A = 0: R_B = {sum_M:.2f} / {span:.2f} = {rb.Fy:.2f} N",
                f"ΣFᵧ = 0: R_A = {ra.Fy:.2f} N",
            ],
            result=f"R_A = {ra.Fy:.2f} N ↑,  R_B = {rb.Fy:.2f} N ↑",
        )

    return SolverStep(
        title="2b. Reacciones — sin resolver",
        description="\n".join(result.notes[:1]) or "Configuración de apoyos no resoluble.",
    )
