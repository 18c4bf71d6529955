from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

# Factores desde SI (los mismos que usa el editor)
N_TO_KN = 1e-3
N_TO_LBF = 0.2248
NM_TO_LBFFT = 0.7376
PA_TO_MPA = 1e-6
PA_TO_PSI = 0.000145
M_TO_FT = 3.28084
M_TO_MM = 1000.0
M_TO_IN = 39.3701


@dataclass(frozen=True)
class UnitSystem:
    """
    Sistema de unidades SOLO para mostrar. El motor siempre trabaja en SI
    (m, N, Pa, rad).
    """
    system: str
    length: str
    force: str
    moment: str
    stress: str
    deflection: str
    distributed: str

    def force_str(self, v: float) -> str:
        if self.system == "kNm":
            return f"{v * N_TO_KN:.3f} kN"
        if self.system == "Imperial":
            return f"{v * N_TO_LBF:.3f} lbf"
        return f"{v:.2f} N"

    def moment_str(self, v: float) -> str:
        if self.system == "kNm":
            return f"{v * N_TO_KN:.3f} kN·m"
        if self.system == "Imperial":
            return f"{v * NM_TO_LBFFT:.3f} lbf·ft"
        return f"{v:.2f} N·m"

    def deflection_str(self, v: float) -> str:
        if self.system == "Imperial":
            return f"{v * M_TO_IN:.4f} in"
        return f"{v * M_TO_MM:.3f} mm"

    def stress_str(self, v: float) -> str:
        if self.system == "kNm":
            return f"{v * PA_TO_MPA:.3f} MPa"
        if self.system == "Imperial":
            return f"{v * PA_TO_PSI:.3f} psi"
        return f"{v:.2f} Pa"

    def length_str(self, v: float) -> str:
        if self.system == "Imperial":
            return f"{v * M_TO_FT:.3f} ft"
        return f"{v:.3f} m"


UNIT_SYSTEMS: Dict[str, UnitSystem] = {
    "SI": UnitSystem("SI", "m", "N", "N·m", "Pa", "mm", "N/m"),
    "kNm": UnitSystem("kNm", "m", "kN", "kN·m", "MPa", "mm", "kN/m"),
    "Imperial": UnitSystem("Imperial", "ft", "lbf", "lbf·ft", "psi", "in", "lbf/ft"),
}

SI = UNIT_SYSTEMS["SI"]


def get_unit_system(name: str) -> UnitSystem:
    key = (name or "").strip()
    try:
        return UNIT_SYSTEMS[key]
    except KeyError:
        raise ValueError(f'Sistema de unidades desconocido: "{name}" (opciones: {", ".join(UNIT_SYSTEMS)}).') from None
