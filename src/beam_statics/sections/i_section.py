from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

MM_TO_M = 1e-3
IN_TO_M = 0.0254


def _rect_Ix_about_centroid(b: float, h: float) -> float:
    """Ix de un rectángulo b (ancho) x h (alto), respecto a su centroide (eje horizontal)."""
    return (b * h**3) / 12.0


@dataclass(frozen=True)
class ISection:
    """
    Sección doble T idealizada: 3 rectángulos (ala inf + alma + ala sup).
    Todas las dimensiones en m.

    Convención de y: y=0 en la cara inferior, y positivo hacia arriba.
    """
    b_f: float       # ancho de alas
    t_top: float     # espesor ala superior
    t_bot: float     # espesor ala inferior
    h_web: float     # altura libre del alma entre alas
    t_web: float     # espesor del alma

    @classmethod
    def from_mm(cls, b_f: float, t_top: float, t_bot: float, h_web: float, t_web: float) -> "ISection":
        return cls(b_f * MM_TO_M, t_top * MM_TO_M, t_bot * MM_TO_M, h_web * MM_TO_M, t_web * MM_TO_M)

    @property
    def H_m(self) -> float:
        return float(self.t_bot + self.h_web + self.t_top)

    def props(self) -> Dict[str, float]:
        """
        Devuelve propiedades geométricas (m / m^4 / m^3):
          - H_m
          - ybar_m (desde base)
          - Ix_m4 (sobre eje x que pasa por el centroide)
          - J_m4 (sección abierta de pared delgada: Σ b·t³/3)
          - c_top_m, c_bot_m, c_max_m
          - W_top_m3, W_bot_m3, Wcrit_m3  (elástico)
        """
        b = float(self.b_f)
        ttop = float(self.t_top)
        tbot = float(self.t_bot)
        h = float(self.h_web)
        tw = float(self.t_web)

        H = self.H_m

        # Áreas
        A_bot = b * tbot
        A_web = tw * h
        A_top = b * ttop
        A_tot = A_bot + A_web + A_top

        # Centroides (y desde base)
        y_bot = tbot / 2.0
        y_web = tbot + h / 2.0
        y_top = tbot + h + ttop / 2.0

        # Eje neutro
        ybar = (A_bot * y_bot + A_web * y_web + A_top * y_top) / A_tot

        # Ix por teorema de ejes paralelos
        Ix_bot = _rect_Ix_about_centroid(b, tbot) + A_bot * (y_bot - ybar) ** 2
        Ix_web = _rect_Ix_about_centroid(tw, h) + A_web * (y_web - ybar) ** 2
        Ix_top = _rect_Ix_about_centroid(b, ttop) + A_top * (y_top - ybar) ** 2
        Ix = Ix_bot + Ix_web + Ix_top

        # Torsión uniforme (Saint-Venant), rectángulos delgados
        J = (b * tbot**3 + h * tw**3 + b * ttop**3) / 3.0

        # Distancias a fibras extremas
        c_bot = ybar
        c_top = H - ybar
        c_max = max(c_bot, c_top)

        # Módulos resistentes elásticos
        W_bot = Ix / c_bot if c_bot > 0 else 0.0
        W_top = Ix / c_top if c_top > 0 else 0.0
        Wcrit = Ix / c_max if c_max > 0 else 0.0

        return {
            "H_m": H,
            "A_m2": A_tot,
            "ybar_m": ybar,
            "Ix_m4": Ix,
            "J_m4": J,
            "c_bot_m": c_bot,
            "c_top_m": c_top,
            "c_max_m": c_max,
            "W_bot_m3": W_bot,
            "W_top_m3": W_top,
            "Wcrit_m3": Wcrit,
        }
