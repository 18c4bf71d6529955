from __future__ import annotations

import numpy as np


def max_bending_stress(max_moment: float, depth: float, I: float) -> float:
    """
    Fórmula de flexión con la fibra extrema a depth/2 del eje neutro:
      σ_max = M_max · (depth/2) / I

    Unidades: N·m, m, m^4 -> Pa. I <= 0 es precondición del llamador
    (resultado inf/nan, no se corrige).
    """
    y = float(depth) / 2.0
    with np.errstate(divide="ignore", invalid="ignore"):
        sigma = np.float64(max_moment) * y / np.float64(I)
    return float(sigma)
