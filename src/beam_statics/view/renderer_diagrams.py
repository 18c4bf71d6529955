from __future__ import annotations

import os
from typing import Dict, List, Optional, Set, Tuple

import numpy as np
from matplotlib.figure import Figure

from beam_statics.domain.results import AnalysisResult, SampledSeries


# -------------------------
# Helpers formato
# -------------------------
def _fmt_plain(v: float, decimals: int = 2) -> str:
    """Formato fijo (sin notación científica) y recorte de ceros."""
    s = f"{float(v):.{decimals}f}"
    if "." in s:
        s = s.rstrip("0").rstrip(".")
    return s


def _clamp(v: float, lo: float, hi: float) -> float:
    return float(min(max(v, lo), hi))


# -------------------------
# Extremos locales robustos
# -------------------------
def find_local_extrema_indices(y: np.ndarray, *, tol_slope: float) -> List[Tuple[str, int]]:
    """
    Detecta extremos locales por cambios de signo en dy, IGNORANDO mesetas (dy≈0).
    Devuelve lista de ("max"/"min", idx_en_y).
    """
    n = len(y)
    if n < 5:
        return []

    dy = np.diff(y)
    s = np.zeros_like(dy, dtype=int)
    s[dy > +tol_slope] = +1
    s[dy < -tol_slope] = -1

    # solo cambios entre pendientes no nulas
    nz = np.nonzero(s)[0]
    if nz.size < 2:
        return []

    s_nz = s[nz]
    out: List[Tuple[str, int]] = []

    # + a - => máximo; - a + => mínimo
    for k in range(1, len(s_nz)):
        if s_nz[k - 1] > 0 and s_nz[k] < 0:
            out.append(("max", int(nz[k - 1] + 1)))
        elif s_nz[k - 1] < 0 and s_nz[k] > 0:
            out.append(("min", int(nz[k - 1] + 1)))

    return out


def _annotate_extrema(ax, x: np.ndarray, y: np.ndarray, *, scale: float, unit: str):
    """
    Marca extremos (locales + globales) y anota el valor escalado.
    Evita etiquetar valores ≈0 y deduplica por índice.
    """
    if len(x) == 0:
        return

    max_abs = float(np.max(np.abs(y))) if len(y) else 0.0
    if max_abs <= 0.0 or not np.isfinite(max_abs):
        return

    extrema = find_local_extrema_indices(y, tol_slope=1e-9 * max_abs)
    extrema.extend([("max", int(np.argmax(y))), ("min", int(np.argmin(y)))])

    seen: Set[int] = set()
    x_min, x_max = ax.get_xlim()
    y_min, y_max = ax.get_ylim()
    mx = 0.03 * max(float(x_max - x_min), 1e-12)
    my = 0.03 * max(float(y_max - y_min), 1e-12)

    for kind, i in extrema:
        if i in seen or abs(float(y[i])) < 0.01 * max_abs:
            continue
        seen.add(i)
        xi = float(x[i])
        yi = float(y[i])
        ax.scatter([xi], [yi], s=18, zorder=6)

        ty = yi + my if kind == "max" else yi - my
        va = "bottom" if kind == "max" else "top"
        ax.text(
            _clamp(xi, x_min + mx, x_max - mx),
            _clamp(ty, y_min + my, y_max - my),
            f"{_fmt_plain(yi * scale, 3)} {unit}",
            ha="center", va=va, fontsize=8, zorder=7,
        )


# -------------------------
# Render
# -------------------------
def render_series(
    ax,
    series: SampledSeries,
    *,
    title: str,
    ylabel: str,
    scale: float = 1.0,
    unit: str = "",
    y_zoom: float = 1.0,
    annotate: bool = False,
    fill: bool = True,
    xlim: Optional[Tuple[float, float]] = None,
):
    ax.clear()
    x = np.asarray(series.x, dtype=float)
    y = np.asarray(series.values, dtype=float) * scale

    ax.plot(x, y)
    if fill:
        ax.fill_between(x, y, 0.0, alpha=0.15)
    ax.axhline(0.0, linewidth=1.0)

    if xlim is None:
        ax.set_xlim(float(x[0]), float(x[-1]))
    else:
        ax.set_xlim(xlim[0], xlim[1])

    ymax = float(np.max(np.abs(y))) if len(y) else 0.0
    if not np.isfinite(ymax) or ymax <= 0.0:
        ymax = 1.0
    pad = 1.15
    ax.set_ylim(-ymax * y_zoom * pad, ymax * y_zoom * pad)

    if annotate:
        _annotate_extrema(ax, x, y, scale=1.0, unit=unit)

    ax.set_ylabel(ylabel)
    ax.set_xlabel("x [m]")
    ax.set_title(title)
    ax.grid(True, alpha=0.25)


def render_shear(ax, series: SampledSeries, y_zoom: float = 1.0):
    render_series(ax, series, title="Diagrama de Corte V(x)", ylabel="V [kN]",
                  scale=1e-3, unit="kN", y_zoom=y_zoom, annotate=True)


def render_moment(ax, series: SampledSeries, y_zoom: float = 1.0):
    render_series(ax, series, title="Diagrama de Momento Flector M(x)", ylabel="M [kN·m]",
                  scale=1e-3, unit="kN·m", y_zoom=y_zoom, annotate=True)


def render_slope(ax, series: SampledSeries, y_zoom: float = 1.0):
    render_series(ax, series, title="Pendiente θ(x)", ylabel="θ [mrad]",
                  scale=1e3, unit="mrad", y_zoom=y_zoom, fill=False)


def render_deflection(ax, series: SampledSeries, y_zoom: float = 1.0):
    render_series(ax, series, title="Elástica y(x)", ylabel="y [mm]",
                  scale=1e3, unit="mm", y_zoom=y_zoom, annotate=True)


def render_twist(ax, series: SampledSeries, y_zoom: float = 1.0):
    render_series(ax, series, title="Ángulo de giro φ(x)", ylabel="φ [°]",
                  scale=180.0 / np.pi, unit="°", y_zoom=y_zoom, fill=False)


_RENDERERS = {
    "v": ("shear", render_shear),
    "m": ("moment", render_moment),
    "theta": ("slope", render_slope),
    "y": ("deflection", render_deflection),
    "phi": ("angle_of_twist", render_twist),
}


def save_diagrams(result: AnalysisResult, out_dir: str, *, dpi: int = 150) -> Dict[str, str]:
    """
    Guarda un PNG por diagrama en out_dir. Devuelve {clave: path} con las
    claves "v", "m", "theta", "y" y, si hay torsión, "phi".
    No usa pyplot (sirve sin display).
    """
    os.makedirs(out_dir, exist_ok=True)
    out: Dict[str, str] = {}
    for key, (attr, renderer) in _RENDERERS.items():
        if key == "phi" and not result.has_torsion:
            continue
        fig = Figure(figsize=(8.0, 3.2))
        ax = fig.add_subplot(111)
        renderer(ax, getattr(result, attr))
        fig.tight_layout()
        path = os.path.join(out_dir, f"diagrama_{key}.png")
        fig.savefig(path, dpi=dpi)
        out[key] = path
    return out
