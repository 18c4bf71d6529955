from __future__ import annotations

from typing import Callable, List, Optional

from beam_statics.domain.results import ChartInference, SampledSeries


def _default_fmt(v: float) -> str:
    return f"{v:.3f}"


def compute_chart_inference(
    series: SampledSeries,
    label: str,
    fmt: Optional[Callable[[float], str]] = None,
) -> ChartInference:
    """
    Recorre la serie una sola vez:
    - máximo / mínimo y su posición (en empates se conserva la primera ocurrencia)
    - cruces por cero entre estaciones consecutivas, interpolados por magnitud:
        frac = |v_i| / (|v_i| + |v_{i+1}|),  x_c = x_i + frac·(x_{i+1} - x_i)
      Un valor exactamente 0 cierra un cruce pero no lo abre.
    """
    fmt = fmt or _default_fmt
    xs = series.x.tolist()
    vs = series.values.tolist()

    max_v = float("-inf")
    min_v = float("inf")
    max_x = 0.0
    min_x = 0.0
    zeros: List[float] = []

    for i, (x, v) in enumerate(zip(xs, vs)):
        if v > max_v:
            max_v, max_x = v, x
        if v < min_v:
            min_v, min_x = v, x
        if i > 0:
            prev = vs[i - 1]
            if (prev < 0.0 and v >= 0.0) or (prev > 0.0 and v <= 0.0):
                frac = abs(prev) / (abs(prev) + abs(v))
                zeros.append(xs[i - 1] + frac * (x - xs[i - 1]))

    summary = (
        f"Máximo {label}: {fmt(max_v)} en x = {max_x:.2f} m. "
        f"Mínimo: {fmt(min_v)} en x = {min_x:.2f} m. "
    )
    if zeros:
        summary += "Cruces por cero en x = " + ", ".join(f"{z:.2f}" for z in zeros) + " m."
    else:
        summary += "Sin cruces por cero."

    return ChartInference(
        max_value=max_v,
        max_position=max_x,
        min_value=min_v,
        min_position=min_x,
        zero_crossings=tuple(zeros),
        summary=summary,
    )
