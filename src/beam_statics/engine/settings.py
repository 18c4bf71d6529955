from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True)
class AnalysisSettings:
    n_intervals: int = 500      # 501 estaciones sobre [0, L]
    zero_eps: float = 1e-10     # reacciones/valores por debajo de esto se consideran 0
    centroid_tol: float = 1e-12  # w1 + w2 ≈ 0 => centroide en el punto medio

    @property
    def n_stations(self) -> int:
        return int(self.n_intervals) + 1


DEFAULT_SETTINGS = AnalysisSettings()
