from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Iterable, Tuple

from beam_statics.domain.loads import Load, UniformLoad, VaryingLoad, PointLoad, load_kind
from beam_statics.domain.supports import SUPPORT_KINDS, Support

if TYPE_CHECKING:
    from beam_statics.materials.material_db import Material
    from beam_statics.sections.i_section import ISection

POSITION_TOL = 1e-9


@dataclass(frozen=True)
class BeamConfig:
    """
    Datos de entrada del motor (inmutables). Unidades SI internas:
      - length, depth en m
      - E, G en Pa
      - I, J en m^4
      - gravity en m/s² (solo documentación)

    Los apoyos y cargas se guardan como tuplas en el orden ingresado.
    E·I y G·J > 0 son responsabilidad del llamador (no se validan).
    """
    length: float
    E: float
    G: float
    I: float
    J: float
    depth: float
    supports: Tuple[Support, ...] = field(default_factory=tuple)
    loads: Tuple[Load, ...] = field(default_factory=tuple)
    gravity: float = 9.81

    def __post_init__(self):
        # Aceptar listas en la construcción, guardar tuplas
        object.__setattr__(self, "supports", tuple(self.supports))
        object.__setattr__(self, "loads", tuple(self.loads))
        self._validate()

    # -------------------------
    # Validación de invariantes
    # -------------------------
    def _validate(self) -> None:
        L = float(self.length)
        if not L > 0.0:
            raise ValueError(f"Longitud de viga inválida: L={L:g} m (debe ser > 0).")

        seen = set()
        for s in self.supports:
            if s.kind not in SUPPORT_KINDS:
                raise ValueError(f'Apoyo "{s.id}": tipo desconocido "{s.kind}" (esperado: {", ".join(SUPPORT_KINDS)}).')
            if s.id in seen:
                raise ValueError(f'Apoyo duplicado: "{s.id}".')
            seen.add(s.id)
            self._check_position(f'Apoyo "{s.id}"', s.position)

        for ld in self.loads:
            kind = load_kind(ld)
            self._check_position(f'Carga "{ld.id}" ({kind})', ld.position)
            if isinstance(ld, (UniformLoad, VaryingLoad)):
                self._check_position(f'Carga "{ld.id}" ({kind}) fin', ld.end_position)
                if ld.end_position < ld.position:
                    raise ValueError(
                        f'Carga "{ld.id}": tramo invertido [{ld.position:g}, {ld.end_position:g}] m.'
                    )

    def _check_position(self, what: str, x: float) -> None:
        L = float(self.length)
        if x < -POSITION_TOL or x > L + POSITION_TOL:
            raise ValueError(f"{what}: posición x={x:g} m fuera de la viga [0, {L:g}] m.")

    # -------------------------
    # Derivados
    # -------------------------
    @property
    def EI(self) -> float:
        return float(self.E) * float(self.I)

    @property
    def GJ(self) -> float:
        return float(self.G) * float(self.J)

    def support_by_id(self, support_id: str) -> Support:
        for s in self.supports:
            if s.id == support_id:
                return s
        raise KeyError(support_id)

    def with_loads(self, loads: Iterable[Load]) -> "BeamConfig":
        return replace(self, loads=tuple(loads))

    def with_supports(self, supports: Iterable[Support]) -> "BeamConfig":
        return replace(self, supports=tuple(supports))

    @classmethod
    def from_section_and_material(
        cls,
        *,
        length: float,
        section: "ISection",
        material: "Material",
        supports: Iterable[Support] = (),
        loads: Iterable[Load] = (),
        gravity: float = 9.81,
    ) -> "BeamConfig":
        """Arma la viga tomando I, J y altura de la sección, y E, G del material."""
        p = section.props()
        return cls(
            length=float(length),
            E=material.E_pa,
            G=material.G_pa,
            I=float(p["Ix_m4"]),
            J=float(p["J_m4"]),
            depth=float(p["H_m"]),
            supports=tuple(supports),
            loads=tuple(loads),
            gravity=float(gravity),
        )


def default_beam() -> BeamConfig:
    """Viga por defecto del editor: simplemente apoyada, 10 m, P=10 kN al centro."""
    return BeamConfig(
        length=10.0,
        E=200e9,
        G=77e9,
        I=1e-4,
        J=1e-4,
        depth=0.5,
        gravity=9.81,
        supports=(
            Support(id="s1", kind="pin", position=0.0),
            Support(id="s2", kind="roller", position=10.0),
        ),
        loads=(
            PointLoad(id="l1", position=5.0, magnitude=10000.0),
        ),
    )
