from __future__ import annotations
from dataclasses import dataclass

SUPPORT_KINDS = ("pin", "roller", "fixed")


@dataclass(frozen=True)
class Support:
    """
    Apoyo con posición conocida sobre la viga.
    kind: "pin" (articulado), "roller" (móvil) o "fixed" (empotramiento).
    """
    id: str
    kind: str
    position: float  # m

    @property
    def is_fixed(self) -> bool:
        return self.kind == "fixed"
