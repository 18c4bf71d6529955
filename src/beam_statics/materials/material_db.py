from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional

GPA_TO_PA = 1e9


@dataclass(frozen=True)
class Material:
    """
    Material elástico lineal para el motor de vigas.

    Campos esperados (mínimos):
      - id
      - E_pa  (módulo de elasticidad)
      - G_pa  (módulo de corte)

    Los demás ayudan a trazabilidad.
    """
    id: str
    E_pa: float
    G_pa: float
    family: str = ""
    grade: str = ""
    notes: str = ""

    @property
    def poisson(self) -> float:
        """ν implícito de E = 2·G·(1 + ν)."""
        return self.E_pa / (2.0 * self.G_pa) - 1.0


class MaterialDB:
    def __init__(self, materials: List[Material]):
        self.materials: List[Material] = list(materials)
        self.by_id: Dict[str, Material] = {m.id.strip(): m for m in self.materials if m.id.strip()}

    def ids(self) -> List[str]:
        return [m.id for m in self.materials]

    def get(self, mat_id: str) -> Optional[Material]:
        return self.by_id.get((mat_id or "").strip())

    @staticmethod
    def _norm(s: str) -> str:
        return (s or "").strip()

    @classmethod
    def from_txt(cls, path: str | Path) -> "MaterialDB":
        """
        Lee un TXT separado por ';' con encabezado, p.ej.:

            id;family;grade;E_GPa;G_GPa;notes
            S275;acero;S275;200;77;

        Líneas vacías y comentarios (# o //) se ignoran. Acepta coma decimal.
        """
        p = Path(path)
        if not p.exists():
            raise FileNotFoundError(f"No existe el archivo de materiales: {p}")

        lines = p.read_text(encoding="utf-8", errors="replace").splitlines()
        rows: List[List[str]] = []
        for ln in lines:
            t = ln.strip()
            if not t:
                continue
            if t.startswith("#") or t.startswith("//"):
                continue
            rows.append([c.strip() for c in t.split(";")])

        if not rows:
            raise ValueError("Archivo de materiales vacío o sin filas válidas.")

        header = [h.strip().lower() for h in rows[0]]
        if "id" not in header:
            raise ValueError(f"Encabezado inválido en {p.name}: falta la columna 'id'.")
        data_rows = rows[1:]

        def idx(name: str) -> Optional[int]:
            name_l = name.lower()
            return header.index(name_l) if name_l in header else None

        i_id = idx("id")
        i_family = idx("family")
        i_grade = idx("grade")
        i_E_gpa = idx("E_GPa")
        i_G_gpa = idx("G_GPa")
        i_E_pa = idx("E_Pa")
        i_G_pa = idx("G_Pa")
        i_notes = idx("notes")

        def get_cell(row: List[str], i: Optional[int]) -> str:
            if i is None:
                return ""
            return row[i] if i < len(row) else ""

        def try_float(s: str) -> Optional[float]:
            t = (s or "").strip().replace(",", ".")
            if t == "":
                return None
            try:
                return float(t)
            except ValueError:
                return None

        def modulus(row: List[str], i_gpa: Optional[int], i_pa: Optional[int]) -> Optional[float]:
            v = try_float(get_cell(row, i_gpa))
            if v is not None:
                return v * GPA_TO_PA
            return try_float(get_cell(row, i_pa))

        mats: List[Material] = []
        for r in data_rows:
            mid = cls._norm(get_cell(r, i_id))
            if not mid:
                continue

            E = modulus(r, i_E_gpa, i_E_pa)
            G = modulus(r, i_G_gpa, i_G_pa)
            if E is None or G is None:
                # sin E/G el material no sirve para el motor
                continue

            mats.append(Material(
                id=mid,
                E_pa=float(E),
                G_pa=float(G),
                family=cls._norm(get_cell(r, i_family)),
                grade=cls._norm(get_cell(r, i_grade)),
                notes=cls._norm(get_cell(r, i_notes)),
            ))

        if not mats:
            raise ValueError("No se pudieron cargar materiales: faltan columnas o valores de E/G.")

        # ordenar por id para listado estable
        mats.sort(key=lambda m: m.id.upper())
        return cls(mats)


def default_materials_path() -> Path:
    """
    Ruta por defecto dentro del paquete:
      src/beam_statics/data/materials.txt
    """
    here = Path(__file__).resolve()
    return here.parents[1] / "data" / "materials.txt"
