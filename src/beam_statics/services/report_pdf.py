# path: src/beam_statics/services/report_pdf.py
from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, List, Optional, Sequence

from reportlab.lib import colors, pagesizes
from reportlab.lib.enums import TA_CENTER
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import Image, PageBreak, Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle
from xml.sax.saxutils import escape

from beam_statics.domain.beam import BeamConfig
from beam_statics.domain.loads import load_kind
from beam_statics.domain.results import AnalysisResult, SolverStep
from beam_statics.domain.units import SI, UnitSystem
from beam_statics.engine.equilibrium import CLASSIFICATION_LABELS
from beam_statics.services.derivation import describe_load

# Nota: este módulo NO calcula. Recibe la viga, el resultado del motor, los
# pasos de la memoria (opcional) y paths a imágenes ya generadas.


@dataclass(frozen=True)
class ReportHeader:
    titulo: str
    cliente_proyecto: str = ""
    autor: str = ""
    fecha: Optional[datetime] = None
    revision: str = "A"


def export_report_pdf(
    out_pdf_path: str,
    header: ReportHeader,
    beam: BeamConfig,
    result: AnalysisResult,
    steps: Optional[Sequence[SolverStep]] = None,
    imagenes: Optional[Dict[str, str]] = None,
    units: Optional[UnitSystem] = None,
    page_size=pagesizes.A4,
) -> None:
    """
    Genera la memoria de cálculo en PDF (A4).

    imagenes: {"v": path, "m": path, "theta": path, "y": path, "phi": path}
    (ver view.renderer_diagrams.save_diagrams).
    """
    u = units or SI
    imgs = _normalize_images_dict(imagenes)

    styles = getSampleStyleSheet()
    styles.add(ParagraphStyle(name="H1c", parent=styles["Heading1"], alignment=TA_CENTER))
    styles.add(ParagraphStyle(name="Small", parent=styles["BodyText"], fontSize=9, leading=11))
    styles.add(ParagraphStyle(name="MonoSmall", parent=styles["BodyText"], fontName="Courier", fontSize=8, leading=10))

    doc = SimpleDocTemplate(
        out_pdf_path,
        pagesize=page_size,
        leftMargin=15 * mm,
        rightMargin=15 * mm,
        topMargin=12 * mm,
        bottomMargin=12 * mm,
        title=header.titulo,
    )

    story: List[object] = []

    # ----------------- Portada -----------------
    story.append(Paragraph(escape(header.titulo), styles["H1c"]))
    story.append(Spacer(1, 4 * mm))

    fecha = header.fecha or datetime.now()
    meta_rows = [
        ["Proyecto / Cliente:", header.cliente_proyecto or "-"],
        ["Autor:", header.autor or "-"],
        ["Fecha:", fecha.strftime("%Y-%m-%d %H:%M")],
        ["Revisión:", header.revision],
        ["Tipo de viga:", CLASSIFICATION_LABELS.get(result.classification, result.classification)],
    ]
    t = Table(meta_rows, colWidths=[40 * mm, 140 * mm])
    t.setStyle(_kv_table_style())
    story.append(t)
    story.append(Spacer(1, 6 * mm))

    story.append(Paragraph("Base teórica y supuestos", styles["Heading2"]))
    base = [
        "Hipótesis: material elástico lineal, pequeñas deformaciones, Euler-Bernoulli, viga prismática, cuasi-estático.",
        "Convención: fuerzas hacia arriba positivas, cargas positivas hacia abajo, momento sagging positivo.",
        "Reacciones por equilibrio global (ΣFy = 0, ΣM = 0); vigas hiperestáticas no se resuelven.",
        "V(x) y M(x) por corte a la izquierda; θ(x), y(x) por doble integración trapezoidal de M/(EI).",
        "Tensión máxima por fórmula de flexión σ = M·(h/2)/I.",
    ]
    story.extend(_bullets(base, styles))
    story.append(PageBreak())

    # ----------------- Datos -----------------
    story.append(Paragraph("Datos del caso", styles["Heading2"]))
    dims = [
        ["L [m]", _f(beam.length, 3)],
        ["E [Pa]", f"{beam.E:.3e}"],
        ["G [Pa]", f"{beam.G:.3e}"],
        ["I [m4]", f"{beam.I:.3e}"],
        ["J [m4]", f"{beam.J:.3e}"],
        ["Altura [m]", _f(beam.depth, 4)],
    ]
    t = Table(dims, colWidths=[55 * mm, 125 * mm])
    t.setStyle(_kv_table_style())
    story.append(t)
    story.append(Spacer(1, 3 * mm))

    story.append(Paragraph("Apoyos y reacciones", styles["Heading3"]))
    arows = [["Apoyo", "Tipo", "x [m]", "Fy", "Mz"]]
    for s in beam.supports:
        r = result.reactions.get(s.id)
        arows.append([
            s.id, s.kind, _f(s.position, 3),
            "-" if r is None else u.force_str(r.Fy),
            "-" if r is None or r.Mz is None else u.moment_str(r.Mz),
        ])
    t = Table(arows, colWidths=[30 * mm, 25 * mm, 30 * mm, 50 * mm, 45 * mm])
    t.setStyle(_grid_table_style(header_rows=1))
    story.append(t)
    story.append(Spacer(1, 3 * mm))

    story.append(Paragraph("Cargas aplicadas", styles["Heading3"]))
    crows = [["Carga", "Tipo", "Detalle"]] + [[ld.id, load_kind(ld), describe_load(ld, u)] for ld in beam.loads]
    t = Table(crows, colWidths=[25 * mm, 20 * mm, 135 * mm])
    t.setStyle(_grid_table_style(header_rows=1))
    story.append(t)
    story.append(Spacer(1, 4 * mm))

    # ----------------- Resultados -----------------
    story.append(Paragraph("Resultados", styles["Heading2"]))
    rrows = [
        ["|V| máx", u.force_str(result.max_shear)],
        ["|M| máx", u.moment_str(result.max_moment)],
        ["σ máx", u.stress_str(result.max_stress)],
        ["|y| máx", u.deflection_str(result.max_deflection)],
        ["|φ| máx [rad]", _f(result.max_angle_of_twist, 6) if result.has_torsion else "-"],
    ]
    t = Table(rrows, colWidths=[60 * mm, 120 * mm])
    t.setStyle(_kv_table_style())
    story.append(t)
    story.append(Spacer(1, 3 * mm))

    story.append(Paragraph("Lectura de diagramas", styles["Heading3"]))
    story.extend(_bullets([
        result.shear_inference.summary,
        result.moment_inference.summary,
        result.deflection_inference.summary,
    ], styles))

    if result.notes:
        story.append(Paragraph("Observaciones", styles["Heading3"]))
        story.extend(_bullets(result.notes, styles))

    # ----------------- Pasos -----------------
    if steps:
        story.append(PageBreak())
        story.append(Paragraph("Desarrollo del cálculo", styles["Heading2"]))
        for st in steps:
            story.append(Paragraph(escape(st.title), styles["Heading3"]))
            for ln in st.description.splitlines():
                story.append(Paragraph(escape(ln) or "&nbsp;", styles["Small"]))
            if st.equations:
                story.append(Spacer(1, 1.5 * mm))
                story.extend(_mono_block(list(st.equations), styles))
            if st.result:
                story.append(Spacer(1, 1.5 * mm))
                story.append(Paragraph(f"<b>{escape(st.result)}</b>", styles["Small"]))
            story.append(Spacer(1, 3 * mm))

    # ----------------- Figuras -----------------
    story.append(PageBreak())
    story.append(Paragraph("Figuras", styles["Heading2"]))
    _append_figure(story, styles, "v", "Diagrama de corte V(x)", imgs, max_w=180 * mm, max_h=80 * mm)
    _append_figure(story, styles, "m", "Diagrama de momento M(x)", imgs, max_w=180 * mm, max_h=80 * mm)
    _append_figure(story, styles, "theta", "Pendiente θ(x)", imgs, max_w=180 * mm, max_h=80 * mm)
    _append_figure(story, styles, "y", "Elástica y(x)", imgs, max_w=180 * mm, max_h=80 * mm)
    if result.has_torsion:
        _append_figure(story, styles, "phi", "Ángulo de giro φ(x)", imgs, max_w=180 * mm, max_h=80 * mm)

    doc.build(story)


# ----------------- helpers -----------------

def _normalize_images_dict(imagenes: Optional[Dict[str, str]]) -> Dict[str, str]:
    if not imagenes:
        return {}
    out: Dict[str, str] = {}
    for k, v in imagenes.items():
        kk = (k or "").strip().lower()
        vv = (v or "").strip()
        if not kk or not vv:
            continue
        out[kk] = vv
    return out


def _append_figure(story: List[object], styles, key: str, title: str, imgs: Dict[str, str], *, max_w: float, max_h: float):
    story.append(Paragraph(title, styles["Heading3"]))
    path = (imgs.get(key) or "").strip()
    if path and os.path.exists(path):
        story.append(_img(path, max_w=max_w, max_h=max_h))
    else:
        # Dejar evidencia en el PDF si no se insertó la imagen
        story.append(Paragraph(f"(Sin imagen: '{key}' no disponible o no existe en disco)", styles["Small"]))
    story.append(Spacer(1, 3 * mm))


def _f(v: float, dec: int) -> str:
    s = f"{float(v):.{dec}f}"
    if "." in s:
        s = s.rstrip("0").rstrip(".")
    return s


def _bullets(items: Sequence[str], styles):
    out: List[object] = []
    for it in items:
        out.append(Paragraph(f"• {escape(it)}", styles["BodyText"]))
        out.append(Spacer(1, 1.2 * mm))
    return out


def _mono_block(lines: List[str], styles):
    out: List[object] = []
    for ln in lines:
        out.append(Paragraph(escape(ln).replace(" ", "&nbsp;"), styles["MonoSmall"]))
    return out


def _kv_table_style():
    return TableStyle(
        [
            ("FONTNAME", (0, 0), (-1, -1), "Helvetica"),
            ("FONTSIZE", (0, 0), (-1, -1), 10),
            ("GRID", (0, 0), (-1, -1), 0.5, colors.black),
            ("BACKGROUND", (0, 0), (0, -1), colors.whitesmoke),
            ("VALIGN", (0, 0), (-1, -1), "TOP"),
            ("LEFTPADDING", (0, 0), (-1, -1), 6),
            ("RIGHTPADDING", (0, 0), (-1, -1), 6),
            ("TOPPADDING", (0, 0), (-1, -1), 4),
            ("BOTTOMPADDING", (0, 0), (-1, -1), 4),
        ]
    )


def _grid_table_style(header_rows: int = 1, font_size: int = 9):
    ts = [
        ("FONTNAME", (0, 0), (-1, -1), "Helvetica"),
        ("FONTSIZE", (0, 0), (-1, -1), font_size),
        ("GRID", (0, 0), (-1, -1), 0.5, colors.black),
        ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
        ("LEFTPADDING", (0, 0), (-1, -1), 4),
        ("RIGHTPADDING", (0, 0), (-1, -1), 4),
        ("TOPPADDING", (0, 0), (-1, -1), 3),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 3),
    ]
    if header_rows > 0:
        ts += [
            ("BACKGROUND", (0, 0), (-1, header_rows - 1), colors.lightgrey),
            ("FONTNAME", (0, 0), (-1, header_rows - 1), "Helvetica-Bold"),
        ]
    return TableStyle(ts)


def _img(path: str, *, max_w: float, max_h: float):
    img = Image(path)
    iw, ih = img.imageWidth, img.imageHeight
    if iw <= 0 or ih <= 0:
        return img
    scale = min(max_w / iw, max_h / ih, 1.0)
    img.drawWidth = iw * scale
    img.drawHeight = ih * scale
    return img
