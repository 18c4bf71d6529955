# path: scripts/export_report.py
import os
import sys
import traceback

THIS_DIR = os.path.dirname(os.path.abspath(__file__))
ROOT = os.path.abspath(os.path.join(THIS_DIR, ".."))
SRC = os.path.join(ROOT, "src")
if SRC not in sys.path:
    sys.path.insert(0, SRC)

from beam_statics.services.logging_setup import setup_logging
logger = setup_logging()

def _excepthook(exctype, value, tb):
    msg = "".join(traceback.format_exception(exctype, value, tb))
    logger.error("Excepción no capturada:\n%s", msg)
    # Mantener también el comportamiento por defecto (útil si hay consola)
    sys.__excepthook__(exctype, value, tb)

sys.excepthook = _excepthook

from beam_statics.domain.beam import default_beam
from beam_statics.domain.units import get_unit_system
from beam_statics.engine.analysis import analyze
from beam_statics.services.derivation import build_steps
from beam_statics.services.report_pdf import ReportHeader, export_report_pdf
from beam_statics.view.renderer_diagrams import save_diagrams


def main(out_dir: str = "out", units_name: str = "kNm") -> str:
    beam = default_beam()
    units = get_unit_system(units_name)

    result = analyze(beam)
    steps = build_steps(beam, result, units)
    imgs = save_diagrams(result, os.path.join(out_dir, "img"))

    out_pdf = os.path.join(out_dir, "memoria_viga.pdf")
    export_report_pdf(
        out_pdf,
        header=ReportHeader(titulo="Memoria de cálculo - viga"),
        beam=beam,
        result=result,
        steps=steps,
        imagenes=imgs,
        units=units,
    )
    logger.info("Memoria exportada: %s", out_pdf)
    return out_pdf


if __name__ == "__main__":
    main(*sys.argv[1:3])
