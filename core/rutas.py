# core/rutas.py
from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Dict


def base_dir_seguro() -> Path:
    """Devuelve una base estable en Spyder / Windows / Streamlit."""
    try:
        return Path(__file__).resolve().parents[1]
    except Exception:
        return Path(os.getcwd()).resolve()


def nombre_archivo_propuesta(cliente: str) -> str:
    cli = re.sub(r"[\s/\\]", "_", (cliente or "").strip() or "Cliente")
    return f"Proposta_Solar_{cli}.pdf"


def preparar_salida(nombre_carpeta: str = "salidas", cliente: str = "") -> Dict[str, str]:
    base = base_dir_seguro()
    out_dir = base / nombre_carpeta
    out_dir.mkdir(parents=True, exist_ok=True)

    return {
        "out_dir": str(out_dir),
        "chart_consumo_geracao": str(out_dir / "chart_consumo_geracao.png"),
        "pdf_path": str(out_dir / nombre_archivo_propuesta(cliente)),
    }


def _pt_br(x: float, nd: int) -> str:
    # 1,234.56 -> 1.234,56
    s = f"{float(x):,.{nd}f}"
    return s.replace(",", "_").replace(".", ",").replace("_", ".")


def money_R(x: float, dec: int = 2) -> str:
    v = float(x)
    signo = "-" if v < 0 else ""
    return f"{signo}R$ {_pt_br(abs(v), dec)}"


def num(x: float, nd: int = 2) -> str:
    return _pt_br(x, nd)
