# reportes/helpers_pdf.py
from __future__ import annotations

from typing import Any, Dict, List

from reportlab.lib import colors
from reportlab.lib.styles import ParagraphStyle
from reportlab.platypus import Paragraph, Table, TableStyle

from core.rutas import money_R as _money_R_core


def get_field(x: Any, key: str, default: Any = "") -> Any:
    if isinstance(x, dict):
        return x.get(key, default)
    return getattr(x, key, default)


def make_table(data: List[List[Any]], content_w: float, *, ratios=None, repeatRows: int = 0) -> Table:
    """
    Crea tabla con anchos proporcionales.
    """
    if ratios is None:
        ratios = [1] * (len(data[0]) if data else 1)
    total = float(sum(ratios)) if ratios else 1.0
    col_widths = [content_w * (float(r) / total) for r in ratios]
    return Table(data, colWidths=col_widths, repeatRows=repeatRows)


def banda(texto_izq: Any, pal: Dict[str, Any], content_w: float, *, texto_der: Any = "") -> Table:
    """Franja de color tema a todo el ancho (encabezado / valor total)."""
    t = make_table([[texto_izq, texto_der]], content_w, ratios=[3.0, 1.2])
    estilo = [
        ("BACKGROUND", (0, 0), (-1, -1), pal["PRIMARY"]),
        ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
        ("ALIGN", (1, 0), (1, 0), "RIGHT"),
        ("LEFTPADDING", (0, 0), (-1, -1), 10),
        ("RIGHTPADDING", (0, 0), (-1, -1), 10),
        ("TOPPADDING", (0, 0), (-1, -1), 6),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 6),
    ]
    t.setStyle(TableStyle(estilo))
    return t


def parrafo_blanco(html_text: str, *, font_size: float = 10, bold: bool = False) -> Paragraph:
    style = ParagraphStyle(
        name="blanco",
        fontName="Helvetica-Bold" if bold else "Helvetica",
        fontSize=font_size,
        leading=font_size + 3,
        textColor=colors.white,
    )
    return Paragraph(html_text, style)


def box_paragraph(html_text: str, pal: Dict[str, Any], content_w: float, *, font_size=9):
    style = ParagraphStyle(
        name="box",
        fontName="Helvetica",
        fontSize=font_size,
        leading=font_size + 3,
        textColor=pal.get("TEXT"),
    )
    p = Paragraph(html_text, style)
    t = Table([[p]], colWidths=[content_w])
    t.setStyle(TableStyle([
        ("BACKGROUND", (0, 0), (-1, -1), pal.get("SOFT")),
        ("LEFTPADDING", (0, 0), (-1, -1), 8),
        ("RIGHTPADDING", (0, 0), (-1, -1), 8),
        ("TOPPADDING", (0, 0), (-1, -1), 6),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 6),
    ]))
    return t


def money_R(x: float, dec: int = 2) -> str:
    return _money_R_core(x, dec=dec)
