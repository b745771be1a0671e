# reportes/styles.py
from reportlab.lib import colors
from reportlab.lib.enums import TA_LEFT, TA_RIGHT
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle

from .imagenes import COLOR_FALLBACK, color_reportlab


def pdf_palette(color_tema: str = COLOR_FALLBACK):
    return {
        "PRIMARY": color_reportlab(color_tema),
        "BORDER": colors.HexColor("#D7DCE3"),
        "SOFT": colors.HexColor("#F5F5F5"),
        "TEXT": colors.HexColor("#282828"),
        "MUTED": colors.HexColor("#646464"),
    }


# Estilos que las secciones usan por nombre
_REQUIRED = ("H2b", "Item", "Small", "SmallRight")


def pdf_styles(pal=None):
    pal = pal or pdf_palette()
    styles = getSampleStyleSheet()

    # ===== Base =====
    body = styles["BodyText"]
    body.fontName = "Helvetica"
    body.fontSize = 9.5
    body.leading = 12
    body.textColor = pal["TEXT"]

    # ===== Propios de la propuesta =====
    if "H2b" not in styles.byName:
        styles.add(
            ParagraphStyle(
                name="H2b",
                parent=styles["Heading2"],
                fontName="Helvetica-Bold",
                fontSize=12,
                leading=14,
                spaceBefore=6,
                spaceAfter=4,
                alignment=TA_LEFT,
                textColor=pal["PRIMARY"],
            )
        )
    if "Item" not in styles.byName:
        styles.add(ParagraphStyle(name="Item", parent=body, fontSize=9, leading=12))
    if "Small" not in styles.byName:
        styles.add(ParagraphStyle(name="Small", parent=body, fontSize=9, leading=11, textColor=pal["MUTED"]))
    if "SmallRight" not in styles.byName:
        styles.add(ParagraphStyle(name="SmallRight", parent=styles["Small"], alignment=TA_RIGHT))

    _assert_required(styles)
    return styles


def _assert_required(styles):
    missing = [k for k in _REQUIRED if k not in styles.byName]
    if missing:
        raise KeyError(
            f"PDF styles missing: {missing}. Define them in reportes/styles.py"
        )
