# reportes/imagenes.py
from __future__ import annotations

import base64
import binascii
import io
import logging
import re
from pathlib import Path
from typing import Optional, Tuple, Union

from reportlab.lib import colors
from reportlab.lib.utils import ImageReader
from reportlab.platypus import Image

from core.rutas import base_dir_seguro

logger = logging.getLogger(__name__)

COLOR_FALLBACK = "#e65100"

_HEX = re.compile(r"^#?([a-f\d]{2})([a-f\d]{2})([a-f\d]{2})$", re.IGNORECASE)


def hex_a_rgb(hex_color: str) -> Tuple[int, int, int]:
    m = _HEX.match(str(hex_color or "").strip())
    if not m:
        return (230, 81, 0)
    return tuple(int(g, 16) for g in m.groups())  # type: ignore[return-value]


def color_reportlab(hex_color: str) -> colors.Color:
    r, g, b = hex_a_rgb(hex_color)
    return colors.Color(r / 255.0, g / 255.0, b / 255.0)


def _bytes_desde_data_uri(s: str) -> Optional[bytes]:
    payload = s.split(",", 1)[1] if s.startswith("data:") and "," in s else s
    try:
        return base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError):
        return None


def archivo_a_data_uri(data: bytes, mime: str = "image/png") -> str:
    return f"data:{mime};base64,{base64.b64encode(data).decode('ascii')}"


def abrir_imagen(fuente: str) -> Optional[Union[str, io.BytesIO]]:
    """
    Fuente embebible para reportlab desde:
      - data-URI (data:image/png;base64,...)
      - base64 crudo
      - ruta de archivo (absoluta o relativa a la raíz del repo)
    Fuente vacía o ilegible -> None.
    """
    s = str(fuente or "").strip()
    if not s:
        return None

    if not s.startswith("data:"):
        for p in (Path(s), base_dir_seguro() / s):
            if p.is_file():
                return str(p)

    raw = _bytes_desde_data_uri(s)
    if not raw:
        logger.debug("Imagen no encontrada/ilegible: %.40s", s)
        return None
    return io.BytesIO(raw)


def _reader(src: Union[str, io.BytesIO]) -> Optional[ImageReader]:
    try:
        return ImageReader(src)
    except OSError as e:
        logger.warning("Imagen inválida (%s)", e)
        return None


def cargar_imagen(fuente: str) -> Optional[ImageReader]:
    src = abrir_imagen(fuente)
    return None if src is None else _reader(src)


def imagen_flowable(fuente: str, ancho: float, alto: float) -> Optional[Image]:
    src = abrir_imagen(fuente)
    if src is None or _reader(src) is None:
        return None
    # el reader consumió el buffer: copia desde los mismos bytes ya decodificados
    if isinstance(src, io.BytesIO):
        src = io.BytesIO(src.getvalue())
    return Image(src, width=ancho, height=alto, kind="proportional")
