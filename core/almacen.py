# core/almacen.py
from __future__ import annotations

import copy
import json
import logging
import time
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .modelo import DatosOrcamento
from .rutas import base_dir_seguro

logger = logging.getLogger(__name__)


@dataclass
class PerfilEmpresa:
    razao: str = ""
    cnpj: str = ""
    tel: str = ""
    logo: str = ""                        # ruta o data-URI
    color_tema: str = "#e65100"
    color_chart_1: str = "#b0bec5"
    color_chart_2: str = "#ff9800"
    imagenes_inversor: Dict[str, str] = field(default_factory=dict)
    imagen_panel: str = ""
    dias_validez: str = "7"


def _filtrar_campos(cls, d: Dict[str, Any]) -> Dict[str, Any]:
    nombres = {f.name for f in fields(cls)}
    return {k: v for k, v in (d or {}).items() if k in nombres}


def perfil_desde_dict(d: Dict[str, Any]) -> PerfilEmpresa:
    return PerfilEmpresa(**_filtrar_campos(PerfilEmpresa, d))


def datos_desde_dict(d: Dict[str, Any]) -> DatosOrcamento:
    return DatosOrcamento(**_filtrar_campos(DatosOrcamento, d))


class AlmacenJSON:
    """Perfil de empresa + cotizaciones guardadas en archivos JSON."""

    def __init__(self, base_dir: Optional[Union[Path, str]] = None):
        self.base_dir = Path(base_dir) if base_dir else (base_dir_seguro() / "salidas" / "almacen")
        self.base_dir.mkdir(parents=True, exist_ok=True)
        self.path_perfil = self.base_dir / "perfil_empresa.json"
        self.path_cotizaciones = self.base_dir / "cotizaciones.json"

    # ------------------------------------------------------------------
    def _leer(self, path: Path, default: Any) -> Any:
        if not path.exists():
            return default
        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("No se pudo leer %s (%s); se usa estado vacío", path, e)
            return default

    def _escribir(self, path: Path, data: Any) -> None:
        tmp = path.with_suffix(path.suffix + ".tmp")
        tmp.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
        tmp.replace(path)

    # ------------------------------------------------------------------
    # Perfil de empresa
    # ------------------------------------------------------------------
    def cargar_perfil(self) -> PerfilEmpresa:
        d = self._leer(self.path_perfil, {})
        return perfil_desde_dict(d if isinstance(d, dict) else {})

    def guardar_perfil(self, perfil: PerfilEmpresa) -> None:
        self._escribir(self.path_perfil, asdict(perfil))
        logger.debug("Perfil de empresa guardado en %s", self.path_perfil)

    # ------------------------------------------------------------------
    # Cotizaciones guardadas (snapshots inmutables)
    # ------------------------------------------------------------------
    def listar_cotizaciones(self) -> List[Dict[str, Any]]:
        data = self._leer(self.path_cotizaciones, [])
        return [q for q in data if isinstance(q, dict) and "id" in q] if isinstance(data, list) else []

    def _nuevo_id(self, existentes: List[Dict[str, Any]]) -> int:
        nid = int(time.time() * 1000)
        usados = {int(q["id"]) for q in existentes}
        while nid in usados:
            nid += 1
        return nid

    def guardar_cotizacion(self, nombre: str, datos: DatosOrcamento, resumen: Optional[Dict[str, Any]] = None) -> int:
        nombre = (nombre or "").strip()
        if not nombre:
            raise ValueError("La cotización necesita un nombre.")

        cotizaciones = self.listar_cotizaciones()
        nid = self._nuevo_id(cotizaciones)
        cotizaciones.append({
            "id": nid,
            "nombre": nombre,
            "datos": copy.deepcopy(asdict(datos)),
            "resumen": copy.deepcopy(resumen or {}),
        })
        self._escribir(self.path_cotizaciones, cotizaciones)
        logger.debug("Cotización '%s' guardada (id=%d)", nombre, nid)
        return nid

    def cargar_cotizacion(self, cid: int) -> Optional[DatosOrcamento]:
        q = next((q for q in self.listar_cotizaciones() if int(q["id"]) == int(cid)), None)
        if q is None:
            return None
        return datos_desde_dict(q.get("datos") or {})

    def eliminar_cotizacion(self, cid: int) -> bool:
        cotizaciones = self.listar_cotizaciones()
        restantes = [q for q in cotizaciones if int(q["id"]) != int(cid)]
        if len(restantes) == len(cotizaciones):
            return False
        self._escribir(self.path_cotizaciones, restantes)
        return True
