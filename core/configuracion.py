# core/configuracion.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from .modelo import ParametrosTarifa

logger = logging.getLogger(__name__)

BASE_DIR = Path(__file__).resolve().parents[1]
CONFIG_DIR = BASE_DIR / "config"


def _leer_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        raise FileNotFoundError(f"No existe config: {path}")
    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Config inválida (debe ser dict): {path}")
    return data


def _req(d: Dict[str, Any], k: str, ctx: str) -> Any:
    if k not in d or d[k] is None:
        raise ValueError(f"Falta '{k}' en {ctx}")
    return d[k]


def _req_num(d: Dict[str, Any], k: str, ctx: str) -> float:
    v = _req(d, k, ctx)
    try:
        return float(v)
    except (TypeError, ValueError) as e:
        raise ValueError(f"'{k}' debe ser numérico en {ctx}. Valor={v!r}") from e


# ==========================================================
# Parámetros tarifarios
# ==========================================================
def parametros_desde_dict(d: Dict[str, Any]) -> ParametrosTarifa:
    base = ParametrosTarifa()
    fin = d.get("financiamento") or {}
    cuotas = fin.get("cuotas_referencia") or base.cuotas_ref_financiamento

    return ParametrosTarifa(
        tarifa=float(d.get("tarifa", base.tarifa)),
        taxa_compensacao=float(d.get("taxa_compensacao", base.taxa_compensacao)),
        custo_disponibilidade=float(d.get("custo_disponibilidade", base.custo_disponibilidade)),
        fator_perdas=float(d.get("fator_perdas", base.fator_perdas)),
        dias_mes=float(d.get("dias_mes", base.dias_mes)),
        monto_ref_financiamento=float(fin.get("monto_referencia", base.monto_ref_financiamento)),
        cuotas_ref_financiamento={int(k): float(v) for k, v in cuotas.items()},
    )


def cargar_parametros(path: Optional[Path] = None) -> ParametrosTarifa:
    """
    Lee config/parametros_tarifa.yaml.
    Sin archivo -> constantes por defecto del modelo.
    """
    path = path or (CONFIG_DIR / "parametros_tarifa.yaml")
    if not path.exists():
        logger.debug("Sin %s, se usan parámetros por defecto", path)
        return ParametrosTarifa()
    return parametros_desde_dict(_leer_yaml(path))


# ==========================================================
# Catálogos (capitales/HSP, inversores, paneles)
# ==========================================================
@dataclass(frozen=True)
class Capital:
    capital: str
    hsp: float


@dataclass(frozen=True)
class InversorCatalogo:
    nombre: str
    tipo: str
    imagen: str = ""


@dataclass(frozen=True)
class PanelCatalogo:
    marca: str
    imagen: str = ""


@dataclass(frozen=True)
class Catalogos:
    capitales: List[Capital]
    inversores: List[InversorCatalogo]
    paneles: List[PanelCatalogo]

    def capitales_ordenadas(self) -> List[Capital]:
        return sorted(self.capitales, key=lambda c: c.capital)

    def inversor(self, nombre: str) -> Optional[InversorCatalogo]:
        return next((i for i in self.inversores if i.nombre == nombre), None)

    def panel(self, marca: str) -> Optional[PanelCatalogo]:
        return next((p for p in self.paneles if p.marca == marca), None)


def catalogos_desde_dict(doc: Dict[str, Any]) -> Catalogos:
    capitales = []
    for i, c in enumerate(doc.get("capitales") or []):
        ctx = f"capitales[{i}]"
        hsp = _req_num(c, "hsp", ctx)
        if hsp <= 0:
            raise ValueError(f"'hsp' debe ser > 0 en {ctx}")
        capitales.append(Capital(capital=str(_req(c, "capital", ctx)), hsp=hsp))

    inversores = [
        InversorCatalogo(
            nombre=str(_req(inv, "nombre", f"inversores[{i}]")),
            tipo=str(_req(inv, "tipo", f"inversores[{i}]")),
            imagen=str(inv.get("imagen") or ""),
        )
        for i, inv in enumerate(doc.get("inversores") or [])
    ]
    paneles = [
        PanelCatalogo(marca=str(_req(p, "marca", f"paneles[{i}]")), imagen=str(p.get("imagen") or ""))
        for i, p in enumerate(doc.get("paneles") or [])
    ]
    return Catalogos(capitales=capitales, inversores=inversores, paneles=paneles)


@lru_cache(maxsize=4)
def cargar_catalogos(path: Optional[Path] = None) -> Catalogos:
    return catalogos_desde_dict(_leer_yaml(path or (CONFIG_DIR / "catalogos.yaml")))
