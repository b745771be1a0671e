# core/sizing.py
from __future__ import annotations

import logging
import math
from typing import Any, Iterable, Optional

from .consumo import a_float
from .modelo import ParametrosTarifa, PerfilSitio

logger = logging.getLogger(__name__)

_DEFAULT = ParametrosTarifa()


# ==========================================================
# Utilitarios (cortos)
# ==========================================================
def demanda_total_kwh(consumo_geradora_kwh: Any, consumos_compensacion_kwh: Iterable[Any]) -> float:
    # consumo negativo de una unidad cuenta como 0
    return a_float(consumo_geradora_kwh) + sum(max(0.0, a_float(c)) for c in (consumos_compensacion_kwh or []))


def kwp_requerido(demanda_kwh_mes: float, hsp: Any, p: ParametrosTarifa = _DEFAULT) -> float:
    denom = a_float(hsp) * float(p.fator_perdas)
    if denom <= 0:
        raise ValueError("HSP/pérdidas inválidos (denominador <= 0).")
    return (float(demanda_kwh_mes) / float(p.dias_mes)) / denom


def n_paneles_para(kwp: float, panel_w: float) -> int:
    if panel_w <= 0:
        raise ValueError("Panel inválido (W<=0).")
    return int(math.ceil((float(kwp) * 1000.0) / float(panel_w)))


def kwp_instalado(n_paneles: int, panel_w: Any) -> float:
    return (int(n_paneles) * a_float(panel_w)) / 1000.0


def geracao_estimada_kwh(kwp: float, hsp: Any, p: ParametrosTarifa = _DEFAULT) -> float:
    """Generación mensual estimada (kWh/mes)."""
    return float(kwp) * a_float(hsp) * float(p.dias_mes) * float(p.fator_perdas)


# ==========================================================
# API pública
# ==========================================================
def estimar_n_paneles(
    perfil: PerfilSitio,
    consumo_geradora_kwh: Any,
    consumos_compensacion_kwh: Iterable[Any],
    panel_w: Any,
    p: ParametrosTarifa = _DEFAULT,
) -> Optional[int]:
    """
    Cantidad de paneles para cubrir la demanda agregada (geradora + unidades).

    Devuelve None cuando no es calculable: potencia de panel <= 0,
    demanda <= 0 o HSP <= 0. Nunca redondea hacia abajo.
    """
    w = a_float(panel_w)
    if w <= 0:
        return None

    demanda = demanda_total_kwh(consumo_geradora_kwh, consumos_compensacion_kwh)
    hsp = a_float(perfil.hsp)
    if demanda <= 0 or hsp <= 0:
        return None

    kwp = kwp_requerido(demanda, hsp, p)
    n = n_paneles_para(kwp, w)
    logger.debug("sizing demanda=%.2f kWh kwp_req=%.3f panel=%.0f W -> %d paneles", demanda, kwp, w, n)
    return n


def resolver_n_paneles(override: Any, calculado: Optional[int]) -> int:
    """El override del usuario manda y no se re-valida contra la generación."""
    ov = int(a_float(override))
    if ov > 0:
        return ov
    return int(calculado or 0)
