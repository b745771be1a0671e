# core/finanzas.py
from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Any, Dict, Optional

from .modelo import ParametrosTarifa

_DEFAULT = ParametrosTarifa()

HORIZONTE_ANOS = 25


def payback_meses(inversion: float, economia_mensal: float) -> Optional[float]:
    """None cuando no hay inversión o no hay ahorro (sin dividir por <= 0)."""
    if inversion > 0 and economia_mensal > 0:
        return float(inversion) / float(economia_mensal)
    return None


def retorno_25_anos(economia_mensal: float, inversion: float) -> float:
    # proyección lineal, sin tasa de descuento
    return float(economia_mensal) * 12.0 * HORIZONTE_ANOS - float(inversion)


def parcelas_financiamento(precio: float, p: ParametrosTarifa = _DEFAULT) -> Dict[int, float]:
    ref = float(p.monto_ref_financiamento)
    if ref <= 0:
        return {}
    return {
        int(meses): float(precio) * (float(cuota) / ref)
        for meses, cuota in sorted(p.cuotas_ref_financiamento.items())
    }


def _a_fecha(x: Any) -> date:
    if isinstance(x, datetime):
        return x.date()
    if isinstance(x, date):
        return x
    try:
        return datetime.strptime(str(x).strip(), "%Y-%m-%d").date()
    except ValueError:
        return date.today()


def fecha_validez(fecha_propuesta: Any, dias_validez: Any) -> date:
    try:
        dias = int(str(dias_validez).strip() or 7)
    except ValueError:
        dias = 7
    return _a_fecha(fecha_propuesta) + timedelta(days=dias)


def fecha_propuesta(x: Any) -> date:
    return _a_fecha(x)
