from __future__ import annotations

from dataclasses import asdict, is_dataclass
from typing import Any, Dict, List, Optional

__all__ = [
    "as_float",
    "as_int",
    "get_asignacion",
    "get_n_paneles",
    "get_kwp_final",
    "get_geracao_mensal",
    "get_serie_consumo",
    "get_fatura_geradora",
    "get_faturas_compensacao",
    "get_economia_mensal",
    "get_payback_meses",
    "get_retorno_25_anos",
    "get_preco_total",
]


# ==========================================================
# Helpers base
# ==========================================================
def _as_dict(x: Any) -> Dict[str, Any]:
    if isinstance(x, dict):
        return dict(x)
    if is_dataclass(x) and not isinstance(x, type):
        return asdict(x)
    return {}


def as_float(x: Any, default: float = 0.0) -> float:
    try:
        if x is None:
            return float(default)
        return float(x)
    except (TypeError, ValueError):
        return float(default)


def as_int(x: Any, default: int = 0) -> int:
    try:
        if x is None:
            return int(default)
        return int(float(x))
    except (TypeError, ValueError):
        return int(default)


# ==========================================================
# Accessors
# ==========================================================
def get_asignacion(res: Dict[str, Any] | None) -> Dict[str, Any]:
    """Acepta ResultadoAsignacion (dataclass) o su forma serializada."""
    return _as_dict((res or {}).get("asignacion"))


def get_n_paneles(res: Dict[str, Any] | None) -> int:
    return as_int((res or {}).get("n_paneles"), 0)


def get_kwp_final(res: Dict[str, Any] | None) -> float:
    return as_float((res or {}).get("kwp_final"), 0.0)


def get_geracao_mensal(res: Dict[str, Any] | None) -> float:
    return as_float((res or {}).get("geracao_mensal_kwh"), 0.0)


def get_serie_consumo(res: Dict[str, Any] | None) -> List[float]:
    serie = (res or {}).get("serie_consumo_12m") or []
    return [as_float(v) for v in serie] if isinstance(serie, list) else []


def get_fatura_geradora(res: Dict[str, Any] | None) -> float:
    geradora = get_asignacion(res).get("geradora") or {}
    return as_float(geradora.get("nova_fatura"), as_float((res or {}).get("fatura_geradora")))


def get_faturas_compensacao(res: Dict[str, Any] | None) -> List[Dict[str, Any]]:
    filas = get_asignacion(res).get("compensacion")
    if filas is None:
        filas = (res or {}).get("faturas_compensacao") or []
    return [dict(f) for f in filas if isinstance(f, dict)]


def get_economia_mensal(res: Dict[str, Any] | None) -> float:
    return as_float(get_asignacion(res).get("economia_mensal"), 0.0)


def get_payback_meses(res: Dict[str, Any] | None) -> Optional[float]:
    v = (res or {}).get("payback_meses")
    return None if v is None else as_float(v)


def get_retorno_25_anos(res: Dict[str, Any] | None) -> float:
    return as_float((res or {}).get("retorno_25_anos"), 0.0)


def get_preco_total(res: Dict[str, Any] | None) -> float:
    return as_float((res or {}).get("preco_total"), 0.0)
