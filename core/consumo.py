# core/consumo.py
from __future__ import annotations

import math
from typing import Any, Iterable, List

MESES = ["Jan", "Fev", "Mar", "Abr", "Mai", "Jun", "Jul", "Ago", "Set", "Out", "Nov", "Dez"]


def _normalizar_texto_num(s: str) -> str:
    s = s.strip().replace(" ", "")
    if "," in s and "." in s:
        # formato pt-BR: 1.234,56
        return s.replace(".", "").replace(",", ".")
    return s.replace(",", ".")


def a_float(x: Any, default: float = 0.0) -> float:
    """
    Lectura tolerante de campos de formulario.
    None, "", texto no numérico, NaN o inf -> default.
    """
    if x is None or isinstance(x, bool):
        return float(default)
    if isinstance(x, (int, float)):
        v = float(x)
    else:
        try:
            v = float(_normalizar_texto_num(str(x)))
        except ValueError:
            return float(default)
    if math.isnan(v) or math.isinf(v):
        return float(default)
    return v


def valores_validos(mensuales: Iterable[Any]) -> List[float]:
    return [v for v in (a_float(m, 0.0) for m in (mensuales or [])) if v > 0]


def promedio_mensual(mensuales: Iterable[Any]) -> float:
    # meses vacíos/cero/inválidos NO cuentan como 0: se excluyen
    vals = valores_validos(mensuales)
    return (sum(vals) / len(vals)) if vals else 0.0


def consumo_medio(tipo: str, promedio: Any, mensuales: Iterable[Any]) -> float:
    if str(tipo or "media") == "individual":
        return promedio_mensual(mensuales)
    return a_float(promedio, 0.0)


def serie_mensual(tipo: str, promedio: Any, mensuales: Iterable[Any]) -> List[float]:
    """12 valores para el gráfico (inválidos -> 0)."""
    if str(tipo or "media") == "individual":
        vals = [max(0.0, a_float(m, 0.0)) for m in list(mensuales or [])[:12]]
        return vals + [0.0] * (12 - len(vals))
    return [max(0.0, a_float(promedio, 0.0))] * 12


def consumos_unidades(unidades: Iterable[Any]) -> List[float]:
    out: List[float] = []
    for u in unidades or []:
        c = u.get("consumo") if isinstance(u, dict) else getattr(u, "consumo_kwh", 0.0)
        out.append(a_float(c, 0.0))
    return out
