# core/validacion.py
from __future__ import annotations

from typing import List

from .consumo import a_float, consumo_medio
from .modelo import DatosOrcamento


def errores_consumo(d: DatosOrcamento) -> List[str]:
    errores: List[str] = []
    if d.tipo_consumo not in ("media", "individual"):
        errores.append("tipo_consumo debe ser 'media' o 'individual'.")
    if not (0.0 <= a_float(d.simultaneidad, -1.0) <= 1.0):
        errores.append("Simultaneidad debe estar entre 0 y 1.")
    if len(d.consumos_mensuales or []) > 12:
        errores.append("Máximo 12 lecturas mensuales.")

    demanda = consumo_medio(d.tipo_consumo, d.consumo_promedio, d.consumos_mensuales)
    demanda += sum(max(0.0, a_float(u.get("consumo"))) for u in (d.unidades or []))
    if demanda <= 0:
        errores.append("Ingrese el consumo de la unidad geradora o de alguna unidad de compensación.")
    return errores


def errores_sistema(d: DatosOrcamento) -> List[str]:
    errores: List[str] = []
    if a_float(d.hsp) <= 0:
        errores.append("Seleccione una ciudad (HSP > 0).")
    if a_float(d.panel_potencia_w) <= 0 and a_float(d.override_n_paneles) <= 0:
        errores.append("Potencia del panel (W) debe ser > 0.")
    if a_float(d.override_n_paneles) < 0:
        errores.append("Cantidad manual de paneles no puede ser negativa.")
    if a_float(d.valor_kit) < 0 or a_float(d.valor_mano_obra) < 0:
        errores.append("Valores de kit / mano de obra no pueden ser negativos.")
    if d.pdf_valor not in ("total", "detalhado"):
        errores.append("pdf_valor debe ser 'total' o 'detalhado'.")
    return errores


def validar_entradas(d: DatosOrcamento) -> None:
    errores = errores_consumo(d) + errores_sistema(d)
    if errores:
        raise ValueError(" ".join(errores))
