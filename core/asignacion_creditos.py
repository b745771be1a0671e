# core/asignacion_creditos.py
from __future__ import annotations

import logging
from functools import reduce
from typing import Any, Iterable, List, Sequence, Tuple

from .consumo import a_float
from .finanzas import payback_meses, retorno_25_anos
from .modelo import FacturaUnidad, ParametrosTarifa, ResultadoAsignacion, UnidadCompensacion

logger = logging.getLogger(__name__)

_DEFAULT = ParametrosTarifa()

# (créditos restantes, facturas emitidas)
_Acumulado = Tuple[float, Tuple[FacturaUnidad, ...]]


def liquidar_unidad(contrato: str, consumo_kwh: float, creditos_kwh: float, p: ParametrosTarifa) -> FacturaUnidad:
    """
    Factura de una unidad contra el pool disponible.
    La taxa de compensação solo aplica a lo compensado; el resto paga tarifa plena.
    """
    consumo_kwh = max(0.0, consumo_kwh)
    compensado = min(max(0.0, creditos_kwh), consumo_kwh)
    nao_compensado = consumo_kwh - compensado
    variable = compensado * p.taxa_compensacao + nao_compensado * p.tarifa
    return FacturaUnidad(
        contrato=contrato,
        consumo_kwh=consumo_kwh,
        compensado_kwh=compensado,
        nao_compensado_kwh=nao_compensado,
        nova_fatura=max(p.custo_disponibilidade, variable),
    )


def _paso(p: ParametrosTarifa):
    def _aplicar(acc: _Acumulado, unidad: UnidadCompensacion) -> _Acumulado:
        pool, facturas = acc
        consumo = a_float(unidad.consumo_kwh)
        if consumo <= 0:
            # sin línea de factura y sin tocar el pool
            return acc
        f = liquidar_unidad(unidad.contrato, consumo, pool, p)
        return pool - f.compensado_kwh, facturas + (f,)

    return _aplicar


def normalizar_unidades(unidades: Iterable[Any]) -> List[UnidadCompensacion]:
    out: List[UnidadCompensacion] = []
    for u in unidades or []:
        if isinstance(u, UnidadCompensacion):
            out.append(u)
        elif isinstance(u, dict):
            out.append(UnidadCompensacion(contrato=str(u.get("contrato") or ""), consumo_kwh=a_float(u.get("consumo"))))
    return out


def asignar_creditos(
    geracao_kwh: float,
    consumo_geradora_kwh: float,
    simultaneidad: float,
    unidades: Sequence[Any],
    p: ParametrosTarifa = _DEFAULT,
    inversion_total: float = 0.0,
) -> ResultadoAsignacion:
    """
    Liquidación de un mes de compensación.

    Prioridad estricta: primero la unidad geradora, luego las unidades en el
    orden de la lista. Créditos sobrantes se pierden al cierre del mes.
    """
    geracao = max(0.0, a_float(geracao_kwh))
    consumo = max(0.0, a_float(consumo_geradora_kwh))
    simult = min(1.0, max(0.0, a_float(simultaneidad)))
    lista = normalizar_unidades(unidades)

    autoconsumo = consumo * simult
    consumo_rede = consumo * (1.0 - simult)
    injetada = max(0.0, geracao - autoconsumo)

    geradora = liquidar_unidad("geradora", consumo_rede, injetada, p)

    inicial: _Acumulado = (injetada - geradora.compensado_kwh, ())
    sobrante, facturas = reduce(_paso(p), lista, inicial)

    consumo_total = consumo + sum(max(0.0, a_float(u.consumo_kwh)) for u in lista)
    antiga = consumo_total * p.tarifa
    nova = geradora.nova_fatura + sum(f.nova_fatura for f in facturas)
    economia = antiga - nova

    logger.debug(
        "asignacion injetada=%.2f sobrante=%.2f antiga=%.2f nova=%.2f unidades=%d",
        injetada, sobrante, antiga, nova, len(facturas),
    )

    return ResultadoAsignacion(
        geradora=geradora,
        compensacion=list(facturas),
        autoconsumo_kwh=autoconsumo,
        energia_injetada_kwh=injetada,
        creditos_sobrantes_kwh=sobrante,
        fatura_antiga_total=antiga,
        fatura_nova_total=nova,
        economia_mensal=economia,
        payback_meses=payback_meses(inversion_total, economia),
        retorno_25_anos=retorno_25_anos(economia, inversion_total),
    )
