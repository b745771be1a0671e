# core/orquestador.py
from __future__ import annotations

import logging
from dataclasses import asdict
from typing import Any, Dict, Optional

from .asignacion_creditos import asignar_creditos, normalizar_unidades
from .consumo import a_float, consumo_medio, consumos_unidades, serie_mensual
from .finanzas import fecha_propuesta, fecha_validez, parcelas_financiamento
from .modelo import DatosOrcamento, ParametrosTarifa, PerfilSitio
from .sizing import estimar_n_paneles, geracao_estimada_kwh, kwp_instalado, resolver_n_paneles

logger = logging.getLogger(__name__)


# ==========================================================
# Helpers
# ==========================================================
def _perfil(d: DatosOrcamento) -> PerfilSitio:
    return PerfilSitio(hsp=a_float(d.hsp), simultaneidad=a_float(d.simultaneidad))


def _precio_total(d: DatosOrcamento) -> float:
    return max(0.0, a_float(d.valor_kit)) + max(0.0, a_float(d.valor_mano_obra))


def estimar_paneles_desde_datos(d: DatosOrcamento, p: Optional[ParametrosTarifa] = None) -> Optional[int]:
    """Estimación reactiva (se llama en cada rerun del formulario)."""
    p = p or ParametrosTarifa()
    media = consumo_medio(d.tipo_consumo, d.consumo_promedio, d.consumos_mensuales)
    return estimar_n_paneles(_perfil(d), media, consumos_unidades(d.unidades), d.panel_potencia_w, p)


# ==========================================================
# ENTRYPOINT
# ==========================================================
def ejecutar_orcamento(
    d: DatosOrcamento,
    p: Optional[ParametrosTarifa] = None,
    dias_validez: Any = 7,
) -> Dict[str, Any]:
    """
    Flujo lineal:
    Consumo → Sizing (o override) → Generación → Compensación → Finanzas
    """
    p = p or ParametrosTarifa()
    perfil = _perfil(d)

    media = consumo_medio(d.tipo_consumo, d.consumo_promedio, d.consumos_mensuales)
    n_calc = estimar_n_paneles(perfil, media, consumos_unidades(d.unidades), d.panel_potencia_w, p)
    n_pan = resolver_n_paneles(d.override_n_paneles, n_calc)
    if n_pan <= 0:
        raise ValueError("No se puede cotizar: sin cantidad de paneles (revise consumo y potencia del panel).")

    kwp = kwp_instalado(n_pan, d.panel_potencia_w)
    geracao = geracao_estimada_kwh(kwp, perfil.hsp, p)
    precio = _precio_total(d)

    asignacion = asignar_creditos(
        geracao_kwh=geracao,
        consumo_geradora_kwh=media,
        simultaneidad=perfil.simultaneidad,
        unidades=normalizar_unidades(d.unidades),
        p=p,
        inversion_total=precio,
    )

    logger.debug("orcamento n_paneles=%d kwp=%.2f geracao=%.1f economia=%.2f",
                 n_pan, kwp, geracao, asignacion.economia_mensal)

    return {
        "consumo_medio_kwh": media,
        "serie_consumo_12m": serie_mensual(d.tipo_consumo, d.consumo_promedio, d.consumos_mensuales),
        "n_paneles_calculado": n_calc,
        "n_paneles": n_pan,
        "kwp_final": kwp,
        "geracao_mensal_kwh": geracao,
        "asignacion": asignacion,
        "fatura_geradora": asignacion.geradora.nova_fatura,
        "faturas_compensacao": [
            {"contrato": f.contrato, "nova_fatura": f.nova_fatura} for f in asignacion.compensacion
        ],
        "preco_total": precio,
        "payback_meses": asignacion.payback_meses,
        "retorno_25_anos": asignacion.retorno_25_anos,
        "parcelas": parcelas_financiamento(precio, p),
        "fecha_propuesta": fecha_propuesta(d.fecha_propuesta),
        "validez": fecha_validez(d.fecha_propuesta, dias_validez),
    }


def resultado_a_dict(res: Dict[str, Any]) -> Dict[str, Any]:
    """Copia serializable (snapshot/JSON) del resultado."""
    out = dict(res)
    out["asignacion"] = asdict(res["asignacion"])
    out["fecha_propuesta"] = res["fecha_propuesta"].isoformat()
    out["validez"] = res["validez"].isoformat()
    return out
