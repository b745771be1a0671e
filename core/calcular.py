# calcular.py
from __future__ import annotations

import logging

from .almacen import AlmacenJSON
from .configuracion import cargar_parametros
from .modelo import DatosOrcamento
from .orquestador import ejecutar_orcamento
from .result_accessors import get_geracao_mensal, get_serie_consumo
from .rutas import preparar_salida
from .validacion import validar_entradas

from reportes.generar_charts import generar_chart_consumo_geracao
from reportes.generar_pdf_propuesta import generar_pdf_propuesta

logger = logging.getLogger(__name__)


def main(nombre_carpeta: str = "salidas", almacen: AlmacenJSON | None = None) -> str:
    """Cotización de ejemplo de punta a punta (sin UI): chart + PDF."""
    datos = DatosOrcamento(
        cliente="Cliente exemplo",
        direccion="Rua das Flores, 123 - Aracaju/SE",
        fecha_propuesta="2026-10-19",
        tipo_consumo="individual",
        simultaneidad=0.3,
        consumos_mensuales=[520, 480, 510, 450, 430, 400, 390, 410, 460, 500, 530, 560],
        unidades=[
            {"id": "1", "contrato": "7001234", "consumo": 150},
            {"id": "2", "contrato": "7005678", "consumo": 200},
        ],
        hsp=5.23,
        inversor="Solis",
        panel="Honor Solar",
        panel_potencia_w=575,
        valor_kit=14500.0,
        valor_mano_obra=3500.0,
    )
    validar_entradas(datos)

    almacen = almacen or AlmacenJSON()
    perfil = almacen.cargar_perfil()

    paths = preparar_salida(nombre_carpeta, cliente=datos.cliente)
    resultado = ejecutar_orcamento(datos, cargar_parametros(), dias_validez=perfil.dias_validez)

    generar_chart_consumo_geracao(
        get_serie_consumo(resultado),
        get_geracao_mensal(resultado),
        paths["chart_consumo_geracao"],
        perfil.color_chart_1,
        perfil.color_chart_2,
    )
    pdf = generar_pdf_propuesta(resultado, datos, perfil, paths)
    logger.debug("PDF generado en %s", pdf)
    return pdf


if __name__ == "__main__":
    main()
