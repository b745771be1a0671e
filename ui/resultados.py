# ui/resultados.py
from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

import pandas as pd
import streamlit as st

from core.configuracion import cargar_catalogos, cargar_parametros
from core.orquestador import ejecutar_orcamento, resultado_a_dict
from core.result_accessors import (
    get_asignacion,
    get_economia_mensal,
    get_geracao_mensal,
    get_kwp_final,
    get_n_paneles,
    get_payback_meses,
    get_preco_total,
    get_retorno_25_anos,
    get_serie_consumo,
)
from core.rutas import money_R, num, preparar_salida
from reportes.generar_charts import generar_chart_consumo_geracao
from reportes.generar_pdf_propuesta import generar_pdf_propuesta
from ui.empresa import almacen_get
from ui.state_helpers import is_result_stale, save_result_fingerprint


COLUMNAS_FATURAS = ["Unidade", "Consumo (kWh)", "Compensado (kWh)", "Não compensado (kWh)", "Nova fatura (R$)"]


# ==========================================================
# Tabla de facturas (pandas)
# ==========================================================
def tabla_faturas(res: Dict[str, Any]) -> pd.DataFrame:
    asig = get_asignacion(res)
    filas = []
    for f in [asig.get("geradora") or {}] + list(asig.get("compensacion") or []):
        if not f:
            continue
        contrato = str(f.get("contrato", ""))
        filas.append([
            "Geradora" if contrato == "geradora" else contrato,
            float(f.get("consumo_kwh", 0.0)),
            float(f.get("compensado_kwh", 0.0)),
            float(f.get("nao_compensado_kwh", 0.0)),
            float(f.get("nova_fatura", 0.0)),
        ])
    return pd.DataFrame(filas, columns=COLUMNAS_FATURAS)


# ==========================================================
# Cálculo
# ==========================================================
def _calcular(ctx) -> Optional[Dict[str, Any]]:
    perfil = almacen_get().cargar_perfil()
    try:
        ctx.resultado = ejecutar_orcamento(ctx.datos, cargar_parametros(), dias_validez=perfil.dias_validez)
    except ValueError as e:
        st.error(str(e))
        ctx.resultado = None
        return None
    ctx.artefactos = {}
    save_result_fingerprint(ctx)
    return ctx.resultado


def _resultado_vigente(ctx) -> Optional[Dict[str, Any]]:
    if ctx.resultado is None or is_result_stale(ctx):
        return _calcular(ctx)
    return ctx.resultado


# ==========================================================
# Render: KPIs y bloques
# ==========================================================
def _render_kpis(res: Dict[str, Any]) -> None:
    pb = get_payback_meses(res)

    c1, c2, c3 = st.columns(3)
    c1.metric("Sistema", f"{get_n_paneles(res)} painéis • {num(get_kwp_final(res), 2)} kWp")
    c2.metric("Geração estimada", f"{num(get_geracao_mensal(res), 0)} kWh/mês")
    c3.metric("Investimento", money_R(get_preco_total(res)))

    c4, c5, c6 = st.columns(3)
    c4.metric("Economia mensal", money_R(get_economia_mensal(res)))
    c5.metric("Payback", "N/D" if pb is None else f"{int(pb)} meses")
    c6.metric("Retorno em 25 anos", money_R(get_retorno_25_anos(res)))


def _render_tabla(res: Dict[str, Any]) -> None:
    st.markdown("#### Faturas estimadas")
    df = tabla_faturas(res)
    st.dataframe(
        df.style.format({c: "{:,.1f}" for c in COLUMNAS_FATURAS[1:4]} | {"Nova fatura (R$)": money_R}),
        hide_index=True,
        use_container_width=True,
    )
    asig = get_asignacion(res)
    sobrantes = float(asig.get("creditos_sobrantes_kwh", 0.0))
    if sobrantes > 0:
        st.caption(f"Créditos excedentes: {num(sobrantes, 1)} kWh/mês")


def _render_chart(ctx, res: Dict[str, Any], paths: Dict[str, str]) -> None:
    perfil = almacen_get().cargar_perfil()
    chart = generar_chart_consumo_geracao(
        get_serie_consumo(res),
        get_geracao_mensal(res),
        paths["chart_consumo_geracao"],
        perfil.color_chart_1,
        perfil.color_chart_2,
    )
    ctx.artefactos["chart_consumo_geracao"] = chart
    st.image(chart, use_container_width=True)


# ==========================================================
# Acciones: PDF y guardar cotización
# ==========================================================
def _catalogo_imgs(d) -> Dict[str, str]:
    cat = cargar_catalogos()
    inv = cat.inversor(d.inversor)
    pan = cat.panel(d.panel)
    return {"inversor": inv.imagen if inv else "", "panel": pan.imagen if pan else ""}


def _ui_boton_pdf(ctx, res: Dict[str, Any], paths: Dict[str, str]) -> None:
    st.markdown("#### Gerar proposta (PDF)")
    col_a, col_b = st.columns([1, 2])
    with col_a:
        run = st.button("Gerar PDF", type="primary")
    with col_b:
        st.caption("Gera o PDF da proposta com os dados já calculados.")

    if run:
        perfil = almacen_get().cargar_perfil()
        ctx.artefactos["pdf"] = generar_pdf_propuesta(res, ctx.datos, perfil, paths, _catalogo_imgs(ctx.datos))
        st.success("PDF gerado.")

    pdf_path = ctx.artefactos.get("pdf")
    if pdf_path:
        with open(pdf_path, "rb") as f:
            st.download_button(
                "Baixar PDF",
                data=f.read(),
                file_name=paths["pdf_path"].replace("\\", "/").split("/")[-1],
                mime="application/pdf",
            )


def _ui_guardar(ctx, res: Dict[str, Any]) -> None:
    st.markdown("#### Salvar orçamento")
    col_a, col_b = st.columns([2, 1])
    with col_a:
        nombre = st.text_input("Nome do orçamento", value=str(ctx.datos.cliente or ""), key="nombre_cotizacion")
    with col_b:
        st.write("")
        guardar = st.button("💾 Salvar")

    if guardar:
        try:
            cid = almacen_get().guardar_cotizacion(nombre, ctx.datos, resumen=resultado_a_dict(res))
        except ValueError as e:
            st.error(str(e))
            return
        st.success(f"Orçamento salvo (id {cid}).")


# ==========================================================
# Paso 4 (render + validar)
# ==========================================================
def render(ctx) -> None:
    st.markdown("### Resultados e proposta")

    res = _resultado_vigente(ctx)
    if res is None:
        return

    paths = preparar_salida("salidas", cliente=ctx.datos.cliente)

    _render_kpis(res)
    st.divider()
    _render_tabla(res)
    _render_chart(ctx, res, paths)
    st.divider()
    _ui_boton_pdf(ctx, res, paths)
    _ui_guardar(ctx, res)


def validar(ctx) -> Tuple[bool, List[str]]:
    if ctx.resultado is None:
        return False, ["No hay resultados calculados."]
    return True, []
