# ui/sistema_fv.py
from __future__ import annotations

from typing import List, Tuple

import streamlit as st

from core.configuracion import Catalogos, cargar_catalogos, cargar_parametros
from core.consumo import a_float
from core.orquestador import estimar_paneles_desde_datos
from core.rutas import money_R
from core.sizing import resolver_n_paneles
from core.validacion import errores_sistema


# ==========================================================
# Ubicación (HSP por capital)
# ==========================================================
def _ui_ciudad(d, cat: Catalogos) -> None:
    capitales = cat.capitales_ordenadas()
    labels = [f"{c.capital} ({c.hsp:.2f} HSP)" for c in capitales]

    idx = next((i for i, c in enumerate(capitales) if abs(c.hsp - a_float(d.hsp)) < 1e-9), 0)
    sel = st.selectbox("Cidade (capital mais próxima)", options=list(range(len(capitales))), index=idx,
                       format_func=lambda i: labels[i])
    d.hsp = capitales[sel].hsp


# ==========================================================
# Equipos
# ==========================================================
def _ui_inversor(d, cat: Catalogos) -> None:
    st.markdown("#### Inversor")
    nombres = [i.nombre for i in cat.inversores]
    col1, col2 = st.columns(2)
    with col1:
        d.inversor = st.selectbox(
            "Marca", options=nombres, index=nombres.index(d.inversor) if d.inversor in nombres else 0,
            key="inv_marca",
        )
        d.inversor_modelo = st.text_input("Modelo", value=str(d.inversor_modelo or ""), key="inv_modelo")
        d.inversor_garantia = st.text_input("Garantia (anos)", value=str(d.inversor_garantia or ""), key="inv_gar")
    with col2:
        d.inversor_potencia = st.text_input("Potência (ex.: 5 kW)", value=str(d.inversor_potencia or ""), key="inv_pot")
        d.inversor_tension = st.text_input("Tensão (ex.: 220V)", value=str(d.inversor_tension or ""), key="inv_ten")
        inv = cat.inversor(d.inversor)
        if inv:
            st.caption(f"Tipo: {inv.tipo}")


def _ui_panel(d, cat: Catalogos) -> None:
    st.markdown("#### Painel")
    marcas = [p.marca for p in cat.paneles]
    col1, col2 = st.columns(2)
    with col1:
        d.panel = st.selectbox(
            "Marca", options=marcas, index=marcas.index(d.panel) if d.panel in marcas else 0,
            key="pan_marca",
        )
        d.panel_modelo = st.text_input("Modelo", value=str(d.panel_modelo or ""), key="pan_modelo")
    with col2:
        d.panel_potencia_w = st.number_input(
            "Potência do painel (W)", min_value=0.0, step=5.0, value=a_float(d.panel_potencia_w), key="pan_w"
        )
        d.panel_garantia = st.text_input("Garantia de fábrica (anos)", value=str(d.panel_garantia or ""), key="pan_gar")


def _ui_equipos_manuales(d) -> None:
    st.markdown("#### Outros itens inclusos")
    equipos = list(d.equipos_manuales or [])

    quitar = None
    for e in equipos:
        c1, c2 = st.columns([5, 1])
        with c1:
            e["descripcion"] = st.text_input("Descrição", value=str(e.get("descripcion", "")), key=f"eq_{e['id']}")
        with c2:
            st.write("")
            if st.button("🗑️", key=f"eq_del_{e['id']}"):
                quitar = e["id"]

    agregar = st.button("➕ Adicionar item")

    if quitar is not None:
        equipos = [e for e in equipos if e["id"] != quitar]
    if agregar:
        nuevo = max((int(a_float(e.get("id"))) for e in equipos), default=0) + 1
        equipos.append({"id": str(nuevo), "descripcion": ""})

    d.equipos_manuales = equipos
    if quitar is not None or agregar:
        st.rerun()


# ==========================================================
# Cantidad de paneles (estimación en vivo + override)
# ==========================================================
def _ui_cantidad_paneles(d) -> None:
    n_calc = estimar_paneles_desde_datos(d, cargar_parametros())

    col1, col2 = st.columns(2)
    with col1:
        st.metric("Painéis estimados", "—" if n_calc is None else str(n_calc))
    with col2:
        override = st.number_input(
            "Quantidade manual (0 = usar estimativa)",
            min_value=0, step=1, value=int(a_float(d.override_n_paneles)), key="override_n",
        )
        d.override_n_paneles = int(override) if override > 0 else ""

    n_final = resolver_n_paneles(d.override_n_paneles, n_calc)
    if n_final <= 0:
        st.warning("Sem quantidade de painéis: informe o consumo e a potência do painel.")
    else:
        kwp = n_final * a_float(d.panel_potencia_w) / 1000.0
        st.caption(f"Sistema: {n_final} painéis • {kwp:.2f} kWp")


# ==========================================================
# Precio
# ==========================================================
def _ui_precio(d) -> None:
    st.markdown("#### Preço")
    col1, col2 = st.columns(2)
    with col1:
        d.valor_kit = st.number_input("Valor do kit (R$)", min_value=0.0, step=100.0, value=a_float(d.valor_kit))
    with col2:
        d.valor_mano_obra = st.number_input(
            "Valor da mão de obra (R$)", min_value=0.0, step=100.0, value=a_float(d.valor_mano_obra)
        )

    modos = ["total", "detalhado"]
    d.pdf_valor = st.radio(
        "Valor no PDF",
        options=modos,
        index=modos.index(d.pdf_valor) if d.pdf_valor in modos else 0,
        format_func=lambda m: "Somente total" if m == "total" else "Kit + mão de obra",
        horizontal=True,
    )
    st.caption(f"Total: {money_R(a_float(d.valor_kit) + a_float(d.valor_mano_obra))}")


def render(ctx) -> None:
    st.markdown("### Sistema e preço")
    d = ctx.datos
    cat = cargar_catalogos()

    _ui_ciudad(d, cat)
    _ui_inversor(d, cat)
    _ui_panel(d, cat)
    _ui_equipos_manuales(d)
    _ui_cantidad_paneles(d)
    _ui_precio(d)


def validar(ctx) -> Tuple[bool, List[str]]:
    errores = errores_sistema(ctx.datos)
    if resolver_n_paneles(ctx.datos.override_n_paneles, estimar_paneles_desde_datos(ctx.datos, cargar_parametros())) <= 0:
        errores.append("No hay cantidad de paneles: revise consumo y potencia del panel.")
    return (len(errores) == 0), errores
