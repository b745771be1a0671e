# ui/consumo_energetico.py
from __future__ import annotations

from typing import List, Tuple

import streamlit as st

from core.consumo import MESES, a_float, consumo_medio, consumos_unidades
from core.validacion import errores_consumo


SIMULTANEIDADES = {0.3: "30% (fora de casa de dia)", 0.5: "50% (meio período)", 0.7: "70% (em casa o dia todo)"}


def _nuevo_id(unidades: List[dict]) -> str:
    ids = [int(a_float(u.get("id"), 0)) for u in unidades]
    return str(max(ids, default=0) + 1)


def _ui_consumo_geradora(d) -> None:
    col1, col2 = st.columns(2)
    with col1:
        tipos = ["media", "individual"]
        d.tipo_consumo = st.radio(
            "Tipo de consumo",
            options=tipos,
            index=tipos.index(d.tipo_consumo) if d.tipo_consumo in tipos else 0,
            format_func=lambda t: "Média mensal" if t == "media" else "Mês a mês (até 12)",
            horizontal=True,
        )
    with col2:
        opciones = list(SIMULTANEIDADES.keys())
        actual = a_float(d.simultaneidad, 0.3)
        d.simultaneidad = st.selectbox(
            "Simultaneidade (consumo durante a geração)",
            options=opciones,
            index=opciones.index(actual) if actual in opciones else 0,
            format_func=lambda s: SIMULTANEIDADES[s],
        )

    if d.tipo_consumo == "media":
        d.consumo_promedio = st.number_input(
            "Consumo médio mensal (kWh)",
            min_value=0.0,
            step=10.0,
            value=a_float(d.consumo_promedio),
        )
        return

    st.markdown("#### kWh por mês")
    kwh = list(d.consumos_mensuales or [])
    kwh = (kwh + [""] * 12)[:12]

    # grid 4x3 para inputs
    for fila in range(3):
        cols = st.columns(4)
        for j in range(4):
            i = fila * 4 + j
            with cols[j]:
                kwh[i] = st.number_input(
                    f"{MESES[i]} (kWh)",
                    min_value=0.0,
                    step=10.0,
                    value=a_float(kwh[i]),
                    key=f"kwh_{i}",
                )
    d.consumos_mensuales = kwh


def _ui_unidades(d) -> None:
    st.markdown("#### Unidades de compensação")
    unidades = list(d.unidades or [])

    quitar = None
    for u in unidades:
        c1, c2, c3 = st.columns([3, 2, 1])
        with c1:
            u["contrato"] = st.text_input("Conta contrato", value=str(u.get("contrato", "")), key=f"uc_contrato_{u['id']}")
        with c2:
            u["consumo"] = st.number_input(
                "Consumo (kWh)", min_value=0.0, step=10.0, value=a_float(u.get("consumo")), key=f"uc_consumo_{u['id']}"
            )
        with c3:
            st.write("")
            if st.button("🗑️", key=f"uc_del_{u['id']}"):
                quitar = u["id"]

    agregar = st.button("➕ Adicionar unidade")

    if quitar is not None:
        unidades = [u for u in unidades if u["id"] != quitar]
    if agregar:
        unidades.append({"id": _nuevo_id(unidades), "contrato": "", "consumo": ""})

    d.unidades = unidades
    if quitar is not None or agregar:
        st.rerun()


def render(ctx) -> None:
    st.markdown("### Consumo de energia")
    d = ctx.datos

    _ui_consumo_geradora(d)
    _ui_unidades(d)

    media = consumo_medio(d.tipo_consumo, d.consumo_promedio, d.consumos_mensuales)
    total_uc = sum(max(0.0, c) for c in consumos_unidades(d.unidades))

    a, b = st.columns(2)
    with a:
        st.metric("Consumo médio geradora (kWh/mês)", f"{media:,.0f}")
    with b:
        st.metric("Consumo unidades compensação (kWh/mês)", f"{total_uc:,.0f}")


def validar(ctx) -> Tuple[bool, List[str]]:
    errores = errores_consumo(ctx.datos)
    return (len(errores) == 0), errores
