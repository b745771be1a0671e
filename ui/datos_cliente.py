# ui/datos_cliente.py
from __future__ import annotations

from datetime import date
from typing import List, Tuple

import streamlit as st

from core.finanzas import fecha_propuesta


def render(ctx) -> None:
    st.markdown("### Dados do cliente")
    d = ctx.datos

    d.cliente = st.text_input("Nome do cliente", value=str(d.cliente or ""))
    d.documento = st.text_input("CPF/CNPJ (opcional)", value=str(d.documento or ""))
    d.direccion = st.text_input("Endereço da unidade geradora", value=str(d.direccion or ""))

    fecha = st.date_input(
        "Data da proposta",
        value=fecha_propuesta(d.fecha_propuesta) if d.fecha_propuesta else date.today(),
        format="DD/MM/YYYY",
    )
    d.fecha_propuesta = fecha.isoformat()


def validar(ctx) -> Tuple[bool, List[str]]:
    errores: List[str] = []
    if not str(ctx.datos.cliente or "").strip():
        errores.append("Ingrese el nombre del cliente.")
    return (len(errores) == 0), errores
