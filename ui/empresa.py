# ui/empresa.py
from __future__ import annotations

from datetime import datetime

import streamlit as st

from core.almacen import AlmacenJSON, PerfilEmpresa
from core.configuracion import cargar_catalogos
from reportes.imagenes import archivo_a_data_uri
from ui.estado import ctx_cargar_datos, ctx_get, ctx_set_paso


def almacen_get() -> AlmacenJSON:
    if "almacen" not in st.session_state:
        st.session_state["almacen"] = AlmacenJSON()
    return st.session_state["almacen"]


def _subir_imagen(label: str, key: str) -> str:
    f = st.file_uploader(label, type=["png", "jpg", "jpeg"], key=key)
    if f is None:
        return ""
    return archivo_a_data_uri(f.getvalue(), f.type or "image/png")


# ==========================================================
# Perfil de empresa
# ==========================================================
def _render_perfil(almacen: AlmacenJSON) -> None:
    perfil = almacen.cargar_perfil()

    with st.sidebar.expander("🏢 Empresa", expanded=False):
        with st.form("form_empresa"):
            razao = st.text_input("Razão social", value=perfil.razao)
            cnpj = st.text_input("CNPJ", value=perfil.cnpj)
            tel = st.text_input("Telefone", value=perfil.tel)
            dias = st.number_input("Validade da proposta (dias)", min_value=1, step=1,
                                   value=int(perfil.dias_validez or 7))

            color_tema = st.color_picker("Cor do tema", value=perfil.color_tema)
            c1, c2 = st.columns(2)
            with c1:
                color_1 = st.color_picker("Cor consumo", value=perfil.color_chart_1)
            with c2:
                color_2 = st.color_picker("Cor geração", value=perfil.color_chart_2)

            logo = _subir_imagen("Logo", "up_logo")
            img_panel = _subir_imagen("Imagem do painel", "up_panel")

            marcas = [i.nombre for i in cargar_catalogos().inversores]
            marca_img = st.selectbox("Imagem do inversor (marca)", options=marcas)
            img_inv = _subir_imagen("Imagem do inversor", "up_inv")

            if st.form_submit_button("Salvar empresa"):
                imagenes_inversor = dict(perfil.imagenes_inversor)
                if img_inv:
                    imagenes_inversor[marca_img] = img_inv
                almacen.guardar_perfil(PerfilEmpresa(
                    razao=razao.strip(),
                    cnpj=cnpj.strip(),
                    tel=tel.strip(),
                    logo=logo or perfil.logo,
                    color_tema=color_tema,
                    color_chart_1=color_1,
                    color_chart_2=color_2,
                    imagenes_inversor=imagenes_inversor,
                    imagen_panel=img_panel or perfil.imagen_panel,
                    dias_validez=str(int(dias)),
                ))
                st.success("Empresa salva.")


# ==========================================================
# Cotizaciones guardadas
# ==========================================================
def _label_cotizacion(q: dict) -> str:
    fecha = datetime.fromtimestamp(int(q["id"]) / 1000).strftime("%d/%m/%Y %H:%M")
    return f"{q.get('nombre', '')} • {fecha}"


def _render_cotizaciones(almacen: AlmacenJSON) -> None:
    cotizaciones = almacen.listar_cotizaciones()

    with st.sidebar.expander(f"📁 Orçamentos salvos ({len(cotizaciones)})", expanded=False):
        if not cotizaciones:
            st.caption("Nenhum orçamento salvo.")
            return

        for q in sorted(cotizaciones, key=lambda q: int(q["id"]), reverse=True):
            st.write(_label_cotizacion(q))
            c1, c2 = st.columns(2)
            with c1:
                if st.button("Abrir", key=f"cot_abrir_{q['id']}"):
                    datos = almacen.cargar_cotizacion(q["id"])
                    if datos is not None:
                        # widgets con key conservan su valor: se limpian para tomar los datos cargados
                        for k in [k for k in st.session_state.keys() if k not in ("wizard_ctx", "almacen")]:
                            del st.session_state[k]
                        ctx_cargar_datos(ctx_get(st), datos)
                        ctx_set_paso(st, 1)
                        st.rerun()
            with c2:
                if st.button("Excluir", key=f"cot_del_{q['id']}"):
                    almacen.eliminar_cotizacion(q["id"])
                    st.rerun()


def render_sidebar() -> None:
    almacen = almacen_get()
    _render_perfil(almacen)
    _render_cotizaciones(almacen)
