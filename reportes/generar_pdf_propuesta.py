# reportes/generar_pdf_propuesta.py
from __future__ import annotations

import logging
import math
from xml.sax.saxutils import escape
from pathlib import Path
from typing import Any, Dict, List

from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, TableStyle

from core.almacen import PerfilEmpresa
from core.consumo import a_float
from core.finanzas import fecha_propuesta
from core.result_accessors import (
    get_fatura_geradora,
    get_faturas_compensacao,
    get_kwp_final,
    get_n_paneles,
    get_payback_meses,
    get_preco_total,
    get_retorno_25_anos,
)
from core.rutas import nombre_archivo_propuesta

from .helpers_pdf import banda, box_paragraph, get_field, make_table, money_R, parrafo_blanco
from .imagenes import imagen_flowable
from .styles import pdf_palette, pdf_styles

logger = logging.getLogger(__name__)

BENEFICIOS = [
    "- Economia de até 95% na conta de luz.",
    "- Valorização imediata do seu imóvel.",
    "- Baixa manutenção e longa vida útil (mais de 25 anos).",
    "- Contribuição para um futuro mais sustentável.",
]


# ---------------------------
# Bloques
# ---------------------------
def p_encabezado(perfil: PerfilEmpresa, pal, content_w) -> List[Any]:
    rz = escape(perfil.razao or "RD Solar")
    lineas = [f"<font size=16><b>{rz}</b></font>"]
    if perfil.cnpj or perfil.tel:
        lineas.append(f"<font size=9>CNPJ: {escape(perfil.cnpj)} | Telefone: {escape(perfil.tel)}</font>")
    lineas.append("<font size=10>Proposta Comercial Personalizada</font>")

    logo = imagen_flowable(perfil.logo, 30 * mm, 26 * mm) or ""
    return [banda(parrafo_blanco("<br/>".join(lineas)), pal, content_w, texto_der=logo), Spacer(1, 8)]


def p_cliente(datos, styles) -> List[Any]:
    cli = escape(str(get_field(datos, "cliente") or "Cliente"))
    doc_cli = escape(str(get_field(datos, "documento") or "Não informado"))
    end_cli = escape(str(get_field(datos, "direccion") or "Não informado"))
    return [
        Paragraph("<b>Dados do Cliente</b>", styles["BodyText"]),
        Paragraph(f"Nome: {cli}", styles["Item"]),
        Paragraph(f"CPF/CNPJ: {doc_cli}", styles["Item"]),
        Paragraph(f"Endereço (Unidade Geradora): {end_cli}", styles["Item"]),
        Spacer(1, 6),
    ]


def p_chart(paths: Dict[str, Any], content_w) -> List[Any]:
    img = imagen_flowable(str(paths.get("chart_consumo_geracao") or ""), content_w, 50 * mm)
    return [img, Spacer(1, 5)] if img else []


def p_retorno(resultado, pal, content_w) -> List[Any]:
    pb = get_payback_meses(resultado)
    pb_txt = f"{math.floor(pb)} meses" if pb is not None else "0 meses"
    html = (
        f"<font color='{pal['PRIMARY'].hexval().replace('0x', '#')}'><b>Retorno do Investimento e Economia</b></font><br/>"
        f"Nova Fatura (Unid. Geradora): {money_R(get_fatura_geradora(resultado))}<br/>"
        f"Payback estimado: {pb_txt} &nbsp;&nbsp;|&nbsp;&nbsp; "
        f"Retorno em 25 anos: {money_R(get_retorno_25_anos(resultado))}"
    )
    return [box_paragraph(html, pal, content_w), Spacer(1, 4)]


def p_unidades(resultado, styles) -> List[Any]:
    filas = get_faturas_compensacao(resultado)
    if not filas:
        return []
    story: List[Any] = [Paragraph("<b>Unidades de Compensação</b>", styles["BodyText"])]
    for f in filas:
        story.append(Paragraph(
            f"&gt; Conta Contrato: {escape(str(f.get('contrato', '')))} | "
            f"Nova Fatura Estimada: {money_R(float(f.get('nova_fatura', 0.0) or 0.0))}",
            styles["Item"],
        ))
    story.append(Spacer(1, 4))
    return story


def _texto_kit(datos, n_paneles: int) -> str:
    inv = " ".join(str(x) for x in [
        get_field(datos, "inversor"), get_field(datos, "inversor_modelo"),
        get_field(datos, "inversor_potencia"), get_field(datos, "inversor_tension"),
    ] if x)
    pan = " ".join(str(x) for x in [
        get_field(datos, "panel"), get_field(datos, "panel_modelo"), f"{get_field(datos, 'panel_potencia_w')}W",
    ] if x)
    return f"&gt; Kit: {n_paneles}x {escape(pan)} | {escape(inv)}"


def _texto_garantias(datos) -> str:
    gp = str(get_field(datos, "panel_garantia") or "").strip()
    gi = str(get_field(datos, "inversor_garantia") or "").strip()
    items = [f"{gp} (fábrica) e 25 (geração) anos para painéis" if gp else "25 (geração) anos para painéis"]
    if gi:
        items.append(f"{gi} anos para inversor")
    return "&gt; Garantias: " + escape(" | ".join(items))


def p_incluso(resultado, datos, perfil: PerfilEmpresa, catalogo_imgs: Dict[str, str], styles, content_w) -> List[Any]:
    items = ["&gt; Instalação e Homologação", _texto_kit(datos, get_n_paneles(resultado))]
    for eq in get_field(datos, "equipos_manuales", []) or []:
        desc = str(get_field(eq, "descripcion") or "").strip()
        if desc:
            items.append(f"&gt; {escape(desc)}")
    items.append(f"&gt; Potência: {get_kwp_final(resultado):.2f} kWp")
    items.append(_texto_garantias(datos))

    inversor = str(get_field(datos, "inversor") or "")
    img_inv = imagen_flowable(
        perfil.imagenes_inversor.get(inversor) or catalogo_imgs.get("inversor", ""), 25 * mm, 25 * mm
    )
    img_pan = imagen_flowable(perfil.imagen_panel or catalogo_imgs.get("panel", ""), 25 * mm, 25 * mm)

    texto = [Paragraph(t, styles["Item"]) for t in items]
    t = make_table([[img_inv or "", img_pan or "", texto]], content_w, ratios=[30, 30, 120])
    t.setStyle(TableStyle([("VALIGN", (0, 0), (-1, -1), "TOP")]))
    return [Paragraph("O que está incluso no seu investimento:", styles["H2b"]), t, Spacer(1, 6)]


def p_beneficios(styles) -> List[Any]:
    story: List[Any] = [Paragraph("Falta pouco para sua independência energética!", styles["H2b"])]
    story += [Paragraph(b, styles["Item"]) for b in BENEFICIOS]
    story.append(Spacer(1, 4))
    return story


def p_financiamento(resultado, styles, content_w) -> List[Any]:
    parcelas = resultado.get("parcelas") or {}
    celdas = [f"{int(n)}x {money_R(float(v))}" for n, v in sorted(parcelas.items(), key=lambda kv: int(kv[0]))]
    filas = [celdas[i:i + 2] + [""] * (2 - len(celdas[i:i + 2])) for i in range(0, len(celdas), 2)]

    story: List[Any] = [
        Paragraph("OPÇÕES DE FINANCIAMENTO", styles["H2b"]),
        Paragraph("CARÊNCIA DE ATÉ 120 DIAS PARA O PRIMEIRO PAGAMENTO", styles["Item"]),
    ]
    if filas:
        t = make_table(filas, content_w, ratios=[1, 1])
        t.setStyle(TableStyle([("FONTSIZE", (0, 0), (-1, -1), 9), ("LEFTPADDING", (0, 0), (-1, -1), 14)]))
        story.append(t)
    story.append(Spacer(1, 8))
    return story


def p_valor(resultado, datos, pal, content_w) -> List[Any]:
    precio = get_preco_total(resultado)
    if str(get_field(datos, "pdf_valor", "total")) == "detalhado":
        izq = parrafo_blanco(
            "VALOR DO KIT (MATERIAIS):<br/>VALOR DA MÃO DE OBRA:<br/><b><font size=12>VALOR TOTAL DO PROJETO:</font></b>"
        )
        der = parrafo_blanco(
            f"{money_R(a_float(get_field(datos, 'valor_kit')))}<br/>"
            f"{money_R(a_float(get_field(datos, 'valor_mano_obra')))}<br/>"
            f"<b><font size=12>{money_R(precio)}</font></b>"
        )
        return [banda(izq, pal, content_w, texto_der=der)]
    return [banda(parrafo_blanco(f"VALOR TOTAL DO PROJETO: {money_R(precio)}", font_size=14, bold=True), pal, content_w)]


def p_validez(resultado, styles) -> List[Any]:
    emision = fecha_propuesta(resultado["fecha_propuesta"]) if resultado.get("fecha_propuesta") else None
    validez = fecha_propuesta(resultado["validez"]) if resultado.get("validez") else None
    out: List[Any] = [Spacer(1, 8)]
    if emision:
        out.append(Paragraph(f"Data da Proposta: {emision.strftime('%d/%m/%Y')}", styles["SmallRight"]))
    if validez:
        out.append(Paragraph(f"<b>Válido até: {validez.strftime('%d/%m/%Y')}</b>", styles["SmallRight"]))
    return out


# ---------------------------
# ENTRYPOINT
# ---------------------------
def _ensure_pdf_path(paths: Dict[str, Any], datos: Any) -> str:
    if not isinstance(paths, dict):
        raise TypeError("`paths` debe ser dict.")

    pdf_path = paths.get("pdf_path")
    if not pdf_path:
        out_dir = paths.get("out_dir") or "salidas"
        pdf_path = str(Path(out_dir) / nombre_archivo_propuesta(str(get_field(datos, "cliente") or "")))
        paths["pdf_path"] = pdf_path

    p = Path(str(pdf_path))
    p.parent.mkdir(parents=True, exist_ok=True)
    return str(p)


def generar_pdf_propuesta(
    resultado: Dict[str, Any],
    datos: Any,
    perfil: PerfilEmpresa,
    paths: Dict[str, Any],
    catalogo_imgs: Dict[str, str] | None = None,
) -> str:
    """
    `resultado` = dict de core.orquestador.ejecutar_orcamento.
    `datos` = DatosOrcamento (cliente, equipos, precios).
    `paths` = rutas (pdf_path, chart_consumo_geracao).
    `catalogo_imgs` = imágenes por defecto {"inversor": ..., "panel": ...}.
    """
    pal = pdf_palette(perfil.color_tema)
    styles = pdf_styles(pal)
    pdf_path = _ensure_pdf_path(paths, datos)

    doc = SimpleDocTemplate(
        pdf_path, pagesize=A4,
        leftMargin=15 * mm, rightMargin=15 * mm, topMargin=10 * mm, bottomMargin=10 * mm,
    )
    content_w = doc.width

    story: List[Any] = []
    story += p_encabezado(perfil, pal, content_w)
    story += p_cliente(datos, styles)
    story += p_chart(paths, content_w)
    story += p_retorno(resultado, pal, content_w)
    story += p_unidades(resultado, styles)
    story += p_incluso(resultado, datos, perfil, catalogo_imgs or {}, styles, content_w)
    story += p_beneficios(styles)
    story += p_financiamento(resultado, styles, content_w)
    story += p_valor(resultado, datos, pal, content_w)
    story += p_validez(resultado, styles)

    doc.build(story)
    logger.debug("PDF generado en %s", pdf_path)
    return pdf_path
