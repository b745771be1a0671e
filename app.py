# app.py
from __future__ import annotations

import logging
import sys
from pathlib import Path

import streamlit as st

# === asegurar imports del repo ===
ROOT = Path(__file__).resolve().parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from ui import consumo_energetico, datos_cliente, resultados, sistema_fv
from ui.empresa import render_sidebar
from ui.router import PasoWizard, render_wizard


PASOS = [
    PasoWizard(1, "Dados do cliente", datos_cliente.render, datos_cliente.validar, requiere=[]),
    PasoWizard(2, "Consumo", consumo_energetico.render, consumo_energetico.validar, requiere=[1]),
    PasoWizard(3, "Sistema e preço", sistema_fv.render, sistema_fv.validar, requiere=[1, 2]),
    PasoWizard(4, "Resultados", resultados.render, resultados.validar, requiere=[1, 2, 3]),
]


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    st.set_page_config(page_title="Orçamento Solar", layout="wide")
    st.title("Orçamento de Energia Solar")

    render_wizard(PASOS)
    render_sidebar()


if __name__ == "__main__":
    main()
