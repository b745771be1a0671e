# ui/estado.py
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List, Optional

from core.modelo import DatosOrcamento


def _datos_default() -> DatosOrcamento:
    return DatosOrcamento(fecha_propuesta=date.today().isoformat())


# ==========================================================
# Contexto global del Wizard
# ==========================================================
@dataclass
class WizardCtx:
    # ------------------------------------------------------
    # Navegación
    # ------------------------------------------------------
    paso_actual: int = 1
    completado: Dict[int, bool] = field(default_factory=dict)
    errores: List[str] = field(default_factory=list)

    # ------------------------------------------------------
    # Inputs del usuario (un solo objeto)
    # ------------------------------------------------------
    datos: DatosOrcamento = field(default_factory=_datos_default)

    # ------------------------------------------------------
    # Resultado del orquestador + artefactos (chart, pdf)
    # ------------------------------------------------------
    resultado: Optional[Dict[str, Any]] = None
    artefactos: Dict[str, str] = field(default_factory=dict)
    result_inputs_fingerprint: Optional[str] = None


# ==========================================================
# Obtener contexto
# ==========================================================
def ctx_get(st) -> WizardCtx:
    """
    Obtiene el contexto desde session_state.
    Si no existe, lo crea automáticamente.
    """
    if "wizard_ctx" not in st.session_state:
        st.session_state["wizard_ctx"] = WizardCtx()
    return st.session_state["wizard_ctx"]


def ctx_set_paso(st, paso: int) -> None:
    ctx = ctx_get(st)
    ctx.paso_actual = int(paso)


def ctx_cargar_datos(ctx: WizardCtx, datos: DatosOrcamento) -> None:
    """Reemplaza los inputs (cotización cargada) e invalida resultados."""
    ctx.datos = datos
    ctx_invalidate_from(ctx, 1)


# ==========================================================
# Invalidar pasos posteriores
# ==========================================================
def ctx_invalidate_from(ctx: WizardCtx, paso_desde: int) -> None:
    """
    Marca como NO completados los pasos >= paso_desde
    y descarta el resultado calculado.
    """
    for k in list(ctx.completado.keys()):
        if int(k) >= int(paso_desde):
            ctx.completado[k] = False

    ctx.resultado = None
    ctx.artefactos = {}
    ctx.result_inputs_fingerprint = None
