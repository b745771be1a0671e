# reportes/generar_charts.py
from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Sequence

import matplotlib.pyplot as plt

from core.consumo import MESES


def _serie_12(valores: Sequence[float]) -> List[float]:
    vals = [float(v or 0.0) for v in list(valores or [])[:12]]
    return vals + [0.0] * (12 - len(vals))


def generar_chart_consumo_geracao(
    serie_consumo: Sequence[float],
    geracao_mensal_kwh: float,
    out_path: str,
    color_consumo: Optional[str] = None,
    color_geracao: Optional[str] = None,
) -> str:
    """
    Barras mensuales: consumo (kWh) vs generación estimada (kWh, constante).
    Devuelve la ruta del PNG.
    """
    p = Path(out_path)
    p.parent.mkdir(parents=True, exist_ok=True)

    consumo = _serie_12(serie_consumo)
    geracao = [float(geracao_mensal_kwh or 0.0)] * 12
    x = list(range(12))
    ancho = 0.4

    fig, ax = plt.subplots(figsize=(9, 2.6))
    ax.bar([i - ancho / 2 for i in x], consumo, width=ancho, label="Consumo (kWh)",
           color=color_consumo or "#b0bec5")
    ax.bar([i + ancho / 2 for i in x], geracao, width=ancho, label="Geração Estimada (kWh)",
           color=color_geracao or "#ff9800")
    ax.set_xticks(x)
    ax.set_xticklabels(MESES)
    ax.legend(loc="upper center", ncol=2, fontsize=8, frameon=False, bbox_to_anchor=(0.5, 1.18))
    ax.spines["top"].set_visible(False)
    ax.spines["right"].set_visible(False)
    fig.tight_layout()
    fig.savefig(p, dpi=160)
    plt.close(fig)

    return str(p)
