# core/modelo.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class ParametrosTarifa:
    tarifa: float = 1.22                  # R$/kWh (tarifa plena)
    taxa_compensacao: float = 0.19        # R$/kWh sobre lo compensado
    custo_disponibilidade: float = 50.0   # R$ mínimo por factura
    fator_perdas: float = 0.80            # derating fijo del sistema
    dias_mes: float = 30.0

    # cuota mensual por monto de referencia (plazo en meses -> cuota)
    monto_ref_financiamento: float = 12000.0
    cuotas_ref_financiamento: Dict[int, float] = field(
        default_factory=lambda: {24: 791.35, 36: 616.40, 48: 534.48, 60: 489.39}
    )


@dataclass(frozen=True)
class PerfilSitio:
    hsp: float                 # h/día equivalentes de sol pleno
    simultaneidad: float       # 0..1 (autoconsumo instantáneo)


@dataclass(frozen=True)
class UnidadCompensacion:
    contrato: str
    consumo_kwh: float         # kWh/mes


@dataclass(frozen=True)
class FacturaUnidad:
    contrato: str
    consumo_kwh: float
    compensado_kwh: float
    nao_compensado_kwh: float
    nova_fatura: float


@dataclass(frozen=True)
class ResultadoAsignacion:
    geradora: FacturaUnidad
    compensacion: List[FacturaUnidad]

    autoconsumo_kwh: float
    energia_injetada_kwh: float
    creditos_sobrantes_kwh: float

    fatura_antiga_total: float
    fatura_nova_total: float
    economia_mensal: float

    payback_meses: Optional[float]    # None = no disponible
    retorno_25_anos: float


@dataclass
class DatosOrcamento:
    # cliente
    cliente: str = ""
    documento: str = ""
    direccion: str = ""
    fecha_propuesta: str = ""             # ISO yyyy-mm-dd

    # consumo unidad geradora
    tipo_consumo: str = "media"           # media | individual
    simultaneidad: float = 0.3
    consumo_promedio: Any = ""
    consumos_mensuales: List[Any] = field(default_factory=lambda: [""] * 12)

    unidades: List[Dict[str, Any]] = field(default_factory=list)   # {id, contrato, consumo}

    # sistema
    hsp: float = 5.23
    inversor: str = ""
    inversor_modelo: str = ""
    inversor_potencia: str = ""
    inversor_tension: str = ""
    inversor_garantia: str = ""
    panel: str = ""
    panel_modelo: str = ""
    panel_potencia_w: Any = 575
    panel_garantia: str = ""
    override_n_paneles: Any = ""

    equipos_manuales: List[Dict[str, Any]] = field(default_factory=list)  # {id, descripcion}

    # precio
    valor_kit: float = 0.0
    valor_mano_obra: float = 0.0
    pdf_valor: str = "total"              # total | detalhado
