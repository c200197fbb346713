# electrico/demanda.py
"""
Agregador de demanda.

Modo plano (por defecto):
    demanda = Σ ilu × fd_iluminacion + Σ tomas × fd_tomas + Σ fijas × fd_fijas

Modo escalonado (opcional, NEC 220.42 viviendas):
    la carga general (ilu + tomas) se evalúa por tramos acumulados;
    las cargas fijas mantienen fd_fijas.
"""

from __future__ import annotations

import math
from typing import List, Sequence, Tuple

from electrico.contrato import CargaAmbiente, TotalesDemanda
from electrico.normas import claves
from nucleo.contexto import ContextoCalculo

# (hasta_va acumulado, factor); NEC 220.42, unidades de vivienda
TRAMOS_DEMANDA_VIVIENDA: Sequence[Tuple[float, float]] = (
    (3000.0, 1.00),
    (120000.0, 0.35),
    (math.inf, 0.25),
)


def demanda_por_tramos(va: float, tramos: Sequence[Tuple[float, float]] = TRAMOS_DEMANDA_VIVIENDA) -> float:
    restante = max(0.0, float(va))
    desde = 0.0
    total = 0.0
    for hasta, factor in tramos:
        if restante <= 0:
            break
        ancho = min(restante, float(hasta) - desde)
        total += ancho * float(factor)
        restante -= ancho
        desde = float(hasta)
    return total


def corriente_desde_va(va: float, tension_v: float, fases: int = 1) -> float:
    """I = VA / V (1Φ) o VA / (√3·V) (3Φ). Tensión <= 0 devuelve 0."""
    v = float(tension_v)
    if v <= 0:
        return 0.0
    denom = math.sqrt(3.0) * v if int(fases) == 3 else v
    return float(va) / denom


def agregar_demanda(
    cargas: List[CargaAmbiente],
    ctx: ContextoCalculo,
    *,
    tension_v: float,
    fases: int = 1,
    escalonada: bool = False,
) -> TotalesDemanda:
    total = sum(c.total_va for c in cargas)

    ilu = sum(c.iluminacion_va for c in cargas)
    tomas = sum(c.tomas_va for c in cargas)
    fijas = sum(c.fijas_va for c in cargas)

    fd_fijas = ctx.numero(claves.FD_FIJAS)

    if escalonada:
        demanda = demanda_por_tramos(ilu + tomas) + fijas * fd_fijas
        metodo = "tiered"
    else:
        fd_ilu = ctx.numero(claves.FD_ILUMINACION)
        fd_tomas = ctx.numero(claves.FD_TOMAS)
        demanda = sum(c.iluminacion_va * fd_ilu + c.tomas_va * fd_tomas + c.fijas_va * fd_fijas for c in cargas)
        metodo = "flat"

    return TotalesDemanda(
        total_conectado_va=total,
        demanda_estimada_va=demanda,
        corriente_total_a=corriente_desde_va(demanda, tension_v, fases),
        factor_diversidad=(demanda / total) if total > 0 else 1.0,
        metodo=metodo,
    )


__all__ = [
    "TRAMOS_DEMANDA_VIVIENDA",
    "demanda_por_tramos",
    "corriente_desde_va",
    "agregar_demanda",
]
