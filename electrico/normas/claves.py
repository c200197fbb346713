# electrico/normas/claves.py
from __future__ import annotations

from typing import Dict, Tuple

# ==========================================================
# Claves normativas: FUENTE ÚNICA DE VERDAD de los respaldos
# ==========================================================
# Nota:
# - El motor nunca usa estos valores directamente: siempre pregunta al
#   proveedor y solo cae al respaldo si el parámetro no existe.
# - Cada uso de respaldo queda registrado como warning del cálculo.
# ==========================================================

LIGHTING_VA_PER_M2 = "lighting_va_per_m2"

FD_ILUMINACION = "fd_iluminacion"
FD_TOMAS = "fd_tomas"
FD_FIJAS = "fd_fijas"

ILU_VA_MAX_POR_CIRCUITO = "ilu_va_max_por_circuito"
TOMA_VA_MAX_POR_CIRCUITO = "toma_va_max_por_circuito"
FIJA_VA_MAX_POR_CIRCUITO = "fija_va_max_por_circuito"

CIRCUIT_MAX_UTILIZATION = "circuit_max_utilization"

VD_BRANCH_LIMIT_PCT = "vd_branch_limit_pct"
VD_TOTAL_LIMIT_PCT = "vd_total_limit_pct"

TENSION_NOMINAL_V = "tension_nominal_v"
LONGITUD_RAMAL_M = "longitud_ramal_m"
LONGITUD_ALIMENTADOR_M = "longitud_alimentador_m"
TEMPERATURA_AMBIENTE_C = "temperatura_ambiente_c"
FACTOR_POTENCIA = "factor_potencia"

# clave -> (respaldo, unidad)
RESPALDOS: Dict[str, Tuple[float, str]] = {
    LIGHTING_VA_PER_M2: (32.3, "VA/m2"),          # ~3 VA/ft2
    FD_ILUMINACION: (1.0, "ratio"),
    FD_TOMAS: (1.0, "ratio"),
    FD_FIJAS: (1.0, "ratio"),
    ILU_VA_MAX_POR_CIRCUITO: (1500.0, "VA"),
    TOMA_VA_MAX_POR_CIRCUITO: (1800.0, "VA"),
    FIJA_VA_MAX_POR_CIRCUITO: (5000.0, "VA"),
    CIRCUIT_MAX_UTILIZATION: (0.8, "ratio"),
    VD_BRANCH_LIMIT_PCT: (3.0, "%"),
    VD_TOTAL_LIMIT_PCT: (5.0, "%"),
    TENSION_NOMINAL_V: (120.0, "V"),
    LONGITUD_RAMAL_M: (20.0, "m"),
    LONGITUD_ALIMENTADOR_M: (15.0, "m"),
    TEMPERATURA_AMBIENTE_C: (30.0, "C"),
    FACTOR_POTENCIA: (0.85, "ratio"),
}


def respaldo(clave: str) -> float:
    """Valor de respaldo documentado para una clave normativa."""
    return float(RESPALDOS[clave][0])


def unidad(clave: str) -> str:
    return str(RESPALDOS.get(clave, (0.0, ""))[1])


__all__ = [
    "LIGHTING_VA_PER_M2",
    "FD_ILUMINACION",
    "FD_TOMAS",
    "FD_FIJAS",
    "ILU_VA_MAX_POR_CIRCUITO",
    "TOMA_VA_MAX_POR_CIRCUITO",
    "FIJA_VA_MAX_POR_CIRCUITO",
    "CIRCUIT_MAX_UTILIZATION",
    "VD_BRANCH_LIMIT_PCT",
    "VD_TOTAL_LIMIT_PCT",
    "TENSION_NOMINAL_V",
    "LONGITUD_RAMAL_M",
    "LONGITUD_ALIMENTADOR_M",
    "TEMPERATURA_AMBIENTE_C",
    "FACTOR_POTENCIA",
    "RESPALDOS",
    "respaldo",
    "unidad",
]
