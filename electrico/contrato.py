# electrico/contrato.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple

# Tipos de circuito
LIGHTING = "lighting"
OUTLET = "outlet"
FIXED = "fixed"
SPECIAL = "special"
TIPOS_CIRCUITO = (LIGHTING, OUTLET, FIXED, SPECIAL)

# Fases del tablero
FASES_TABLERO = ("A", "B", "C")

# Estados
OK = "OK"
WARNING = "WARNING"
ERROR = "ERROR"


def peor_estado(*estados: str) -> str:
    if ERROR in estados:
        return ERROR
    if WARNING in estados:
        return WARNING
    return OK


@dataclass(frozen=True)
class CargaAmbiente:
    """Carga de un ambiente (VA)."""

    ambiente: str
    area_m2: float
    iluminacion_va: float
    tomas_va: float
    fijas_va: float = 0.0
    observaciones: Tuple[str, ...] = ()

    @property
    def total_va(self) -> float:
        return self.iluminacion_va + self.tomas_va + self.fijas_va


@dataclass(frozen=True)
class TotalesDemanda:
    total_conectado_va: float
    demanda_estimada_va: float
    corriente_total_a: float
    factor_diversidad: float
    metodo: str                      # "flat" | "tiered"


@dataclass(frozen=True)
class PropuestaCircuito:
    id: str
    tipo: str
    va_asignada: float
    ambientes: Tuple[str, ...]
    utilizacion_pct: Optional[float] = None     # VA / tope × 100; None sin tope válido
    fase: Optional[str] = None                  # "A" | "B" | "C", la fija el balanceo

    # Se completan en el dimensionamiento
    breaker_a: Optional[int] = None
    calibre: Optional[str] = None
    corriente_a: float = 0.0
    seccion_mm2: float = 0.0
    ampacidad_a: float = 0.0
    marcado: bool = False
    notas: Tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class ResultadoCaida:
    corriente_a: float
    longitud_m: float
    seccion_mm2: float
    resistencia_ohm: float
    reactancia_ohm: float
    caida_v: float
    caida_pct: float
    limite_pct: float
    longitud_critica_m: float
    estado: str
    nota: str = ""


@dataclass(frozen=True)
class ResultadoPuestaTierra:
    main_breaker_a: float
    limite_a: Optional[float]        # cota del tramo aplicado
    egc_mm2: Optional[float]
    gec_mm2: Optional[float]
    material: str = "Cu"
    estado: str = OK
    nota: str = ""


@dataclass(frozen=True)
class ResultadoAlimentador:
    """Alimentador principal: conductor, breaker y caída contra el límite total."""

    material: str
    calibre: Optional[str]
    seccion_mm2: float
    r_ohm_km: float                   # de tabla
    corriente_a: float
    ampacidad_a: float
    breaker_a: Optional[int]
    marcado: bool
    caida: ResultadoCaida
    notas: Tuple[str, ...] = field(default_factory=tuple)
    r_operacion_ohm_km: float = 0.0   # a la temperatura ambiente, la usada en la caída


@dataclass(frozen=True)
class ResumenCaida:
    limite_ramal_pct: float
    limite_total_pct: float
    peor_caso_pct: float
    fuera_de_limite: int
    estado_global: str


@dataclass(frozen=True)
class CargaFase:
    """Total de una fase del tablero tras el balanceo."""

    fase: str
    total_va: float
    circuitos: int


__all__ = [
    "LIGHTING",
    "OUTLET",
    "FIXED",
    "SPECIAL",
    "TIPOS_CIRCUITO",
    "OK",
    "WARNING",
    "ERROR",
    "peor_estado",
    "CargaAmbiente",
    "TotalesDemanda",
    "PropuestaCircuito",
    "ResultadoCaida",
    "ResultadoPuestaTierra",
    "ResultadoAlimentador",
    "ResumenCaida",
    "CargaFase",
    "FASES_TABLERO",
]
