# nucleo/validacion.py
"""
Normalizador de entradas.

Responsabilidad:
- Validar ambientes, consumos y opciones antes de cualquier cálculo.
- Canonicalizar nombres de ambiente (trim + sin distinguir mayúsculas).
- Agrupar consumos por ambiente.

No calcula cargas y no consulta parámetros normativos.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

from electrico.normas.proveedor import como_fecha
from nucleo.errores import DanglingReferenceError, DuplicateRoomError, ErrorValidacionEntrada
from nucleo.modelo import Ambiente, Consumo, OpcionesCalculo

# Rango físico admitido para la temperatura ambiente (°C)
TEMP_AMBIENTE_MIN_C = -40.0
TEMP_AMBIENTE_MAX_C = 90.0


@dataclass(frozen=True)
class EntradasNormalizadas:
    # clave normalizada -> valor; el orden sigue la lista de ambientes de entrada
    areas: Dict[str, float]
    nombres: Dict[str, str]
    consumos: Dict[str, Tuple[Consumo, ...]]

    def claves(self) -> List[str]:
        return list(self.areas.keys())

    def nombre(self, clave: str) -> str:
        return self.nombres[clave]


def clave_ambiente(nombre: str) -> str:
    return str(nombre).strip().casefold()


def _finito(x: float) -> bool:
    try:
        return math.isfinite(float(x))
    except (TypeError, ValueError):
        return False


def _validar_ambiente(a: Ambiente) -> None:
    if not str(a.nombre or "").strip():
        raise ErrorValidacionEntrada("Ambiente sin nombre.")
    if not _finito(a.area_m2) or float(a.area_m2) <= 0:
        raise ErrorValidacionEntrada(f"area_m2 debe ser > 0 en ambiente '{a.nombre}' (valor={a.area_m2!r}).")


def _validar_consumo(c: Consumo) -> None:
    if not str(c.nombre or "").strip():
        raise ErrorValidacionEntrada(f"Consumo sin nombre en ambiente '{c.ambiente}'.")
    if not _finito(c.potencia_w) or float(c.potencia_w) < 0:
        raise ErrorValidacionEntrada(f"watts debe ser >= 0 en consumo '{c.nombre}' (valor={c.potencia_w!r}).")
    if not _finito(c.factor_uso) or not (0.0 <= float(c.factor_uso) <= 1.0):
        raise ErrorValidacionEntrada(f"usage_factor debe estar en [0, 1] en consumo '{c.nombre}' (valor={c.factor_uso!r}).")


def validar_temperatura(t_c: float, origen: str = "temp_ambiente_c") -> float:
    """Temperatura ambiente finita dentro de [-40, 90] °C; fuera de rango es error de entrada."""
    if not _finito(t_c) or not (TEMP_AMBIENTE_MIN_C <= float(t_c) <= TEMP_AMBIENTE_MAX_C):
        raise ErrorValidacionEntrada(
            f"{origen} debe estar en [{TEMP_AMBIENTE_MIN_C:g}, {TEMP_AMBIENTE_MAX_C:g}] °C (valor={t_c!r})."
        )
    return float(t_c)


def validar_opciones(opciones: Optional[OpcionesCalculo]) -> None:
    """
    Tensión negativa o no numérica es error de entrada.
    Tensión 0 no se rechaza aquí: la etapa de caída de tensión la reporta como ERROR.
    """
    if opciones is None:
        return
    try:
        como_fecha(opciones.effective_date)
    except ValueError as e:
        raise ErrorValidacionEntrada(f"effective_date inválida: {opciones.effective_date!r}") from e
    if opciones.temp_ambiente_c is not None:
        validar_temperatura(opciones.temp_ambiente_c)
    v = opciones.voltage_v
    if v is not None and (not _finito(v) or float(v) < 0):
        raise ErrorValidacionEntrada(f"voltage_v inválido: {v!r}")
    for campo in ("longitud_ramal_m", "longitud_alimentador_m", "main_breaker_a"):
        x = getattr(opciones, campo)
        if x is not None and (not _finito(x) or float(x) <= 0):
            raise ErrorValidacionEntrada(f"{campo} debe ser > 0 (valor={x!r}).")
    fp = opciones.factor_potencia
    if fp is not None and (not _finito(fp) or not (0.0 < float(fp) <= 1.0)):
        raise ErrorValidacionEntrada(f"factor_potencia debe estar en (0, 1] (valor={fp!r}).")


def normalizar_entradas(
    ambientes: Iterable[Ambiente],
    consumos: Iterable[Consumo],
    opciones: Optional[OpcionesCalculo] = None,
) -> EntradasNormalizadas:
    ambientes = list(ambientes)
    if not ambientes:
        raise ErrorValidacionEntrada("Se requiere al menos un ambiente.")

    validar_opciones(opciones)

    areas: Dict[str, float] = {}
    nombres: Dict[str, str] = {}
    for a in ambientes:
        _validar_ambiente(a)
        k = clave_ambiente(a.nombre)
        if k in areas:
            raise DuplicateRoomError(str(a.nombre).strip(), nombres[k])
        areas[k] = float(a.area_m2)
        nombres[k] = str(a.nombre).strip()

    agrupados: Dict[str, List[Consumo]] = {k: [] for k in areas}
    for c in consumos:
        _validar_consumo(c)
        k = clave_ambiente(c.ambiente)
        if k not in agrupados:
            raise DanglingReferenceError(str(c.nombre).strip(), str(c.ambiente).strip())
        agrupados[k].append(c)

    return EntradasNormalizadas(
        areas=areas,
        nombres=nombres,
        consumos={k: tuple(v) for k, v in agrupados.items()},
    )


__all__ = [
    "EntradasNormalizadas",
    "clave_ambiente",
    "normalizar_entradas",
    "validar_opciones",
    "validar_temperatura",
]
