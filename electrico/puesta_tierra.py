# electrico/puesta_tierra.py
"""
Dimensionador de puesta a tierra.

Regla: primer tramo con limite_a >= breaker principal (tabla ascendente),
sin interpolación. Un breaker por encima de la tabla no tiene regla.
"""

from __future__ import annotations

from typing import Optional, Sequence

from electrico.contrato import ERROR, ResultadoPuestaTierra
from electrico.normas import ReglaPuestaTierra, cargar_reglas_puesta_tierra_yaml
from nucleo.errores import SinReglaPuestaTierraError

REFERENCIAS = [
    "NEC 250.122 - Size of Equipment Grounding Conductors",
    "NEC 250.66 - Size of Grounding Electrode Conductor",
]

_REGLAS: Optional[Sequence[ReglaPuestaTierra]] = None


def reglas_por_defecto() -> Sequence[ReglaPuestaTierra]:
    """Tabla incluida en el paquete; se lee una sola vez por proceso."""
    global _REGLAS
    if _REGLAS is None:
        _REGLAS = tuple(cargar_reglas_puesta_tierra_yaml())
    return _REGLAS


def regla_para(main_breaker_a: float, reglas: Optional[Sequence[ReglaPuestaTierra]] = None) -> ReglaPuestaTierra:
    tabla = reglas if reglas is not None else reglas_por_defecto()
    if not tabla:
        raise SinReglaPuestaTierraError(float(main_breaker_a), 0.0)

    x = float(main_breaker_a)
    for r in tabla:
        if x <= r.limite_a:
            return r
    raise SinReglaPuestaTierraError(x, tabla[-1].limite_a)


def dimensionar_puesta_tierra(
    main_breaker_a: float,
    *,
    material: str = "Cu",
    reglas: Optional[Sequence[ReglaPuestaTierra]] = None,
) -> ResultadoPuestaTierra:
    """Lanza SinReglaPuestaTierraError si el breaker excede la tabla."""
    r = regla_para(main_breaker_a, reglas)
    return ResultadoPuestaTierra(
        main_breaker_a=float(main_breaker_a),
        limite_a=r.limite_a,
        egc_mm2=r.egc_mm2,
        gec_mm2=r.gec_mm2,
        material=material,
        nota=r.nota or f"Tramo hasta {r.limite_a:g} A",
    )


def puesta_tierra_en_error(main_breaker_a: Optional[float], nota: str, material: str = "Cu") -> ResultadoPuestaTierra:
    return ResultadoPuestaTierra(
        main_breaker_a=float(main_breaker_a or 0.0),
        limite_a=None,
        egc_mm2=None,
        gec_mm2=None,
        material=material,
        estado=ERROR,
        nota=nota,
    )


__all__ = [
    "REFERENCIAS",
    "reglas_por_defecto",
    "regla_para",
    "dimensionar_puesta_tierra",
    "puesta_tierra_en_error",
]
