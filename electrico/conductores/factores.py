"""
factores.py — Motor de cálculo eléctrico

Factores de corrección NEC (simplificados) para ampacidad de conductores.

Base normativa:
- NEC 310.15(B)(1) → Corrección por temperatura ambiente (columna 75°C).
- NEC 310.15(C)(1) → Ajuste por cantidad de conductores portadores (CCC).

El derating es opcional (OpcionesCalculo.aplicar_derating); apagado, la
ampacidad usada es la de tabla.
"""

from __future__ import annotations

from typing import Sequence, Tuple

NEC_REFERENCIAS = [
    "NEC 310.15(B)(1) - Ambient Temperature Correction",
    "NEC 310.15(C)(1) - Adjustment Factors for Current-Carrying Conductors",
]

# (t_max °C inclusive, factor); columna 75°C, base 30°C
_TRAMOS_TEMPERATURA_75C: Sequence[Tuple[float, float]] = (
    (30.0, 1.00),
    (35.0, 0.94),
    (40.0, 0.88),
    (45.0, 0.82),
    (50.0, 0.75),
    (55.0, 0.67),
    (60.0, 0.58),
    (70.0, 0.33),
)

# (ccc máximo inclusive, factor)
_TRAMOS_CCC: Sequence[Tuple[int, float]] = (
    (3, 1.00),
    (6, 0.80),
    (9, 0.70),
    (20, 0.50),
    (30, 0.45),
    (40, 0.40),
)


def factor_temperatura_nec(t_amb_c: float) -> float:
    """
    Factor por temperatura ambiente. Por encima de 70°C el conductor 75°C
    no tiene ampacidad utilizable (factor 0).
    """
    t = float(t_amb_c)
    for t_max, f in _TRAMOS_TEMPERATURA_75C:
        if t <= t_max:
            return f
    return 0.0


def factor_agrupamiento_ccc(ccc: int) -> float:
    n = max(1, int(ccc))
    for n_max, f in _TRAMOS_CCC:
        if n <= n_max:
            return f
    return 0.35


def ccc_por_fases(fases: int) -> int:
    """Conductores portadores típicos: 1Φ fase+neutro = 2; 3Φ = 3."""
    return 3 if int(fases) == 3 else 2


def ampacidad_ajustada_nec(
    ampacidad_base: float,
    t_amb_c: float,
    ccc: int,
    aplicar: bool = True,
) -> Tuple[float, float, float]:
    """
    Ampacidad_ajustada = Ampacidad_base × f_temp × f_ccc

    Returns:
        (ampacidad_ajustada, f_temp, f_ccc)
    """
    amp_base = float(ampacidad_base)
    if amp_base <= 0.0:
        return 0.0, 1.0, 1.0

    if not aplicar:
        return amp_base, 1.0, 1.0

    f_temp = factor_temperatura_nec(t_amb_c)
    f_ccc = factor_agrupamiento_ccc(ccc)
    return amp_base * f_temp * f_ccc, f_temp, f_ccc


__all__ = [
    "NEC_REFERENCIAS",
    "factor_temperatura_nec",
    "factor_agrupamiento_ccc",
    "ccc_por_fases",
    "ampacidad_ajustada_nec",
]
