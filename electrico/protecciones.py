"""
protecciones.py — Motor de cálculo eléctrico

Subdominio protecciones (breakers).

Responsabilidad:
- Seleccionar un breaker estándar que proteja al conductor sin disparar con la carga.

Regla:
- breaker >= corriente de carga   (no sub-proteger la carga)
- breaker <= ampacidad conductor  (no sobre-proteger el conductor)
- Si ningún tamaño cumple ambas, se toma el mayor <= ampacidad y se marca.

Notas:
- Este módulo NO calcula corrientes ni dimensiona conductores.
"""

from __future__ import annotations

from typing import Optional, Sequence, Tuple

# Tamaños estándar (NEC 240.6(A), recortado a 600 A)
TAMANOS_BREAKER_STD: Sequence[int] = (
    15, 20, 25, 30, 35, 40, 45, 50, 60, 70, 80, 90, 100, 110, 125,
    150, 175, 200, 225, 250, 300, 350, 400, 450, 500, 600,
)

REFERENCIAS = [
    "NEC 240.4 - Protection of Conductors",
    "NEC 240.6(A) - Standard Ampere Ratings",
]


def siguiente_breaker(i_a: float, *, tabla: Sequence[int] = TAMANOS_BREAKER_STD) -> Optional[int]:
    """Siguiente tamaño estándar >= i_a; None si excede la tabla."""
    x = float(i_a)
    for s in tabla:
        if x <= float(s):
            return int(s)
    return None


def seleccionar_breaker(
    corriente_a: float,
    ampacidad_a: float,
    *,
    tabla: Sequence[int] = TAMANOS_BREAKER_STD,
) -> Tuple[Optional[int], bool]:
    """
    Returns:
        (breaker_a, marcado)

    marcado=True cuando no existe tamaño entre la corriente y la ampacidad;
    breaker_a es entonces el mayor <= ampacidad (o None si ni el menor cabe).
    """
    i = float(corriente_a)
    amp = float(ampacidad_a)

    for s in tabla:
        if i <= float(s) <= amp:
            return int(s), False

    debajo = [int(s) for s in tabla if float(s) <= amp]
    return (max(debajo) if debajo else None), True


__all__ = [
    "TAMANOS_BREAKER_STD",
    "REFERENCIAS",
    "siguiente_breaker",
    "seleccionar_breaker",
]
