# electrico/conductores/tablas.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Tuple


@dataclass(frozen=True)
class EntradaConductor:
    material: str            # "Cu" | "Al"
    calibre: str             # etiqueta comercial ("12 AWG", "250 kcmil")
    seccion_mm2: float
    amp_a: float             # ampacidad base, columna 75°C
    r_ohm_km: float


# ==========================================================
# Tablas (referenciales): FUENTE ÚNICA DE VERDAD
# ==========================================================
# Nota:
# - Ampacidad base tipo NEC 310.16 columna 75°C (sin derating).
# - El derating NO se aplica aquí (eso vive en factores.py).
# - Ordenadas delgado -> grueso; la selección depende de ese orden.
# - Si agregas/ajustas valores, hazlo SOLO en estas tuplas.
# ==========================================================

def _fila(material: str, calibre: str, seccion: float, amp: float, r: float) -> EntradaConductor:
    return EntradaConductor(material=material, calibre=calibre, seccion_mm2=seccion, amp_a=amp, r_ohm_km=r)


TABLA_CU: Tuple[EntradaConductor, ...] = (
    _fila("Cu", "14 AWG", 2.08, 20, 8.286),
    _fila("Cu", "12 AWG", 3.31, 25, 5.211),
    _fila("Cu", "10 AWG", 5.26, 35, 3.277),
    _fila("Cu", "8 AWG", 8.37, 50, 2.061),
    _fila("Cu", "6 AWG", 13.3, 65, 1.296),
    _fila("Cu", "4 AWG", 21.2, 85, 0.815),
    _fila("Cu", "3 AWG", 26.7, 100, 0.646),
    _fila("Cu", "2 AWG", 33.6, 115, 0.513),
    _fila("Cu", "1 AWG", 42.4, 130, 0.407),
    _fila("Cu", "1/0 AWG", 53.5, 150, 0.323),
    _fila("Cu", "2/0 AWG", 67.4, 175, 0.256),
    _fila("Cu", "3/0 AWG", 85.0, 200, 0.203),
    _fila("Cu", "4/0 AWG", 107.2, 230, 0.161),
    _fila("Cu", "250 kcmil", 126.7, 255, 0.137),
    _fila("Cu", "300 kcmil", 152.0, 285, 0.114),
    _fila("Cu", "350 kcmil", 177.3, 310, 0.0977),
    _fila("Cu", "400 kcmil", 202.7, 335, 0.0855),
    _fila("Cu", "500 kcmil", 253.4, 380, 0.0685),
)

TABLA_AL: Tuple[EntradaConductor, ...] = (
    _fila("Al", "12 AWG", 3.31, 20, 8.487),
    _fila("Al", "10 AWG", 5.26, 30, 5.350),
    _fila("Al", "8 AWG", 8.37, 40, 3.367),
    _fila("Al", "6 AWG", 13.3, 50, 2.118),
    _fila("Al", "4 AWG", 21.2, 65, 1.335),
    _fila("Al", "2 AWG", 33.6, 90, 0.840),
    _fila("Al", "1/0 AWG", 53.5, 120, 0.528),
    _fila("Al", "2/0 AWG", 67.4, 135, 0.418),
    _fila("Al", "3/0 AWG", 85.0, 155, 0.331),
    _fila("Al", "4/0 AWG", 107.2, 180, 0.263),
    _fila("Al", "250 kcmil", 126.7, 205, 0.223),
    _fila("Al", "300 kcmil", 152.0, 230, 0.186),
    _fila("Al", "350 kcmil", 177.3, 250, 0.159),
    _fila("Al", "400 kcmil", 202.7, 270, 0.139),
    _fila("Al", "500 kcmil", 253.4, 310, 0.111),
)

_TABLAS: Dict[str, Tuple[EntradaConductor, ...]] = {"Cu": TABLA_CU, "Al": TABLA_AL}

_ALIAS_MATERIAL: Dict[str, str] = {
    "CU": "Cu", "COBRE": "Cu", "COPPER": "Cu",
    "AL": "Al", "ALUMINIO": "Al", "ALUMINUM": "Al", "ALUMINIUM": "Al",
}


# ==========================================================
# Funciones públicas (consulta / referencia)
# ==========================================================

def normalizar_material(material: str) -> str:
    """'cobre'/'CU'/'copper' -> 'Cu'; 'aluminio'/'AL' -> 'Al'; otro -> tal cual (trim)."""
    m = str(material or "").strip()
    return _ALIAS_MATERIAL.get(m.upper(), m)


def tabla_conductores(material: str = "Cu") -> Tuple[EntradaConductor, ...]:
    """Tabla del material; vacía si el material no tiene entradas."""
    return _TABLAS.get(normalizar_material(material), ())


def entrada_por_calibre(calibre: str, material: str = "Cu") -> Optional[EntradaConductor]:
    c = str(calibre).strip()
    for e in tabla_conductores(material):
        if e.calibre == c:
            return e
    return None


def ampacidad(calibre: str, material: str = "Cu") -> float:
    """Ampacidad base (A) del calibre; 0.0 si no existe en la tabla."""
    e = entrada_por_calibre(calibre, material)
    return float(e.amp_a) if e else 0.0


__all__ = [
    "EntradaConductor",
    "TABLA_CU",
    "TABLA_AL",
    "normalizar_material",
    "tabla_conductores",
    "entrada_por_calibre",
    "ampacidad",
]
