"""
circuitos.py — Motor de cálculo eléctrico

Generador de propuestas de circuitos ramales.

Responsabilidad:
- Una clase de circuito por tipo de carga (iluminación, tomas, fijas si > 0).
- Respetar el tope de VA por circuito de cada tipo (parámetro normativo).
- Entregar propuestas con breaker/calibre pendientes (los fija `dimensionamiento`).

Reparto:
- Primero-que-cabe decreciente (FFD) por ambiente.
- Un ambiente cuya carga excede el tope se divide en porciones iguales <= tope.
- Determinista: empates se resuelven por el orden de entrada de los ambientes.

Balanceo:
- Cada circuito, de mayor a menor VA, va a la fase menos cargada.
- `tablero_por_fase` resume VA y cantidad de circuitos por fase.
"""

from __future__ import annotations

import logging
import math
from dataclasses import replace
from typing import Dict, List, Sequence, Tuple

from electrico.contrato import FASES_TABLERO, FIXED, LIGHTING, OUTLET, CargaAmbiente, CargaFase, PropuestaCircuito
from electrico.normas import claves
from nucleo.contexto import ContextoCalculo

logger = logging.getLogger(__name__)

_EPS_VA = 1e-9

# tipo -> (clave del tope, atributo de CargaAmbiente)
_TIPOS: Sequence[Tuple[str, str, str]] = (
    (LIGHTING, claves.ILU_VA_MAX_POR_CIRCUITO, "iluminacion_va"),
    (OUTLET, claves.TOMA_VA_MAX_POR_CIRCUITO, "tomas_va"),
    (FIXED, claves.FIJA_VA_MAX_POR_CIRCUITO, "fijas_va"),
)

Porcion = Tuple[int, str, float]   # (orden del ambiente, nombre, VA)


def _porciones(items: List[Tuple[str, float]], tope: float) -> List[Porcion]:
    out: List[Porcion] = []
    for orden, (nombre, va) in enumerate(items):
        if va <= 0:
            continue
        if tope > 0 and va > tope + _EPS_VA:
            n = int(math.ceil(va / tope))
            out.extend((orden, nombre, va / n) for _ in range(n))
        else:
            out.append((orden, nombre, va))
    return out


def empaquetar(items: List[Tuple[str, float]], tope: float) -> List[List[Porcion]]:
    """
    Agrupa (ambiente, VA) en circuitos cuya suma no excede `tope`.
    tope <= 0 significa sin tope (un solo circuito).
    """
    porciones = _porciones(items, tope)
    if not porciones:
        return []
    if tope <= 0:
        return [porciones]

    # mayor primero; sorted es estable y conserva el orden de entrada en empates
    ordenadas = sorted(porciones, key=lambda p: -p[2])

    grupos: List[List[Porcion]] = []
    sumas: List[float] = []
    for p in ordenadas:
        for i, s in enumerate(sumas):
            if s + p[2] <= tope + _EPS_VA:
                grupos[i].append(p)
                sumas[i] = s + p[2]
                break
        else:
            grupos.append([p])
            sumas.append(p[2])
    return grupos


def _ambientes_del_grupo(grupo: List[Porcion]) -> Tuple[str, ...]:
    vistos: Dict[str, int] = {}
    for orden, nombre, _ in grupo:
        vistos.setdefault(nombre, orden)
    return tuple(sorted(vistos, key=lambda n: vistos[n]))


def generar_propuestas(cargas: List[CargaAmbiente], ctx: ContextoCalculo) -> List[PropuestaCircuito]:
    propuestas: List[PropuestaCircuito] = []
    contador = 1

    for tipo, clave_tope, attr in _TIPOS:
        items = [(c.ambiente, float(getattr(c, attr))) for c in cargas]
        if sum(va for _, va in items) <= 0:
            continue

        tope = ctx.numero(clave_tope)
        if tope <= 0:
            ctx.advertir(f"Tope de VA por circuito inválido para '{tipo}' ({tope:g}); se genera un único circuito.")

        for grupo in empaquetar(items, tope):
            va = sum(p[2] for p in grupo)
            propuestas.append(PropuestaCircuito(
                id=f"C{contador:03d}",
                tipo=tipo,
                va_asignada=va,
                ambientes=_ambientes_del_grupo(grupo),
                utilizacion_pct=100.0 * va / tope if tope > 0 else None,
            ))
            contador += 1

    return propuestas


# ==========================================================
# Balanceo de fases y tablero
# ==========================================================
def fases_disponibles(fases: int) -> Tuple[str, ...]:
    """3Φ reparte en A/B/C; 1Φ (tablero 120/240) en las dos líneas A/B."""
    return FASES_TABLERO if int(fases) == 3 else FASES_TABLERO[:2]


def balancear_fases(propuestas: List[PropuestaCircuito], fases: int = 1) -> List[PropuestaCircuito]:
    """
    Asigna cada circuito, de mayor a menor VA, a la fase con menos carga
    acumulada. Empates: orden de entrada del circuito y primera fase (A antes que B).
    Devuelve las propuestas en su orden original con `fase` asignada.
    """
    disponibles = fases_disponibles(fases)
    acumulado: Dict[str, float] = {f: 0.0 for f in disponibles}
    asignada: Dict[str, str] = {}

    for p in sorted(propuestas, key=lambda p: -p.va_asignada):
        fase = min(disponibles, key=lambda f: acumulado[f])
        asignada[p.id] = fase
        acumulado[fase] += p.va_asignada

    logger.debug("Balanceo de fases: %s", {f: round(v, 1) for f, v in acumulado.items()})
    return [replace(p, fase=asignada[p.id]) for p in propuestas]


def tablero_por_fase(propuestas: List[PropuestaCircuito]) -> List[CargaFase]:
    """Totales por fase (A, B, C siempre presentes; una fase sin circuitos queda en cero)."""
    out: List[CargaFase] = []
    for f in FASES_TABLERO:
        propias = [p for p in propuestas if p.fase == f]
        out.append(CargaFase(fase=f, total_va=sum(p.va_asignada for p in propias), circuitos=len(propias)))
    return out


__all__ = ["empaquetar", "generar_propuestas", "fases_disponibles", "balancear_fases", "tablero_por_fase"]
