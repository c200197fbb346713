"""
seleccion.py — Motor de cálculo eléctrico

Selección de conductor.

Responsabilidad:
- Resolver la tabla del material pedido (cobre si no hay tabla, con warning).
- Elegir el menor calibre con ampacidad × utilización >= corriente.
- Subir calibre dentro de la tabla hasta cumplir una caída objetivo.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional, Sequence, Tuple

from nucleo.contexto import ContextoCalculo

from .factores import ampacidad_ajustada_nec
from .tablas import TABLA_CU, EntradaConductor, normalizar_material, tabla_conductores

logger = logging.getLogger(__name__)

Tabla = Sequence[EntradaConductor]


@dataclass(frozen=True)
class SeleccionConductor:
    entrada: EntradaConductor
    ampacidad_a: float               # ampacidad efectiva (con derating si aplica)
    cumple: bool                     # False: ni el mayor calibre alcanza
    f_temp: float = 1.0
    f_ccc: float = 1.0


def resolver_tabla(material: str, ctx: Optional[ContextoCalculo] = None) -> Tuple[str, Tabla]:
    """
    Returns:
        (material_efectivo, tabla)

    Material sin tabla -> cobre, con warning en el contexto.
    """
    m = normalizar_material(material)
    tab = tabla_conductores(m)
    if tab:
        return m, tab

    msg = f"Material de conductor '{material}' sin tabla de resistividad; se usa cobre (Cu)."
    if ctx is not None:
        ctx.advertir(msg)
    else:
        logger.warning(msg)
    return "Cu", TABLA_CU


def seleccionar_por_ampacidad(
    corriente_a: float,
    tabla: Tabla,
    *,
    utilizacion: float = 0.8,
    t_amb_c: float = 30.0,
    ccc: int = 2,
    aplicar_derating: bool = False,
) -> SeleccionConductor:
    """Primer conductor (delgado -> grueso) con ampacidad_ajustada × utilización >= corriente."""
    if not tabla:
        raise ValueError("Tabla de conductores vacía")

    i = float(corriente_a)
    u = float(utilizacion)
    ultimo: Optional[SeleccionConductor] = None

    for e in tabla:
        amp, f_t, f_c = ampacidad_ajustada_nec(e.amp_a, t_amb_c, ccc, aplicar=aplicar_derating)
        ultimo = SeleccionConductor(entrada=e, ampacidad_a=amp, cumple=True, f_temp=f_t, f_ccc=f_c)
        if i <= amp * u:
            return ultimo

    return SeleccionConductor(
        entrada=ultimo.entrada,
        ampacidad_a=ultimo.ampacidad_a,
        cumple=False,
        f_temp=ultimo.f_temp,
        f_ccc=ultimo.f_ccc,
    )


def mejorar_por_caida(
    tabla: Tabla,
    inicial: EntradaConductor,
    caida_pct: Callable[[EntradaConductor], float],
    objetivo_pct: float,
) -> EntradaConductor:
    """
    Sube calibre desde `inicial` hasta que caida_pct(entrada) <= objetivo.
    Devuelve el más grueso de la tabla si ninguno cumple.
    """
    try:
        i0 = list(tabla).index(inicial)
    except ValueError:
        i0 = 0

    for e in list(tabla)[i0:]:
        if caida_pct(e) <= float(objetivo_pct):
            return e
    return tabla[-1]


__all__ = [
    "SeleccionConductor",
    "resolver_tabla",
    "seleccionar_por_ampacidad",
    "mejorar_por_caida",
]
