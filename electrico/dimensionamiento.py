"""
dimensionamiento.py — Motor de cálculo eléctrico

Dimensionamiento de circuitos ramales y alimentador.

Ramales:
  1) I = VA / V (monofásico)
  2) Conductor: menor calibre con ampacidad × utilización >= I
  3) Breaker: estándar entre I y la ampacidad del conductor (protecciones.py)

Alimentador:
  1) I desde la demanda estimada (1Φ o 3Φ)
  2) Conductor por ampacidad, luego subir calibre hasta caída <= límite total
  3) Breaker del alimentador = breaker principal sugerido
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import List, Sequence

from electrico.caida_tension import calcular_caida, resistencia_por_metro
from electrico.conductores import (
    EntradaConductor,
    ampacidad_ajustada_nec,
    ccc_por_fases,
    mejorar_por_caida,
    seleccionar_por_ampacidad,
)
from electrico.contrato import ERROR, PropuestaCircuito, ResultadoAlimentador, TotalesDemanda
from electrico.demanda import corriente_desde_va
from electrico.normas import claves
from electrico.protecciones import seleccionar_breaker
from nucleo.contexto import ContextoCalculo

logger = logging.getLogger(__name__)


def dimensionar_circuitos(
    propuestas: List[PropuestaCircuito],
    ctx: ContextoCalculo,
    *,
    tension_v: float,
    tabla: Sequence[EntradaConductor],
    t_amb_c: float = 30.0,
    aplicar_derating: bool = False,
) -> List[PropuestaCircuito]:
    if not propuestas:
        return []

    if float(tension_v) <= 0:
        ctx.advertir("Tensión del sistema no válida (<= 0 V); circuitos sin breaker ni calibre.")
        return [
            replace(p, marcado=True, notas=p.notas + ("Sin dimensionamiento: tensión no válida.",))
            for p in propuestas
        ]

    utilizacion = ctx.numero(claves.CIRCUIT_MAX_UTILIZATION)

    out: List[PropuestaCircuito] = []
    for p in propuestas:
        i = corriente_desde_va(p.va_asignada, tension_v, 1)
        sel = seleccionar_por_ampacidad(
            i,
            tabla,
            utilizacion=utilizacion,
            t_amb_c=t_amb_c,
            ccc=ccc_por_fases(1),
            aplicar_derating=aplicar_derating,
        )
        breaker, marcado = seleccionar_breaker(i, sel.ampacidad_a)

        notas = list(p.notas)
        if not sel.cumple:
            notas.append("Ningún calibre de la tabla alcanza la corriente con la utilización máxima.")
        if marcado:
            notas.append(f"Sin breaker estándar entre {i:.1f} A y {sel.ampacidad_a:.0f} A.")
            ctx.advertir(
                f"Circuito {p.id}: sin breaker estándar entre la carga ({i:.1f} A) "
                f"y la ampacidad del conductor ({sel.ampacidad_a:.0f} A)."
            )

        out.append(replace(
            p,
            breaker_a=breaker,
            calibre=sel.entrada.calibre,
            corriente_a=i,
            seccion_mm2=sel.entrada.seccion_mm2,
            ampacidad_a=sel.ampacidad_a,
            marcado=bool(marcado or not sel.cumple),
            notas=tuple(notas),
        ))
        logger.debug("Circuito %s: %.2f A -> %s / %s A", p.id, i, sel.entrada.calibre, breaker)
    return out


def dimensionar_alimentador(
    demanda: TotalesDemanda,
    ctx: ContextoCalculo,
    *,
    tension_v: float,
    fases: int,
    material: str,
    tabla: Sequence[EntradaConductor],
    longitud_m: float,
    limite_pct: float,
    metodo: str = "conduit",
    t_amb_c: float = 30.0,
    cos_phi: float = 0.85,
    aplicar_derating: bool = False,
) -> ResultadoAlimentador:
    def _caida(e: EntradaConductor):
        return calcular_caida(
            corriente_a=demanda.corriente_total_a,
            longitud_m=longitud_m,
            seccion_mm2=e.seccion_mm2,
            tension_v=tension_v,
            limite_pct=limite_pct,
            material=material,
            metodo=metodo,
            temp_c=t_amb_c,
            fases=fases,
            cos_phi=cos_phi,
        )

    if float(tension_v) <= 0:
        return ResultadoAlimentador(
            material=material,
            calibre=None,
            seccion_mm2=0.0,
            r_ohm_km=0.0,
            corriente_a=0.0,
            ampacidad_a=0.0,
            breaker_a=None,
            marcado=True,
            caida=_caida(tabla[0]),
            notas=("Sin dimensionamiento: tensión no válida.",),
        )

    i = demanda.corriente_total_a
    ccc = ccc_por_fases(fases)
    sel = seleccionar_por_ampacidad(
        i,
        tabla,
        utilizacion=ctx.numero(claves.CIRCUIT_MAX_UTILIZATION),
        t_amb_c=t_amb_c,
        ccc=ccc,
        aplicar_derating=aplicar_derating,
    )
    final = mejorar_por_caida(tabla, sel.entrada, lambda e: _caida(e).caida_pct, limite_pct)
    amp_final, _, _ = ampacidad_ajustada_nec(final.amp_a, t_amb_c, ccc, aplicar=aplicar_derating)
    breaker, marcado = seleccionar_breaker(i, amp_final)
    caida = _caida(final)

    notas: List[str] = []
    if final != sel.entrada:
        notas.append(f"Calibre aumentado de {sel.entrada.calibre} a {final.calibre} por caída de tensión.")
    if not sel.cumple:
        notas.append("Ningún calibre de la tabla alcanza la corriente del alimentador.")
    if marcado:
        ctx.advertir(
            f"Alimentador: sin breaker estándar entre la demanda ({i:.1f} A) "
            f"y la ampacidad del conductor ({amp_final:.0f} A)."
        )
    if caida.estado == ERROR:
        ctx.advertir(
            f"Alimentador: caída {caida.caida_pct:.2f} % excede el límite de {limite_pct:g} % "
            f"aun con el mayor calibre disponible ({final.calibre})."
        )

    logger.debug("Alimentador: %.2f A -> %s (%.2f %%), breaker %s", i, final.calibre, caida.caida_pct, breaker)
    return ResultadoAlimentador(
        material=material,
        calibre=final.calibre,
        seccion_mm2=final.seccion_mm2,
        r_ohm_km=final.r_ohm_km,
        r_operacion_ohm_km=1000.0 * resistencia_por_metro(material, final.seccion_mm2, t_amb_c),
        corriente_a=i,
        ampacidad_a=amp_final,
        breaker_a=breaker,
        marcado=bool(marcado or not sel.cumple),
        caida=caida,
        notas=tuple(notas),
    )


__all__ = ["dimensionar_circuitos", "dimensionar_alimentador"]
