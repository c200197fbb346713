"""
cargas.py — Motor de cálculo eléctrico

Calculador de cargas por ambiente.

Responsabilidad:
- Iluminación: área × VA/m² normativo.
- Tomas: suma de consumos declarados del ambiente, escalados por factor de uso.
- Cargas fijas: reservado (hoy siempre 0 VA).

Notas normativas:
- VA/m² de iluminación general: NEC 220.12 (clave lighting_va_per_m2).
"""

from __future__ import annotations

from typing import List

from electrico.contrato import CargaAmbiente
from electrico.normas import claves
from nucleo.contexto import ContextoCalculo
from nucleo.validacion import EntradasNormalizadas


def carga_tomas_va(consumos) -> float:
    """Σ W × factor_uso; un ambiente sin consumos aporta 0 VA."""
    return float(sum(float(c.potencia_w) * float(c.factor_uso) for c in consumos))


def calcular_cargas_por_ambiente(
    entradas: EntradasNormalizadas,
    ctx: ContextoCalculo,
) -> List[CargaAmbiente]:
    va_m2 = ctx.numero(claves.LIGHTING_VA_PER_M2)

    out: List[CargaAmbiente] = []
    for k in entradas.claves():
        area = float(entradas.areas[k])
        consumos = entradas.consumos.get(k, ())

        ilu = area * va_m2
        tomas = carga_tomas_va(consumos)

        obs: List[str] = [f"Iluminación base: {ilu:.1f} VA ({va_m2:g} VA/m²)"]
        if consumos:
            obs.append(f"Consumos definidos: {tomas:.1f} VA ({len(consumos)} consumo(s))")
        else:
            obs.append("Solo carga base de iluminación")

        out.append(CargaAmbiente(
            ambiente=entradas.nombre(k),
            area_m2=area,
            iluminacion_va=ilu,
            tomas_va=tomas,
            fijas_va=0.0,
            observaciones=tuple(obs),
        ))
    return out


__all__ = ["carga_tomas_va", "calcular_cargas_por_ambiente"]
