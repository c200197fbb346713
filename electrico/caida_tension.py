"""
caida_tension.py — Motor de cálculo eléctrico

Analizador de caída de tensión (modelo R + X).

    R  = ρ20 · L · (1 + α·(T − 20)) / S
    X  = x_m · L            (x_m según método de instalación, reducido en secciones grandes)
    ΔV = I · k · (R·cosφ + X·sinφ)      k = 2 (1Φ) | √3 (3Φ)
    %  = ΔV / V · 100

Estado:
    ERROR   si % > límite
    WARNING si % >= 0.8 · límite
    OK      en otro caso

Longitud crítica: L a la que % alcanza el límite (misma corriente y sección).

Notas normativas:
- Límites guía: NEC 210.19(A) IN No.4 (ramal 3 %) y 215.2(A) IN No.2 (total 5 %).
"""

from __future__ import annotations

import math
from typing import Dict, List, Tuple

from electrico.contrato import (
    ERROR,
    OK,
    WARNING,
    PropuestaCircuito,
    ResultadoAlimentador,
    ResultadoCaida,
    ResumenCaida,
    peor_estado,
)

# Ω·mm²/m a 20°C
RESISTIVIDAD_20C: Dict[str, float] = {"Cu": 0.0172, "Al": 0.0283}
# 1/°C
COEF_TEMPERATURA: Dict[str, float] = {"Cu": 0.00393, "Al": 0.00403}

# Ω/m
REACTANCIA_POR_METRO: Dict[str, float] = {
    "conduit": 0.00015,
    "raceway": 0.00012,
    "direct": 0.00008,
}
REACTANCIA_DEFECTO = 0.0001

_ALIAS_METODO: Dict[str, str] = {
    "conduit": "conduit", "tubo": "conduit", "tuberia": "conduit", "tubería": "conduit",
    "raceway": "raceway", "canalizacion": "raceway", "canalización": "raceway", "bandeja": "raceway",
    "direct": "direct", "directo": "direct", "enterrado": "direct",
}

UMBRAL_WARNING = 0.8
COS_PHI_DEFECTO = 0.85


def normalizar_metodo(metodo: str) -> str:
    """Alias en español/inglés -> conduit | raceway | direct; otro -> tal cual (minúsculas)."""
    m = str(metodo or "").strip().lower()
    return _ALIAS_METODO.get(m, m)


def factor_trayecto(fases: int) -> float:
    return math.sqrt(3.0) if int(fases) == 3 else 2.0


def resistencia_por_metro(material: str, seccion_mm2: float, temp_c: float = 20.0) -> float:
    """Ω/m del conductor a la temperatura dada. Material desconocido usa cobre."""
    rho = RESISTIVIDAD_20C.get(material, RESISTIVIDAD_20C["Cu"])
    alfa = COEF_TEMPERATURA.get(material, COEF_TEMPERATURA["Cu"])
    return rho * (1.0 + alfa * (float(temp_c) - 20.0)) / float(seccion_mm2)


def reactancia_por_metro(metodo: str, seccion_mm2: float) -> float:
    x = REACTANCIA_POR_METRO.get(normalizar_metodo(metodo), REACTANCIA_DEFECTO)
    s = float(seccion_mm2)
    if s > 50:
        return x * 0.8
    if s > 25:
        return x * 0.9
    return x


def estado_por_caida(pct: float, limite_pct: float) -> str:
    if pct > limite_pct:
        return ERROR
    if pct >= UMBRAL_WARNING * limite_pct:
        return WARNING
    return OK


def _error(corriente_a: float, longitud_m: float, seccion_mm2: float, limite_pct: float, nota: str) -> ResultadoCaida:
    return ResultadoCaida(
        corriente_a=float(corriente_a),
        longitud_m=float(longitud_m),
        seccion_mm2=float(seccion_mm2),
        resistencia_ohm=0.0,
        reactancia_ohm=0.0,
        caida_v=0.0,
        caida_pct=0.0,
        limite_pct=float(limite_pct),
        longitud_critica_m=0.0,
        estado=ERROR,
        nota=nota,
    )


def calcular_caida(
    *,
    corriente_a: float,
    longitud_m: float,
    seccion_mm2: float,
    tension_v: float,
    limite_pct: float,
    material: str = "Cu",
    metodo: str = "conduit",
    temp_c: float = 30.0,
    fases: int = 1,
    cos_phi: float = COS_PHI_DEFECTO,
) -> ResultadoCaida:
    """
    Caída de tensión de un tramo.

    Nunca lanza por datos de dominio: tensión <= 0, sección <= 0 o una
    temperatura que anula la resistencia devuelven un resultado ERROR con
    valores en cero y la razón en `nota`.
    """
    if float(tension_v) <= 0:
        return _error(corriente_a, longitud_m, seccion_mm2, limite_pct, "Tensión del sistema no válida (<= 0 V).")
    if float(seccion_mm2) <= 0:
        return _error(corriente_a, longitud_m, seccion_mm2, limite_pct, "Sin conductor asignado.")

    i = max(0.0, float(corriente_a))
    l_m = max(0.0, float(longitud_m))
    v = float(tension_v)
    k = factor_trayecto(fases)

    cos_p = min(1.0, max(0.0, float(cos_phi)))
    sin_p = math.sqrt(1.0 - cos_p * cos_p)

    r_m = resistencia_por_metro(material, seccion_mm2, temp_c)
    x_m = reactancia_por_metro(metodo, seccion_mm2)
    if not math.isfinite(r_m) or r_m <= 0:
        nota = f"Temperatura fuera del modelo de resistencia ({temp_c!r} °C)."
        return _error(corriente_a, longitud_m, seccion_mm2, limite_pct, nota)
    z_m = r_m * cos_p + x_m * sin_p         # Ω/m efectivos

    caida_v = i * k * z_m * l_m
    pct = 100.0 * caida_v / v

    if i > 0 and z_m > 0:
        l_crit = (v * float(limite_pct) / 100.0) / (i * k * z_m)
        nota = ""
    else:
        l_crit = 0.0
        nota = "Sin corriente de carga."

    return ResultadoCaida(
        corriente_a=i,
        longitud_m=l_m,
        seccion_mm2=float(seccion_mm2),
        resistencia_ohm=r_m * l_m,
        reactancia_ohm=x_m * l_m,
        caida_v=caida_v,
        caida_pct=pct,
        limite_pct=float(limite_pct),
        longitud_critica_m=l_crit,
        estado=estado_por_caida(pct, float(limite_pct)),
        nota=nota,
    )


def analizar_ramales(
    circuitos: List[PropuestaCircuito],
    *,
    tension_v: float,
    longitud_m: float,
    limite_pct: float,
    material: str = "Cu",
    metodo: str = "conduit",
    temp_c: float = 30.0,
    cos_phi: float = COS_PHI_DEFECTO,
) -> List[Tuple[PropuestaCircuito, ResultadoCaida]]:
    """Ramales: monofásicos a la tensión del sistema, contra el límite de ramal."""
    return [
        (
            c,
            calcular_caida(
                corriente_a=c.corriente_a,
                longitud_m=longitud_m,
                seccion_mm2=c.seccion_mm2,
                tension_v=tension_v,
                limite_pct=limite_pct,
                material=material,
                metodo=metodo,
                temp_c=temp_c,
                fases=1,
                cos_phi=cos_phi,
            ),
        )
        for c in circuitos
    ]


def resumir(
    ramales: List[ResultadoCaida],
    alimentador: ResultadoAlimentador,
    *,
    limite_ramal_pct: float,
    limite_total_pct: float,
) -> ResumenCaida:
    """
    peor caso = caída del alimentador + peor ramal; se evalúa contra el límite total.
    fuera_de_limite cuenta los ramales cuya caída calculada supera su límite;
    los ERROR sin caída calculada (tensión o sección no válidas) no se cuentan.
    """
    peor_ramal = max((r.caida_pct for r in ramales), default=0.0)
    peor = alimentador.caida.caida_pct + peor_ramal

    estados = [r.estado for r in ramales] + [alimentador.caida.estado, estado_por_caida(peor, limite_total_pct)]
    return ResumenCaida(
        limite_ramal_pct=float(limite_ramal_pct),
        limite_total_pct=float(limite_total_pct),
        peor_caso_pct=peor,
        fuera_de_limite=sum(1 for r in ramales if r.caida_pct > r.limite_pct),
        estado_global=peor_estado(*estados),
    )


__all__ = [
    "RESISTIVIDAD_20C",
    "COEF_TEMPERATURA",
    "REACTANCIA_POR_METRO",
    "REACTANCIA_DEFECTO",
    "normalizar_metodo",
    "factor_trayecto",
    "resistencia_por_metro",
    "reactancia_por_metro",
    "estado_por_caida",
    "calcular_caida",
    "analizar_ramales",
    "resumir",
]
