# nucleo/orquestador.py
"""
Orquestador del cálculo eléctrico.

Pipeline (una pasada, sin estado compartido salvo la caché de parámetros):
    normalizar -> cargas por ambiente -> demanda -> propuestas de circuitos
    -> dimensionamiento (ramales + alimentador) -> caída de tensión
    -> puesta a tierra -> salida

Errores de entrada se lanzan (ErrorValidacionEntrada). Fallas de dominio
(sin breaker, puesta a tierra fuera de tabla, caída excedida) quedan
marcadas en la salida y en `warnings`.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Optional, Tuple

from electrico.caida_tension import analizar_ramales, resumir
from electrico.cargas import calcular_cargas_por_ambiente
from electrico.circuitos import balancear_fases, generar_propuestas, tablero_por_fase
from electrico.conductores import resolver_tabla
from electrico.contrato import (
    ERROR,
    CargaAmbiente,
    CargaFase,
    PropuestaCircuito,
    ResultadoAlimentador,
    ResultadoCaida,
    ResultadoPuestaTierra,
    ResumenCaida,
    TotalesDemanda,
    peor_estado,
)
from electrico.demanda import agregar_demanda
from electrico.dimensionamiento import dimensionar_alimentador, dimensionar_circuitos
from electrico.normas import ProveedorNormativo, claves, proveedor_por_defecto
from electrico.puesta_tierra import dimensionar_puesta_tierra, puesta_tierra_en_error
from nucleo.contexto import ContextoCalculo
from nucleo.errores import SinReglaPuestaTierraError
from nucleo.mapeo import desde_payload
from nucleo.modelo import Ambiente, Consumo, OpcionesCalculo
from nucleo.validacion import normalizar_entradas, validar_temperatura

logger = logging.getLogger(__name__)


# ==========================================================
# Helpers
# ==========================================================
def _opcion_o_parametro(valor: Optional[float], ctx: ContextoCalculo, clave: str) -> float:
    return float(valor) if valor is not None else ctx.numero(clave)


def _puesta_tierra(
    opciones: OpcionesCalculo,
    alimentador: ResultadoAlimentador,
    ctx: ContextoCalculo,
    material: str,
) -> Optional[ResultadoPuestaTierra]:
    if not opciones.requiere_puesta_tierra:
        return None

    main = opciones.main_breaker_a if opciones.main_breaker_a is not None else alimentador.breaker_a
    if main is None:
        nota = "Sin breaker principal determinado; no se dimensiona puesta a tierra."
        ctx.advertir(nota)
        return puesta_tierra_en_error(None, nota, material)

    try:
        return dimensionar_puesta_tierra(float(main), material=material)
    except SinReglaPuestaTierraError as e:
        ctx.advertir(str(e))
        return puesta_tierra_en_error(float(main), str(e), material)


def _advertir_caidas(ramales: List[Tuple[PropuestaCircuito, ResultadoCaida]], ctx: ContextoCalculo) -> None:
    for c, r in ramales:
        if r.estado == ERROR and r.caida_pct > r.limite_pct:
            ctx.advertir(
                f"Circuito {c.id}: caída {r.caida_pct:.2f} % excede el límite de ramal de {r.limite_pct:g} %."
            )


# ==========================================================
# Salida (shape estable)
# ==========================================================
def _carga_dict(c: CargaAmbiente) -> Dict[str, Any]:
    return {
        "room": c.ambiente,
        "area_m2": c.area_m2,
        "lighting_va": c.iluminacion_va,
        "outlet_va": c.tomas_va,
        "fixed_va": c.fijas_va,
        "total_va": c.total_va,
        "observations": list(c.observaciones),
    }


def _totales_dict(t: TotalesDemanda) -> Dict[str, Any]:
    return {
        "total_connected_va": t.total_conectado_va,
        "estimated_demand_va": t.demanda_estimada_va,
        "total_current_a": t.corriente_total_a,
        "diversity_factor": t.factor_diversidad,
        "demand_method": t.metodo,
    }


def _circuito_dict(c: PropuestaCircuito) -> Dict[str, Any]:
    return {
        "id": c.id,
        "type": c.tipo,
        "assigned_va": c.va_asignada,
        "rooms": list(c.ambientes),
        "utilization_pct": c.utilizacion_pct,
        "phase": c.fase,
        "suggested_breaker": c.breaker_a,
        "suggested_gauge": c.calibre,
        "current_a": c.corriente_a,
        "section_mm2": c.seccion_mm2,
        "conductor_ampacity_a": c.ampacidad_a,
        "flagged": c.marcado,
        "notes": list(c.notas),
    }


def _tablero_dict(fases: List[CargaFase]) -> Dict[str, Any]:
    return {
        f"phase_{f.fase.lower()}": {"total_va": f.total_va, "circuits": f.circuitos}
        for f in fases
    }


def _caida_dict(c: PropuestaCircuito, r: ResultadoCaida) -> Dict[str, Any]:
    return {
        "id": c.id,
        "current_a": r.corriente_a,
        "length_m": r.longitud_m,
        "section_mm2": r.seccion_mm2,
        "resistance_ohm": r.resistencia_ohm,
        "reactance_ohm": r.reactancia_ohm,
        "drop_v": r.caida_v,
        "drop_pct": r.caida_pct,
        "limit_pct": r.limite_pct,
        "critical_length_m": r.longitud_critica_m,
        "status": r.estado,
    }


def _alimentador_dict(a: ResultadoAlimentador) -> Dict[str, Any]:
    r = a.caida
    return {
        "material": a.material,
        "gauge": a.calibre,
        "section_mm2": a.seccion_mm2,
        "resistance_ohm_km": a.r_operacion_ohm_km,
        "table_resistance_ohm_km": a.r_ohm_km,
        "current_a": a.corriente_a,
        "conductor_ampacity_a": a.ampacidad_a,
        "breaker_a": a.breaker_a,
        "flagged": a.marcado,
        "length_m": r.longitud_m,
        "drop_v": r.caida_v,
        "drop_pct": r.caida_pct,
        "limit_pct": r.limite_pct,
        "critical_length_m": r.longitud_critica_m,
        "status": r.estado,
        "notes": list(a.notas),
    }


def _resumen_dict(s: ResumenCaida, estado_global: str) -> Dict[str, Any]:
    return {
        "branch_limit_pct": s.limite_ramal_pct,
        "total_limit_pct": s.limite_total_pct,
        "worst_case_pct": s.peor_caso_pct,
        "out_of_limit_count": s.fuera_de_limite,
        "overall_status": estado_global,
    }


def _puesta_tierra_dict(g: Optional[ResultadoPuestaTierra]) -> Optional[Dict[str, Any]]:
    if g is None:
        return None
    return {
        "main_breaker_a": g.main_breaker_a,
        "bracket_a": g.limite_a,
        "egc_mm2": g.egc_mm2,
        "gec_mm2": g.gec_mm2,
        "material": g.material,
        "status": g.estado,
        "note": g.nota,
    }


# ==========================================================
# ENTRYPOINT OFICIAL
# ==========================================================
def ejecutar_calculo(
    ambientes: Iterable[Ambiente],
    consumos: Iterable[Consumo],
    opciones: Optional[OpcionesCalculo] = None,
    proveedor: Optional[ProveedorNormativo] = None,
) -> Dict[str, Any]:
    """
    Cálculo completo de una instalación.

    Devuelve un dict con loads_by_room, totals, proposed_circuits,
    voltage_drop, panel, grounding y warnings. Misma entrada y mismas respuestas
    del proveedor producen la misma salida.
    """
    opciones = opciones or OpcionesCalculo()
    entradas = normalizar_entradas(ambientes, consumos, opciones)

    ctx = ContextoCalculo(
        proveedor=proveedor if proveedor is not None else proveedor_por_defecto(),
        rule_set_id=opciones.rule_set_id,
        effective_date=opciones.effective_date,
    )
    logger.info(
        "Cálculo eléctrico: %d ambiente(s), rule_set=%s, fecha=%s",
        len(entradas.areas), opciones.rule_set_id, opciones.effective_date,
    )

    tension = _opcion_o_parametro(opciones.voltage_v, ctx, claves.TENSION_NOMINAL_V)
    temp_c = validar_temperatura(
        _opcion_o_parametro(opciones.temp_ambiente_c, ctx, claves.TEMPERATURA_AMBIENTE_C),
        claves.TEMPERATURA_AMBIENTE_C,
    )
    cos_phi = _opcion_o_parametro(opciones.factor_potencia, ctx, claves.FACTOR_POTENCIA)
    l_ramal = _opcion_o_parametro(opciones.longitud_ramal_m, ctx, claves.LONGITUD_RAMAL_M)
    l_alim = _opcion_o_parametro(opciones.longitud_alimentador_m, ctx, claves.LONGITUD_ALIMENTADOR_M)
    material, tabla = resolver_tabla(opciones.material, ctx)

    # 1) Cargas y demanda
    cargas = calcular_cargas_por_ambiente(entradas, ctx)
    totales = agregar_demanda(
        cargas, ctx, tension_v=tension, fases=opciones.fases, escalonada=opciones.demanda_escalonada,
    )
    logger.debug("Demanda: %.1f VA conectados, %.1f VA estimados", totales.total_conectado_va, totales.demanda_estimada_va)

    # 2) Circuitos ramales, balanceados por fase
    circuitos = dimensionar_circuitos(
        balancear_fases(generar_propuestas(cargas, ctx), opciones.fases),
        ctx,
        tension_v=tension,
        tabla=tabla,
        t_amb_c=temp_c,
        aplicar_derating=opciones.aplicar_derating,
    )

    # 3) Caída de tensión
    lim_ramal = ctx.numero(claves.VD_BRANCH_LIMIT_PCT)
    lim_total = ctx.numero(claves.VD_TOTAL_LIMIT_PCT)

    ramales = analizar_ramales(
        circuitos,
        tension_v=tension,
        longitud_m=l_ramal,
        limite_pct=lim_ramal,
        material=material,
        metodo=opciones.metodo_instalacion,
        temp_c=temp_c,
        cos_phi=cos_phi,
    )
    _advertir_caidas(ramales, ctx)

    alimentador = dimensionar_alimentador(
        totales,
        ctx,
        tension_v=tension,
        fases=opciones.fases,
        material=material,
        tabla=tabla,
        longitud_m=l_alim,
        limite_pct=lim_total,
        metodo=opciones.metodo_instalacion,
        t_amb_c=temp_c,
        cos_phi=cos_phi,
        aplicar_derating=opciones.aplicar_derating,
    )
    resumen = resumir([r for _, r in ramales], alimentador, limite_ramal_pct=lim_ramal, limite_total_pct=lim_total)

    # 4) Puesta a tierra
    tierra = _puesta_tierra(opciones, alimentador, ctx, material)

    estados = [resumen.estado_global]
    if tierra is not None:
        estados.append(tierra.estado)
    if any(c.marcado for c in circuitos) or alimentador.marcado:
        estados.append(ERROR)
    estado_global = peor_estado(*estados)

    logger.info("Cálculo terminado: %d circuito(s), estado %s, %d warning(s)", len(circuitos), estado_global, len(ctx.warnings))

    return {
        "loads_by_room": [_carga_dict(c) for c in cargas],
        "totals": _totales_dict(totales),
        "proposed_circuits": [_circuito_dict(c) for c in circuitos],
        "voltage_drop": {
            "circuits": [_caida_dict(c, r) for c, r in ramales],
            "feeder": _alimentador_dict(alimentador),
            "summary": _resumen_dict(resumen, estado_global),
        },
        "panel": _tablero_dict(tablero_por_fase(circuitos)),
        "grounding": _puesta_tierra_dict(tierra),
        "warnings": list(ctx.warnings),
    }


def calcular_desde_payload(payload: Dict[str, Any], proveedor: Optional[ProveedorNormativo] = None) -> Dict[str, Any]:
    """Entrada tipo JSON: {"rooms": [...], "items": [...], "options": {...}}."""
    ambientes, consumos, opciones = desde_payload(payload)
    return ejecutar_calculo(ambientes, consumos, opciones, proveedor)


__all__ = ["ejecutar_calculo", "calcular_desde_payload"]
