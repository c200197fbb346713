# nucleo/mapeo.py
from __future__ import annotations

from typing import Any, Dict, List, Tuple

from nucleo.configuracion import opciones_desde_dict
from nucleo.errores import ErrorValidacionEntrada
from nucleo.modelo import Ambiente, Consumo, OpcionesCalculo


# =========================
# Helpers
# =========================
def _lista(payload: Dict[str, Any], clave: str) -> List[Dict[str, Any]]:
    v = payload.get(clave)
    if v is None:
        return []
    if not isinstance(v, (list, tuple)):
        raise ErrorValidacionEntrada(f"'{clave}' debe ser una lista.")
    for i, x in enumerate(v):
        if not isinstance(x, dict):
            raise ErrorValidacionEntrada(f"{clave}[{i}] debe ser un objeto.")
    return list(v)


def _req(d: Dict[str, Any], k: str, ctx: str) -> Any:
    if k not in d or d[k] is None:
        raise ErrorValidacionEntrada(f"Falta '{k}' en {ctx}")
    return d[k]


def _num(d: Dict[str, Any], k: str, ctx: str) -> float:
    v = _req(d, k, ctx)
    if isinstance(v, bool):
        raise ErrorValidacionEntrada(f"'{k}' debe ser numérico en {ctx}. Valor={v!r}")
    try:
        return float(v)
    except (TypeError, ValueError) as e:
        raise ErrorValidacionEntrada(f"'{k}' debe ser numérico en {ctx}. Valor={v!r}") from e


# =========================
# API pública
# =========================
def ambientes_desde_payload(filas: List[Dict[str, Any]]) -> List[Ambiente]:
    return [
        Ambiente(
            nombre=str(_req(d, "room_name", f"rooms[{i}]")),
            area_m2=_num(d, "area_m2", f"rooms[{i}]"),
        )
        for i, d in enumerate(filas)
    ]


def consumos_desde_payload(filas: List[Dict[str, Any]]) -> List[Consumo]:
    out: List[Consumo] = []
    for i, d in enumerate(filas):
        ctx = f"items[{i}]"
        fu = d.get("usage_factor")
        out.append(Consumo(
            nombre=str(_req(d, "item_name", ctx)),
            ambiente=str(_req(d, "room_name", ctx)),
            potencia_w=_num(d, "watts", ctx),
            factor_uso=1.0 if fu is None else _num(d, "usage_factor", ctx),
        ))
    return out


def desde_payload(payload: Dict[str, Any]) -> Tuple[List[Ambiente], List[Consumo], OpcionesCalculo]:
    """
    Payload:
        {
          "rooms":   [{"room_name": ..., "area_m2": ...}],
          "items":   [{"item_name": ..., "room_name": ..., "watts": ..., "usage_factor"?: ...}],
          "options": {"voltage_v"?: ..., "single_phase"?: ..., ...}
        }
    """
    if not isinstance(payload, dict):
        raise ErrorValidacionEntrada("El payload debe ser un objeto.")

    ambientes = ambientes_desde_payload(_lista(payload, "rooms"))
    consumos = consumos_desde_payload(_lista(payload, "items"))
    opciones = opciones_desde_dict(payload.get("options"))
    return ambientes, consumos, opciones


__all__ = ["ambientes_desde_payload", "consumos_desde_payload", "desde_payload"]
