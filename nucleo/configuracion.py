# nucleo/configuracion.py
"""
Opciones de cálculo desde diccionarios / YAML.

Las claves externas (payload, archivos de proyecto) están en inglés;
`OpcionesCalculo` usa nombres internos. Este módulo es el único que
conoce esa traducción.
"""

from __future__ import annotations

import logging
from dataclasses import fields, replace
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from nucleo.errores import ErrorValidacionEntrada
from nucleo.modelo import OpcionesCalculo

logger = logging.getLogger(__name__)

# clave externa -> campo de OpcionesCalculo
MAPA_OPCIONES: Dict[str, str] = {
    "voltage_v": "voltage_v",
    "single_phase": "single_phase",
    "rule_set_id": "rule_set_id",
    "effective_date": "effective_date",
    "material": "material",
    "installation_method": "metodo_instalacion",
    "ambient_temp_c": "temp_ambiente_c",
    "power_factor": "factor_potencia",
    "branch_length_m": "longitud_ramal_m",
    "feeder_length_m": "longitud_alimentador_m",
    "main_breaker_a": "main_breaker_a",
    "grounding_required": "requiere_puesta_tierra",
    "tiered_demand": "demanda_escalonada",
    "apply_derating": "aplicar_derating",
}

_NUMERICOS = {
    "voltage_v",
    "temp_ambiente_c",
    "factor_potencia",
    "longitud_ramal_m",
    "longitud_alimentador_m",
    "main_breaker_a",
}
_BOOLEANOS = {"single_phase", "requiere_puesta_tierra", "demanda_escalonada", "aplicar_derating"}
_TEXTO = {"rule_set_id", "material", "metodo_instalacion"}

_VERDADEROS = {"1", "true", "yes", "si", "sí", "on"}
_FALSOS = {"0", "false", "no", "off"}


def _leer_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        raise FileNotFoundError(f"No existe config: {path}")
    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Config inválida (debe ser dict): {path}")
    return data


def _a_bool(clave: str, v: Any) -> bool:
    if isinstance(v, bool):
        return v
    if isinstance(v, (int, float)):
        return bool(v)
    s = str(v).strip().lower()
    if s in _VERDADEROS:
        return True
    if s in _FALSOS:
        return False
    raise ErrorValidacionEntrada(f"'{clave}' debe ser booleano (valor={v!r}).")


def _a_float(clave: str, v: Any) -> float:
    if isinstance(v, bool):
        raise ErrorValidacionEntrada(f"'{clave}' debe ser numérico (valor={v!r}).")
    try:
        return float(v)
    except (TypeError, ValueError) as e:
        raise ErrorValidacionEntrada(f"'{clave}' debe ser numérico (valor={v!r}).") from e


def _convertir(clave: str, campo: str, v: Any) -> Any:
    if v is None:
        return None
    if campo in _NUMERICOS:
        return _a_float(clave, v)
    if campo in _BOOLEANOS:
        return _a_bool(clave, v)
    if campo in _TEXTO:
        return str(v).strip()
    return v        # effective_date: str | date, lo resuelve el proveedor


def campos_desde_dict(d: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """
    Traduce un dict de opciones externas a campos de OpcionesCalculo.
    Acepta también los nombres internos. Claves desconocidas se ignoran (con log).
    """
    if not d:
        return {}
    if not isinstance(d, dict):
        raise ErrorValidacionEntrada("options debe ser un objeto clave -> valor.")

    internos = {f.name for f in fields(OpcionesCalculo)}
    out: Dict[str, Any] = {}
    for clave, v in d.items():
        campo = MAPA_OPCIONES.get(clave) or (clave if clave in internos else None)
        if campo is None:
            logger.warning("Opción desconocida ignorada: %r", clave)
            continue
        valor = _convertir(clave, campo, v)
        # None en booleanos/texto con default significa "usar default"
        if valor is None and campo in (_BOOLEANOS | {"material", "metodo_instalacion"}):
            continue
        out[campo] = valor
    return out


def opciones_desde_dict(d: Optional[Dict[str, Any]]) -> OpcionesCalculo:
    return OpcionesCalculo(**campos_desde_dict(d))


def construir_opciones_efectivas(base: OpcionesCalculo, overrides: Optional[Dict[str, Any]]) -> OpcionesCalculo:
    """Override superficial: solo reemplaza las claves presentes en `overrides`."""
    if not overrides:
        return base
    return replace(base, **campos_desde_dict(overrides))


def cargar_opciones_yaml(path: Union[str, Path]) -> OpcionesCalculo:
    """
    Lee opciones de proyecto desde YAML:

        options:
          voltage_v: 240
          material: Al
    """
    data = _leer_yaml(Path(path))
    return opciones_desde_dict(data.get("options") or {})


__all__ = [
    "MAPA_OPCIONES",
    "campos_desde_dict",
    "opciones_desde_dict",
    "construir_opciones_efectivas",
    "cargar_opciones_yaml",
]
