"""
Dominio normas — parámetros normativos del motor.

Regla arquitectónica:
Las etapas de cálculo solo leen parámetros a través de
`nucleo.contexto.ContextoCalculo`, nunca de este paquete directamente.
"""

from __future__ import annotations

from typing import Optional

from .cargador_yaml import cargar_parametros_yaml, cargar_reglas_puesta_tierra_yaml
from .modelos import ParametroNormativo, ReglaPuestaTierra
from .proveedor import ProveedorCacheado, ProveedorNormativo, ProveedorTabla

_PROVEEDOR_DEFECTO: Optional[ProveedorCacheado] = None


def proveedor_por_defecto() -> ProveedorCacheado:
    """Proveedor sobre el YAML incluido en el paquete; se carga una sola vez por proceso."""
    global _PROVEEDOR_DEFECTO
    if _PROVEEDOR_DEFECTO is None:
        _PROVEEDOR_DEFECTO = ProveedorCacheado(ProveedorTabla(cargar_parametros_yaml()))
    return _PROVEEDOR_DEFECTO


__all__ = [
    "ParametroNormativo",
    "ReglaPuestaTierra",
    "ProveedorNormativo",
    "ProveedorTabla",
    "ProveedorCacheado",
    "cargar_parametros_yaml",
    "cargar_reglas_puesta_tierra_yaml",
    "proveedor_por_defecto",
]
