"""
Dominio conductores — Motor de cálculo eléctrico

API pública del módulo:
- Tablas de conductores (Cu/Al) por calibre
- Factores de derating NEC
- Selección por ampacidad y mejora por caída de tensión

Regla arquitectónica:
Otros módulos NO deben importar archivos internos.
Siempre importar desde:
    electrico.conductores
"""

from .factores import ampacidad_ajustada_nec, ccc_por_fases
from .seleccion import SeleccionConductor, mejorar_por_caida, resolver_tabla, seleccionar_por_ampacidad
from .tablas import TABLA_AL, TABLA_CU, EntradaConductor, normalizar_material, tabla_conductores

__all__ = [
    "EntradaConductor",
    "TABLA_CU",
    "TABLA_AL",
    "normalizar_material",
    "tabla_conductores",
    "ampacidad_ajustada_nec",
    "ccc_por_fases",
    "SeleccionConductor",
    "resolver_tabla",
    "seleccionar_por_ampacidad",
    "mejorar_por_caida",
]
