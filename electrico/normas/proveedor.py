"""
proveedor.py — Motor de cálculo eléctrico

Acceso a parámetros normativos (VA/m², factores de demanda, topes por
circuito, límites de caída de tensión).

Responsabilidad:
- Definir el puerto que consume el motor (`ProveedorNormativo`).
- Implementación en memoria con alcance por conjunto de reglas y vigencia.
- Caché de lectura de proceso (carga en fallo, sin invalidación).

Notas:
- El motor no interpreta rule_set_id ni effective_date; solo los reenvía.
- La resolución por vigencia vive aquí, no en las etapas de cálculo.
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Dict, Iterable, List, Optional, Protocol, Tuple, Union

from .modelos import ParametroNormativo

logger = logging.getLogger(__name__)

Fecha = Union[str, date, None]


class ProveedorNormativo(Protocol):
    def get_number(
        self,
        key: str,
        fallback: float,
        rule_set_id: Optional[str] = None,
        effective_date: Fecha = None,
    ) -> Tuple[float, bool]: ...


def como_fecha(x: Fecha) -> Optional[date]:
    """Acepta date, datetime o texto ISO (YYYY-MM-DD[...])."""
    if x is None or x == "":
        return None
    if isinstance(x, datetime):
        return x.date()
    if isinstance(x, date):
        return x
    try:
        return date.fromisoformat(str(x).strip()[:10])
    except ValueError as e:
        raise ValueError(f"Fecha de vigencia inválida: {x!r}") from e


# ==========================================================
# Proveedor en memoria
# ==========================================================

class ProveedorTabla:
    """
    Proveedor sobre una lista de `ParametroNormativo`.

    Resolución de una clave:
      1) filas del conjunto pedido (o genéricas, rule_set_id=None),
      2) vigentes en la fecha pedida,
      3) gana la fila específica del conjunto; luego la de vigencia más reciente.
    """

    def __init__(self, parametros: Iterable[ParametroNormativo] = ()):
        self._por_clave: Dict[str, List[ParametroNormativo]] = {}
        for p in parametros:
            self._por_clave.setdefault(str(p.clave), []).append(p)

    def claves(self) -> List[str]:
        return sorted(self._por_clave.keys())

    def buscar(
        self,
        key: str,
        rule_set_id: Optional[str] = None,
        effective_date: Fecha = None,
    ) -> Optional[ParametroNormativo]:
        fecha = como_fecha(effective_date)
        cands = [
            p for p in self._por_clave.get(str(key), [])
            if (p.rule_set_id is None or p.rule_set_id == rule_set_id) and p.vigente_en(fecha)
        ]
        if not cands:
            return None
        return max(cands, key=lambda p: (p.rule_set_id is not None, p.vigente_desde or date.min))

    def get_number(
        self,
        key: str,
        fallback: float,
        rule_set_id: Optional[str] = None,
        effective_date: Fecha = None,
    ) -> Tuple[float, bool]:
        p = self.buscar(key, rule_set_id, effective_date)
        if p is None:
            return float(fallback), True
        return float(p.valor), False


# ==========================================================
# Caché de proceso
# ==========================================================

class ProveedorCacheado:
    """
    Caché de lectura sobre cualquier proveedor.

    Solo se cachean valores encontrados; un faltante se vuelve a consultar
    para que cada pedido registre su propio respaldo.
    """

    def __init__(self, origen: ProveedorNormativo):
        self._origen = origen
        self._cache: Dict[Tuple[str, Optional[str], Optional[str]], float] = {}

    def get_number(
        self,
        key: str,
        fallback: float,
        rule_set_id: Optional[str] = None,
        effective_date: Fecha = None,
    ) -> Tuple[float, bool]:
        fecha = como_fecha(effective_date)
        k = (str(key), rule_set_id, fecha.isoformat() if fecha else None)
        if k in self._cache:
            return self._cache[k], False

        valor, usado_respaldo = self._origen.get_number(key, fallback, rule_set_id, effective_date)
        if not usado_respaldo:
            self._cache[k] = float(valor)
            logger.debug("Parámetro normativo cargado: %s = %s (rule_set=%s, fecha=%s)", key, valor, rule_set_id, fecha)
        return float(valor), bool(usado_respaldo)

    def limpiar(self) -> None:
        self._cache.clear()


__all__ = [
    "ProveedorNormativo",
    "ProveedorTabla",
    "ProveedorCacheado",
    "como_fecha",
]
