# nucleo/contexto.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from electrico.normas.claves import respaldo, unidad
from electrico.normas.proveedor import Fecha, ProveedorNormativo

logger = logging.getLogger(__name__)


@dataclass
class ContextoCalculo:
    """
    Contexto de UN pedido de cálculo.

    - Reenvía rule_set_id / effective_date al proveedor sin interpretarlos.
    - Acumula warnings (lista de solo-agregar, propia del pedido).
    - Memoriza cada parámetro leído: una clave se consulta una vez por pedido.
    """

    proveedor: ProveedorNormativo
    rule_set_id: Optional[str] = None
    effective_date: Fecha = None
    warnings: List[str] = field(default_factory=list)
    _memo: Dict[str, float] = field(default_factory=dict, repr=False)

    def advertir(self, mensaje: str) -> None:
        m = str(mensaje)
        if m not in self.warnings:
            self.warnings.append(m)
            logger.warning(m)

    def numero(self, clave: str, fallback: Optional[float] = None) -> float:
        if clave in self._memo:
            return self._memo[clave]

        fb = respaldo(clave) if fallback is None else float(fallback)
        valor, usado_respaldo = self.proveedor.get_number(clave, fb, self.rule_set_id, self.effective_date)
        if usado_respaldo:
            u = unidad(clave)
            self.advertir(
                f"Parámetro normativo '{clave}' no disponible; se usa valor de respaldo {fb:g}{(' ' + u) if u else ''}."
            )
        self._memo[clave] = float(valor)
        return float(valor)


__all__ = ["ContextoCalculo"]
