# electrico/normas/modelos.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class ParametroNormativo:
    clave: str
    valor: float
    unidad: str = ""
    fuente: str = ""                       # nota de origen (artículo, tabla)
    rule_set_id: Optional[str] = None      # None = aplica a cualquier conjunto
    vigente_desde: Optional[date] = None   # inclusive
    vigente_hasta: Optional[date] = None   # exclusiva

    def vigente_en(self, fecha: Optional[date]) -> bool:
        if fecha is None:
            return True
        if self.vigente_desde is not None and fecha < self.vigente_desde:
            return False
        if self.vigente_hasta is not None and fecha >= self.vigente_hasta:
            return False
        return True


@dataclass(frozen=True)
class ReglaPuestaTierra:
    """Tramo de la tabla de puesta a tierra: aplica a breakers <= limite_a."""

    limite_a: float
    egc_mm2: float                         # conductor de puesta a tierra de equipos
    gec_mm2: float                         # conductor del electrodo de puesta a tierra
    nota: str = ""


__all__ = ["ParametroNormativo", "ReglaPuestaTierra"]
