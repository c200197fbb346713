# nucleo/modelo.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional, Union

FechaVigencia = Union[str, date, None]


@dataclass(frozen=True)
class Ambiente:
    nombre: str
    area_m2: float                    # superficie útil (m²), > 0


@dataclass(frozen=True)
class Consumo:
    nombre: str
    ambiente: str                     # nombre del ambiente dueño
    potencia_w: float                 # potencia declarada (W), >= 0
    factor_uso: float = 1.0           # 0..1


@dataclass(frozen=True)
class OpcionesCalculo:
    """
    Opciones de un pedido de cálculo.

    Los campos en None se resuelven contra el proveedor normativo
    (con su valor de respaldo documentado si el parámetro no existe).
    """

    voltage_v: Optional[float] = None
    single_phase: bool = True

    # Alcance normativo: se pasa tal cual al proveedor
    rule_set_id: Optional[str] = None
    effective_date: FechaVigencia = None

    material: str = "Cu"
    metodo_instalacion: str = "conduit"      # conduit | raceway | direct
    temp_ambiente_c: Optional[float] = None
    factor_potencia: Optional[float] = None

    longitud_ramal_m: Optional[float] = None
    longitud_alimentador_m: Optional[float] = None

    main_breaker_a: Optional[float] = None
    requiere_puesta_tierra: bool = True

    demanda_escalonada: bool = False
    aplicar_derating: bool = False

    @property
    def fases(self) -> int:
        return 1 if self.single_phase else 3


__all__ = ["Ambiente", "Consumo", "OpcionesCalculo", "FechaVigencia"]
