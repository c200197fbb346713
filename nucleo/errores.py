# nucleo/errores.py
from __future__ import annotations


class ErrorValidacionEntrada(ValueError):
    """Entrada inválida: el cálculo se aborta sin salida parcial."""


class DuplicateRoomError(ErrorValidacionEntrada):
    def __init__(self, nombre: str, previo: str):
        super().__init__(
            f"Ambiente duplicado: '{nombre}' coincide con '{previo}' (nombres sin distinguir mayúsculas)."
        )
        self.nombre = nombre
        self.previo = previo


class DanglingReferenceError(ErrorValidacionEntrada):
    def __init__(self, consumo: str, ambiente: str):
        super().__init__(f"Consumo '{consumo}' referencia un ambiente inexistente: '{ambiente}'.")
        self.consumo = consumo
        self.ambiente = ambiente


class SinReglaPuestaTierraError(LookupError):
    """El breaker principal excede el rango de la tabla de puesta a tierra."""

    def __init__(self, main_breaker_a: float, limite_a: float):
        super().__init__(
            f"Sin regla de puesta a tierra para breaker principal de {main_breaker_a:g} A "
            f"(tabla cubre hasta {limite_a:g} A)."
        )
        self.main_breaker_a = main_breaker_a
        self.limite_a = limite_a


__all__ = [
    "ErrorValidacionEntrada",
    "DuplicateRoomError",
    "DanglingReferenceError",
    "SinReglaPuestaTierraError",
]
