# -*- coding: utf-8 -*-
"""Errores de la liquidación. Ninguno se recupera: se reportan al gestor del caso."""
from __future__ import annotations

from typing import Optional


class LiquidacionError(ValueError):
    """Base de los errores de cálculo."""


class EntradaDesordenadaError(LiquidacionError):
    """Observaciones fuera de orden ascendente o con años repetidos."""

    def __init__(self, anio_anterior: int, anio: int):
        self.anio_anterior = anio_anterior
        self.anio = anio
        if anio == anio_anterior:
            msg = f"Año {anio} repetido en la historia de pagos"
        else:
            msg = f"Historia de pagos desordenada: {anio} aparece después de {anio_anterior}"
        super().__init__(msg)


class IndiceFaltanteError(LiquidacionError):
    def __init__(self, anio: int, rango: Optional[tuple] = None):
        self.anio = anio
        msg = f"No hay IPC/SMLMV para el año {anio}"
        if rango:
            msg += f" (la tabla cubre {rango[0]}-{rango[1]})"
        super().__init__(msg)


class ConfiguracionMetodoError(LiquidacionError):
    """El método exige la mesada de seguridad social y la observación no la trae."""

    def __init__(self, anio: int, metodo: str):
        self.anio = anio
        self.metodo = metodo
        super().__init__(
            f"El método {metodo} requiere la mesada a cargo de seguridad social para el año {anio}"
        )


class TablaIndicesError(ValueError):
    """Tabla de IPC/SMLMV mal formada (huecos, duplicados o tope 5 SMLMV inconsistente)."""


class RangoAniosError(LiquidacionError):
    def __init__(self, anio_inicial: int, anio_final: int):
        self.anio_inicial = anio_inicial
        self.anio_final = anio_final
        super().__init__(f"Rango de años inválido: {anio_final} es anterior a {anio_inicial}")
