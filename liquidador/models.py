from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from liquidador.services.metodos import MetodoLegal
from liquidador.services.reajuste import ObservacionPago


# --- Entrada ---
class ObservacionIn(BaseModel):
    anio: int = Field(..., ge=1900, le=2100)
    mesada_empresa: Decimal = Field(..., ge=0, description="Mesada a cargo de la empresa, tal como se pagó")
    mesada_seguridad_social: Optional[Decimal] = Field(
        default=None, ge=0, description="Mesada a cargo de Colpensiones/ISS (compartición)"
    )
    numero_mesadas: int = Field(default=14, ge=0, le=14)
    mesadas_adicionales: Optional[int] = Field(default=None, ge=0, le=2)

    def a_observacion(self) -> ObservacionPago:
        return ObservacionPago(**self.model_dump())


class LiquidacionIn(BaseModel):
    metodo: MetodoLegal = MetodoLegal.ESCOLASTICA
    observaciones: List[ObservacionIn] = Field(..., min_length=1)
    mesada_inicial: Optional[Decimal] = Field(default=None, ge=0)
    reajustar_primer_anio: bool = False
    decimales: Optional[int] = Field(default=None, ge=0, le=4)

    # Sólo para el encabezado del reporte Excel
    pensionado: str = ""
    documento: str = ""


class EvolucionIn(BaseModel):
    mesada: Decimal = Field(..., gt=0)
    anio_inicial: int
    anio_final: Optional[int] = None
    decimales: Optional[int] = Field(default=None, ge=0, le=4)


# --- Salida ---
class LiquidacionOut(BaseModel):
    metodo: MetodoLegal
    version_indices: str
    resultados: List[Dict[str, Any]]
    antes_comparticion: List[int]
    despues_comparticion: List[int]
    resumen: Dict[str, Any]


class EvolucionOut(BaseModel):
    version_indices: str
    filas: List[Dict[str, Any]]
