from __future__ import annotations

from dataclasses import dataclass, fields
from decimal import Decimal
from typing import Any, Dict, List, Optional, Sequence, Tuple

from liquidador.config import DECIMALES_SALIDA
from liquidador.services.reajuste import ResultadoAnual, a_numero

CERO = Decimal(0)


@dataclass(frozen=True)
class ResumenLiquidacion:
    anios: int
    total_adeudado: Decimal
    total_diferencias_a_favor: Decimal
    total_diferencias_ordinarias: Decimal
    total_descuento_salud: Decimal
    neto_a_pagar: Decimal
    mesada_reajustada_final: Optional[Decimal] = None
    mesada_pagada_final: Optional[Decimal] = None
    diferencia_mensual_final: Optional[Decimal] = None

    def a_dict(self, decimales: int = DECIMALES_SALIDA) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        for f in fields(self):
            v = getattr(self, f.name)
            out[f.name] = a_numero(v, decimales) if isinstance(v, Decimal) else v
        return out


def resumir(resultados: Sequence[ResultadoAnual]) -> ResumenLiquidacion:
    """Totales de la liquidación. Las diferencias negativas restan en `total_adeudado`
    pero no en el neto, que sólo considera años a favor del pensionado."""
    total = sum((r.valor_adeudado for r in resultados), CERO)
    a_favor = sum((r.valor_adeudado for r in resultados if r.valor_adeudado > 0), CERO)
    ordinarias = sum((r.diferencias_ordinarias for r in resultados), CERO)
    salud = sum((r.descuento_salud for r in resultados), CERO)

    ultimo = resultados[-1] if resultados else None
    return ResumenLiquidacion(
        anios=len(resultados),
        total_adeudado=total,
        total_diferencias_a_favor=a_favor,
        total_diferencias_ordinarias=ordinarias,
        total_descuento_salud=salud,
        neto_a_pagar=a_favor - salud,
        mesada_reajustada_final=ultimo.mesada_reajustada if ultimo else None,
        mesada_pagada_final=ultimo.mesada_pagada if ultimo else None,
        diferencia_mensual_final=ultimo.diferencia if ultimo else None,
    )


def dividir_por_comparticion(
    resultados: Sequence[ResultadoAnual],
) -> Tuple[List[ResultadoAnual], List[ResultadoAnual]]:
    """Separa la tabla en (antes, después) del primer año con mesada de seguridad social > 0."""
    for i, r in enumerate(resultados):
        if r.mesada_seguridad_social is not None and r.mesada_seguridad_social > 0:
            return list(resultados[:i]), list(resultados[i:])
    return list(resultados), []
