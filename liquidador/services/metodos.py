from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Dict, Optional, Union

from liquidador.services.repo import FilaIndice

QUINCE = Decimal(15)
CIEN = Decimal(100)
FACTOR_QUINCE = Decimal("1.15")


class MetodoLegal(str, Enum):
    ESCOLASTICA = "escolastica"
    PRECEDENTE_4555 = "precedente_4555"
    UNIDAD_PRESTACIONAL = "unidad_prestacional"


def aplicar(valor: Decimal, pct: Decimal) -> Decimal:
    """valor * (1 + pct/100), sin redondear."""
    return valor * (1 + pct / CIEN)


@dataclass(frozen=True)
class Ajuste:
    porcentaje: Decimal
    mesada_reajustada: Decimal


class Metodo:
    """Regla de reajuste anual. La prueba del tope se repite cada año con la base vigente."""

    id: MetodoLegal
    nombre: str = ""
    requiere_seguridad_social: bool = False

    def ajustar(self, base: Decimal, seguridad_social: Optional[Decimal], fila: FilaIndice) -> Ajuste:
        raise NotImplementedError


class MetodoEscolastica(Metodo):
    """Precedente Escolástica CSJ 39783 (2013): la prueba usa sólo la mesada a cargo de la empresa.

    Si una compartición dejó la base por debajo de 5 SMLMV, el 15% vuelve a
    aplicarse ese año porque el tope se evalúa de nuevo con la base actual.
    """

    id = MetodoLegal.ESCOLASTICA
    nombre = "Precedente Escolástica CSJ 39783 (2013)"

    def ajustar(self, base, seguridad_social, fila):
        pct = QUINCE if base <= fila.tope_5_smlmv else fila.ipc
        return Ajuste(pct, aplicar(base, pct))


class MetodoPrecedente4555(Metodo):
    """Precedente 4555 SERP (2020): prueba sobre empresa + seguridad social,
    el porcentaje se aplica sólo a la parte de la empresa."""

    id = MetodoLegal.PRECEDENTE_4555
    nombre = "Precedente 4555 SERP (2020)"
    requiere_seguridad_social = True

    def ajustar(self, base, seguridad_social, fila):
        combinada = base + seguridad_social
        pct = QUINCE if combinada <= fila.tope_5_smlmv else fila.ipc
        return Ajuste(pct, aplicar(base, pct))


class MetodoUnidadPrestacional(Metodo):
    """Unidad prestacional: empresa + seguridad social se reajustan como una sola pensión
    y luego se descuenta lo que paga la administradora."""

    id = MetodoLegal.UNIDAD_PRESTACIONAL
    nombre = "Unidad Prestacional (IPC / 15%)"
    requiere_seguridad_social = True

    def ajustar(self, base, seguridad_social, fila):
        integrada = base + seguridad_social
        pct = QUINCE if integrada * FACTOR_QUINCE <= fila.tope_5_smlmv else fila.ipc
        return Ajuste(pct, aplicar(integrada, pct) - seguridad_social)


METODOS: Dict[MetodoLegal, Metodo] = {
    MetodoLegal.ESCOLASTICA: MetodoEscolastica(),
    MetodoLegal.PRECEDENTE_4555: MetodoPrecedente4555(),
    MetodoLegal.UNIDAD_PRESTACIONAL: MetodoUnidadPrestacional(),
}


def resolver_metodo(metodo: Union[str, MetodoLegal, Metodo]) -> Metodo:
    if isinstance(metodo, Metodo):
        return metodo
    return METODOS[MetodoLegal(metodo)]
