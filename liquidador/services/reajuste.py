from __future__ import annotations

from dataclasses import dataclass, fields
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, Iterable, List, Optional, Union

from liquidador.config import DECIMALES_SALIDA, PCT_DESCUENTO_SALUD
from liquidador.errores import (
    ConfiguracionMetodoError,
    EntradaDesordenadaError,
    IndiceFaltanteError,
    LiquidacionError,
)
from liquidador.logging_config import get_logger
from liquidador.services.metodos import CIEN, Metodo, MetodoLegal, resolver_metodo
from liquidador.services.repo import TablaIndices

logger = get_logger(__name__)

Numero = Union[int, float, str, Decimal]

MESADAS_ORDINARIAS_ANIO = 12


def dec(v: Numero) -> Decimal:
    return v if isinstance(v, Decimal) else Decimal(str(v))


def redondear(x: Decimal, decimales: int = DECIMALES_SALIDA) -> Decimal:
    """Redondeo half up para importes. Sólo se usa al presentar, nunca dentro del cálculo."""
    return x.quantize(Decimal(1).scaleb(-decimales), rounding=ROUND_HALF_UP)


def a_numero(x: Decimal, decimales: int) -> Union[int, float]:
    q = redondear(x, decimales)
    return int(q) if decimales <= 0 else float(q)


@dataclass(frozen=True)
class ObservacionPago:
    anio: int
    mesada_empresa: Decimal
    mesada_seguridad_social: Optional[Decimal] = None
    numero_mesadas: int = 14
    mesadas_adicionales: Optional[int] = None

    def __post_init__(self):
        object.__setattr__(self, "mesada_empresa", dec(self.mesada_empresa))
        if self.mesada_seguridad_social is not None:
            object.__setattr__(self, "mesada_seguridad_social", dec(self.mesada_seguridad_social))
        if self.numero_mesadas < 0:
            raise ValueError(f"Número de mesadas negativo en {self.anio}")

    @property
    def adicionales(self) -> int:
        """Mesadas adicionales (junio/diciembre); por defecto lo que excede las 12 ordinarias."""
        if self.mesadas_adicionales is not None:
            return min(self.mesadas_adicionales, self.numero_mesadas)
        return max(0, self.numero_mesadas - MESADAS_ORDINARIAS_ANIO)

    @property
    def ordinarias(self) -> int:
        return self.numero_mesadas - self.adicionales


@dataclass(frozen=True)
class ResultadoAnual:
    anio: int
    smlmv: Decimal
    tope_5_smlmv: Decimal
    base_mesada_empresa: Decimal
    porcentaje_ajuste: Decimal
    mesada_reajustada: Decimal
    mesada_pagada: Decimal
    diferencia: Decimal
    numero_mesadas: int
    valor_adeudado: Decimal
    # complementarios (tablas "Antijurídico")
    mesada_seguridad_social: Optional[Decimal]
    num_smlmv: Decimal
    mesadas_ordinarias: int
    diferencias_ordinarias: Decimal
    descuento_salud: Decimal

    def a_dict(self, decimales: int = DECIMALES_SALIDA) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        for f in fields(self):
            v = getattr(self, f.name)
            if v is None or isinstance(v, int):
                out[f.name] = v
            elif f.name in ("porcentaje_ajuste", "num_smlmv"):
                out[f.name] = float(redondear(v, 2))
            else:
                out[f.name] = a_numero(v, decimales)
        return out


# ---------------------------
# Validación
# ---------------------------

def validar_observaciones(observaciones: List[ObservacionPago], tabla: TablaIndices, metodo: Metodo) -> None:
    """Todo se valida antes de calcular: un error aborta la liquidación completa."""
    for prev, cur in zip(observaciones, observaciones[1:]):
        if cur.anio <= prev.anio:
            raise EntradaDesordenadaError(prev.anio, cur.anio)

    for o in observaciones:
        if o.anio not in tabla:
            raise IndiceFaltanteError(o.anio, tabla.rango)
        if metodo.requiere_seguridad_social and o.mesada_seguridad_social is None:
            raise ConfiguracionMetodoError(o.anio, metodo.id.value)


# ---------------------------
# Motor
# ---------------------------

def liquidar(
    observaciones: Iterable[ObservacionPago],
    tabla: TablaIndices,
    metodo: Union[str, MetodoLegal, Metodo],
    *,
    mesada_inicial: Optional[Numero] = None,
    reajustar_primer_anio: bool = False,
    pct_salud: Numero = PCT_DESCUENTO_SALUD,
) -> List[ResultadoAnual]:
    """Liquida año por año la mesada reajustada y las diferencias adeudadas.

    La base de cada año es la mesada reajustada del año anterior (no la pagada),
    así la diferencia se arrastra y compone hacia adelante.

    Primer año:
      - la semilla es `mesada_inicial` si se informa, si no la mesada pagada ese año;
      - con `reajustar_primer_anio=False` la mesada reajustada del primer año es la
        semilla y el % de ajuste es 0; con True se aplica el método como en
        cualquier otro año.
    """
    impl = resolver_metodo(metodo)
    obs = list(observaciones)
    try:
        validar_observaciones(obs, tabla, impl)
    except LiquidacionError as e:
        logger.warning("liquidacion_rechazada", metodo=impl.id.value, error=str(e))
        raise

    if not obs:
        return []

    factor_salud = dec(pct_salud) / CIEN
    base = dec(mesada_inicial) if mesada_inicial is not None else obs[0].mesada_empresa

    resultados: List[ResultadoAnual] = []
    for i, o in enumerate(obs):
        fila = tabla[o.anio]

        if i == 0 and not reajustar_primer_anio:
            pct, reajustada = Decimal(0), base
        else:
            ajuste = impl.ajustar(base, o.mesada_seguridad_social, fila)
            pct, reajustada = ajuste.porcentaje, ajuste.mesada_reajustada

        diferencia = reajustada - o.mesada_empresa
        dif_ordinarias = max(diferencia, Decimal(0)) * o.ordinarias

        resultados.append(ResultadoAnual(
            anio=o.anio,
            smlmv=fila.smlmv,
            tope_5_smlmv=fila.tope_5_smlmv,
            base_mesada_empresa=base,
            porcentaje_ajuste=pct,
            mesada_reajustada=reajustada,
            mesada_pagada=o.mesada_empresa,
            diferencia=diferencia,
            numero_mesadas=o.numero_mesadas,
            valor_adeudado=diferencia * o.numero_mesadas,
            mesada_seguridad_social=o.mesada_seguridad_social,
            num_smlmv=reajustada / fila.smlmv,
            mesadas_ordinarias=o.ordinarias,
            diferencias_ordinarias=dif_ordinarias,
            descuento_salud=dif_ordinarias * factor_salud,
        ))
        base = reajustada

    logger.debug(
        "liquidacion_completada",
        metodo=impl.id.value,
        anios=len(resultados),
        desde=obs[0].anio,
        hasta=obs[-1].anio,
    )
    return resultados
