from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, List, Optional

from liquidador.config import DECIMALES_SALIDA
from liquidador.errores import IndiceFaltanteError, RangoAniosError
from liquidador.services.metodos import CIEN, aplicar
from liquidador.services.reajuste import Numero, a_numero, dec, redondear
from liquidador.services.repo import TablaIndices


@dataclass(frozen=True)
class EvolucionAnual:
    anio: int
    smlmv: Decimal
    reajuste_smlmv: Decimal
    proyeccion_smlmv: Decimal
    num_smlmv_smlmv: Decimal
    reajuste_ipc: Decimal
    proyeccion_ipc: Decimal
    num_smlmv_ipc: Decimal
    perdida_porcentual: Decimal
    perdida_smlmv: Decimal

    def a_dict(self, decimales: int = DECIMALES_SALIDA) -> Dict[str, Any]:
        return {
            "anio": self.anio,
            "smlmv": a_numero(self.smlmv, decimales),
            "reajuste_smlmv": float(redondear(self.reajuste_smlmv, 2)),
            "proyeccion_smlmv": a_numero(self.proyeccion_smlmv, decimales),
            "num_smlmv_smlmv": float(redondear(self.num_smlmv_smlmv, 2)),
            "reajuste_ipc": float(redondear(self.reajuste_ipc, 2)),
            "proyeccion_ipc": a_numero(self.proyeccion_ipc, decimales),
            "num_smlmv_ipc": float(redondear(self.num_smlmv_ipc, 2)),
            "perdida_porcentual": float(redondear(self.perdida_porcentual, 2)),
            "perdida_smlmv": float(redondear(self.perdida_smlmv, 2)),
        }


def evolucion_mesada(
    mesada: Numero,
    anio_inicial: int,
    tabla: TablaIndices,
    anio_final: Optional[int] = None,
) -> List[EvolucionAnual]:
    """Proyecta la mesada reajustada por SMLMV y por IPC y mide la pérdida del reajuste por IPC.

    El primer año ambas proyecciones valen la mesada informada.
    """
    anio_final = tabla.ultimo_anio if anio_final is None else anio_final
    if anio_final < anio_inicial:
        raise RangoAniosError(anio_inicial, anio_final)
    for anio in (anio_inicial, anio_final):
        if anio not in tabla:
            raise IndiceFaltanteError(anio, tabla.rango)

    filas: List[EvolucionAnual] = []
    proy_smlmv = proy_ipc = dec(mesada)
    for anio in range(anio_inicial, anio_final + 1):
        fila = tabla[anio]
        if anio == anio_inicial:
            reaj_smlmv = reaj_ipc = Decimal(0)
        else:
            reaj_smlmv = (fila.smlmv / tabla[anio - 1].smlmv - 1) * CIEN
            reaj_ipc = fila.ipc
            proy_smlmv = aplicar(proy_smlmv, reaj_smlmv)
            proy_ipc = aplicar(proy_ipc, reaj_ipc)

        n_smlmv = proy_smlmv / fila.smlmv
        n_ipc = proy_ipc / fila.smlmv
        perdida = (1 - proy_ipc / proy_smlmv) * CIEN if proy_smlmv > 0 else Decimal(0)
        filas.append(EvolucionAnual(
            anio=anio,
            smlmv=fila.smlmv,
            reajuste_smlmv=reaj_smlmv,
            proyeccion_smlmv=proy_smlmv,
            num_smlmv_smlmv=n_smlmv,
            reajuste_ipc=reaj_ipc,
            proyeccion_ipc=proy_ipc,
            num_smlmv_ipc=n_ipc,
            perdida_porcentual=perdida,
            perdida_smlmv=n_smlmv - n_ipc,
        ))
    return filas
