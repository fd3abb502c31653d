# tests/test_evolucion.py
"""
Evolución de la mesada: proyección por SMLMV contra proyección por IPC.
"""
from decimal import Decimal

import pytest

from liquidador.errores import IndiceFaltanteError, RangoAniosError
from liquidador.services.evolucion import evolucion_mesada


def test_primer_anio_sin_reajuste(tabla):
    filas = evolucion_mesada(236460, 1999, tabla)
    f = filas[0]
    assert f.anio == 1999
    assert f.reajuste_smlmv == 0 and f.reajuste_ipc == 0
    assert f.proyeccion_smlmv == f.proyeccion_ipc == Decimal("236460")
    assert f.num_smlmv_smlmv == 1
    assert f.perdida_porcentual == 0


def test_hasta_el_ultimo_anio_por_defecto(tabla):
    filas = evolucion_mesada(236460, 1999, tabla)
    assert len(filas) == 17
    assert filas[-1].anio == 2015


def test_segundo_anio(tabla):
    filas = evolucion_mesada(236460, 1999, tabla, 2000)
    assert len(filas) == 2
    d = filas[1].a_dict(0)
    assert d["reajuste_smlmv"] == 10.0
    assert d["reajuste_ipc"] == 9.23
    assert d["num_smlmv_smlmv"] == 1.0
    assert d["proyeccion_smlmv"] == 260100
    assert d["proyeccion_ipc"] == 258285
    assert d["perdida_porcentual"] == 0.70


def test_ipc_pierde_frente_al_smlmv(tabla):
    filas = evolucion_mesada(1000000, 1999, tabla)
    assert filas[-1].proyeccion_ipc < filas[-1].proyeccion_smlmv
    assert filas[-1].perdida_smlmv > 0


@pytest.mark.parametrize("inicial, final", [(1990, None), (2000, 2020)])
def test_anio_fuera_de_tabla(tabla, inicial, final):
    with pytest.raises(IndiceFaltanteError):
        evolucion_mesada(500000, inicial, tabla, final)


def test_rango_invertido(tabla):
    with pytest.raises(RangoAniosError) as exc:
        evolucion_mesada(500000, 2005, tabla, 2000)
    assert exc.value.anio_inicial == 2005
    assert exc.value.anio_final == 2000
