# tests/test_metodos.py
"""
Reglas de reajuste por método legal, evaluadas sobre una fila de índices aislada.
"""
from decimal import Decimal

import pytest

from liquidador.services.metodos import (
    METODOS,
    MetodoEscolastica,
    MetodoLegal,
    MetodoPrecedente4555,
    MetodoUnidadPrestacional,
    aplicar,
    resolver_metodo,
)
from liquidador.services.repo import FilaIndice


@pytest.fixture
def fila_1999():
    return FilaIndice.crear(1999, Decimal("16.70"), 236460)


def test_aplicar_no_redondea():
    assert aplicar(Decimal("100"), Decimal("16.70")) == Decimal("116.7")
    assert aplicar(Decimal("333.33"), Decimal("15")) == Decimal("383.3295")


def test_escolastica_ignora_seguridad_social(fila_1999):
    ajuste = MetodoEscolastica().ajustar(Decimal("1000000"), Decimal("900000"), fila_1999)
    assert ajuste.porcentaje == Decimal("15")
    assert ajuste.mesada_reajustada == Decimal("1150000")


def test_4555_suma_seguridad_social_en_la_prueba(fila_1999):
    metodo = MetodoPrecedente4555()
    bajo = metodo.ajustar(Decimal("700000"), Decimal("400000"), fila_1999)
    assert bajo.porcentaje == Decimal("15")
    assert bajo.mesada_reajustada == Decimal("805000")

    sobre = metodo.ajustar(Decimal("1000000"), Decimal("500000"), fila_1999)
    assert sobre.porcentaje == Decimal("16.70")
    assert sobre.mesada_reajustada == Decimal("1167000")


def test_unidad_prestacional_bajo_tope(fila_1999):
    # (600.000 + 400.000) * 1.15 = 1.150.000 <= 1.182.300
    ajuste = MetodoUnidadPrestacional().ajustar(Decimal("600000"), Decimal("400000"), fila_1999)
    assert ajuste.porcentaje == Decimal("15")
    assert ajuste.mesada_reajustada == Decimal("750000")


def test_unidad_prestacional_sobre_tope(fila_1999):
    ajuste = MetodoUnidadPrestacional().ajustar(Decimal("700000"), Decimal("400000"), fila_1999)
    assert ajuste.porcentaje == Decimal("16.70")
    assert ajuste.mesada_reajustada == Decimal("883700")


def test_requiere_seguridad_social():
    assert not METODOS[MetodoLegal.ESCOLASTICA].requiere_seguridad_social
    assert METODOS[MetodoLegal.PRECEDENTE_4555].requiere_seguridad_social
    assert METODOS[MetodoLegal.UNIDAD_PRESTACIONAL].requiere_seguridad_social


def test_resolver_metodo():
    assert isinstance(resolver_metodo("precedente_4555"), MetodoPrecedente4555)
    assert resolver_metodo(MetodoLegal.ESCOLASTICA) is METODOS[MetodoLegal.ESCOLASTICA]
    propio = MetodoUnidadPrestacional()
    assert resolver_metodo(propio) is propio


def test_resolver_metodo_desconocido():
    with pytest.raises(ValueError):
        resolver_metodo("ipc_puro")
