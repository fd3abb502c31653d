"""
Configuración global de pytest.
"""
import os

os.environ.setdefault("ENV", "test")

from decimal import Decimal

import pytest

from liquidador.services.repo import FilaIndice, TablaIndices, cargar_tabla


def armar_tabla(filas, version="test"):
    """filas: [(anio, ipc, smlmv), ...]"""
    return TablaIndices([FilaIndice.crear(a, ipc, s) for a, ipc, s in filas], version=version)


@pytest.fixture
def tabla():
    """Tabla oficial 1999-2015 incluida en data/indices.json."""
    return cargar_tabla()


@pytest.fixture
def tabla_salto_smlmv():
    """Tabla ficticia donde el tope de 5 SMLMV salta de un año a otro."""
    return armar_tabla([
        (2000, Decimal("10"), 300000),
        (2001, Decimal("10"), 400000),
        (2002, Decimal("10"), 410000),
    ])


@pytest.fixture
def armar():
    return armar_tabla
