from __future__ import annotations

from io import BytesIO
from typing import Any, Dict, List, Optional, Sequence, Tuple

from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter

from liquidador.config import DECIMALES_SALIDA
from liquidador.services.reajuste import ResultadoAnual
from liquidador.services.resumen import ResumenLiquidacion, dividir_por_comparticion

# (clave en a_dict, encabezado)
COLUMNAS: List[Tuple[str, str]] = [
    ("anio", "Año"),
    ("smlmv", "SMLMV"),
    ("tope_5_smlmv", "Tope 5 SMLMV"),
    ("base_mesada_empresa", "Base Mesada Empresa"),
    ("porcentaje_ajuste", "% de Ajuste"),
    ("mesada_reajustada", "Mesada Reajustada"),
    ("num_smlmv", "# SMLMV"),
    ("mesada_seguridad_social", "Pensión Seguridad Social"),
    ("mesada_pagada", "Pagado por Empresa"),
    ("diferencia", "Diferencia Mensual"),
    ("numero_mesadas", "Mesadas"),
    ("valor_adeudado", "Diferencias Anuales"),
    ("mesadas_ordinarias", "Mesadas Ordinarias"),
    ("diferencias_ordinarias", "Diferencias Ordinarias"),
    ("descuento_salud", "Descuento Salud"),
]

_HEADER_FONT = Font(bold=True, color="FFFFFF")
_HEADER_FILL = PatternFill("solid", fgColor="1F4E78")
_TITLE_FONT = Font(bold=True, size=12)


def _fmt_moneda(decimales: int) -> str:
    return "#,##0" if decimales <= 0 else "#,##0." + "0" * decimales


def _escribir_tabla(ws, fila_ini: int, titulo: str, resultados: Sequence[ResultadoAnual], decimales: int) -> int:
    ws.cell(fila_ini, 1, titulo).font = _TITLE_FONT
    fila = fila_ini + 1
    for c, (_, h) in enumerate(COLUMNAS, start=1):
        cell = ws.cell(fila, c, h)
        cell.font = _HEADER_FONT
        cell.fill = _HEADER_FILL
        cell.alignment = Alignment(horizontal="center", wrap_text=True)

    fmt = _fmt_moneda(decimales)
    for r in resultados:
        fila += 1
        d = r.a_dict(decimales)
        for c, (k, _) in enumerate(COLUMNAS, start=1):
            cell = ws.cell(fila, c, d[k])
            if k in ("porcentaje_ajuste", "num_smlmv"):
                cell.number_format = "0.00"
            elif k not in ("anio", "numero_mesadas", "mesadas_ordinarias"):
                cell.number_format = fmt
    return fila + 2


def exportar_xlsx(
    resultados: Sequence[ResultadoAnual],
    resumen: ResumenLiquidacion,
    titulo: str = "Liquidación de Reajustes",
    encabezado: Optional[Dict[str, Any]] = None,
    decimales: int = DECIMALES_SALIDA,
) -> bytes:
    """Arma el libro Excel de la liquidación (hoja de tablas + hoja resumen) y lo devuelve en bytes."""
    wb = Workbook()
    ws = wb.active
    ws.title = "Liquidación"

    ws.cell(1, 1, titulo).font = Font(bold=True, size=14)
    fila = 2
    for k, v in (encabezado or {}).items():
        ws.cell(fila, 1, str(k)).font = Font(bold=True)
        ws.cell(fila, 2, v)
        fila += 1
    fila += 1

    antes, despues = dividir_por_comparticion(resultados)
    if despues:
        if antes:
            fila = _escribir_tabla(ws, fila, "Liquidación de Reajustes (Antes de Compartir)", antes, decimales)
        _escribir_tabla(ws, fila, "Liquidación de Reajustes (Después de Compartir)", despues, decimales)
    else:
        _escribir_tabla(ws, fila, "Liquidación de Reajustes", resultados, decimales)

    for c in range(1, len(COLUMNAS) + 1):
        ws.column_dimensions[get_column_letter(c)].width = 16

    ws_res = wb.create_sheet("Resumen")
    ws_res.append(["Concepto", "Valor"])
    for cell in ws_res[1]:
        cell.font = _HEADER_FONT
        cell.fill = _HEADER_FILL
    for k, v in resumen.a_dict(decimales).items():
        ws_res.append([k.replace("_", " ").capitalize(), v])
    ws_res.column_dimensions["A"].width = 32
    ws_res.column_dimensions["B"].width = 18

    out = BytesIO()
    wb.save(out)
    return out.getvalue()
