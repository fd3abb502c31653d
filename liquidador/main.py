from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response

from liquidador.config import CORS_ORIGINS, DECIMALES_SALIDA
from liquidador.errores import LiquidacionError
from liquidador.logging_config import get_logger, setup_logging
from liquidador.models import EvolucionIn, EvolucionOut, LiquidacionIn, LiquidacionOut
from liquidador.services.evolucion import evolucion_mesada
from liquidador.services.exportar import exportar_xlsx
from liquidador.services.reajuste import ResultadoAnual, liquidar
from liquidador.services.repo import TablaIndices, cargar_tabla, meta
from liquidador.services.resumen import dividir_por_comparticion, resumir

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    tabla = cargar_tabla()
    logger.info("liquidador_iniciado", version_indices=tabla.version, rango=tabla.rango)
    yield


app = FastAPI(title="Liquidador de Reajustes Pensionales", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


def get_tabla() -> TablaIndices:
    return cargar_tabla()


def _liquidar(inp: LiquidacionIn, tabla: TablaIndices) -> list[ResultadoAnual]:
    try:
        return liquidar(
            [o.a_observacion() for o in inp.observaciones],
            tabla,
            inp.metodo,
            mesada_inicial=inp.mesada_inicial,
            reajustar_primer_anio=inp.reajustar_primer_anio,
        )
    except LiquidacionError as e:
        raise HTTPException(status_code=422, detail=str(e))


# -----------------------------
# Endpoints
# -----------------------------
@app.get("/health")
def health():
    return {"ok": True}


@app.get("/api/meta")
def api_meta(tabla: TablaIndices = Depends(get_tabla)):
    return meta(tabla)


@app.get("/api/indices")
def api_indices(tabla: TablaIndices = Depends(get_tabla)):
    return tabla.a_dict()


@app.post("/api/liquidar", response_model=LiquidacionOut)
def api_liquidar(inp: LiquidacionIn, tabla: TablaIndices = Depends(get_tabla)):
    decimales = DECIMALES_SALIDA if inp.decimales is None else inp.decimales
    resultados = _liquidar(inp, tabla)
    antes, despues = dividir_por_comparticion(resultados)
    return LiquidacionOut(
        metodo=inp.metodo,
        version_indices=tabla.version,
        resultados=[r.a_dict(decimales) for r in resultados],
        antes_comparticion=[r.anio for r in antes],
        despues_comparticion=[r.anio for r in despues],
        resumen=resumir(resultados).a_dict(decimales),
    )


@app.post("/api/liquidar/xlsx")
def api_liquidar_xlsx(inp: LiquidacionIn, tabla: TablaIndices = Depends(get_tabla)):
    decimales = DECIMALES_SALIDA if inp.decimales is None else inp.decimales
    resultados = _liquidar(inp, tabla)
    encabezado = {
        "Pensionado": inp.pensionado,
        "Documento": inp.documento,
        "Método": inp.metodo.value,
        "Tabla IPC/SMLMV": tabla.version,
    }
    data = exportar_xlsx(resultados, resumir(resultados), encabezado=encabezado, decimales=decimales)
    nombre = f"liquidacion_{inp.documento or inp.metodo.value}.xlsx"
    return Response(
        content=data,
        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        headers={"Content-Disposition": f'attachment; filename="{nombre}"'},
    )


@app.post("/api/evolucion", response_model=EvolucionOut)
def api_evolucion(inp: EvolucionIn, tabla: TablaIndices = Depends(get_tabla)):
    decimales = DECIMALES_SALIDA if inp.decimales is None else inp.decimales
    try:
        filas = evolucion_mesada(inp.mesada, inp.anio_inicial, tabla, inp.anio_final)
    except LiquidacionError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return EvolucionOut(version_indices=tabla.version, filas=[f.a_dict(decimales) for f in filas])
