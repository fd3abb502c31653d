from __future__ import annotations

import json
import re
import unicodedata
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple

from openpyxl import load_workbook

from liquidador.config import INDICES_PATH
from liquidador.errores import TablaIndicesError
from liquidador.logging_config import get_logger

logger = get_logger(__name__)

CINCO = Decimal(5)


def norm(x: Any) -> str:
    """Normaliza encabezados: sin tildes, minúsculas, espacios simples."""
    if x is None:
        return ""
    s = unicodedata.normalize("NFKD", str(x))
    s = "".join(ch for ch in s if not unicodedata.combining(ch))
    return " ".join(s.strip().lower().replace("_", " ").split())


def to_decimal(v: Any, miles: bool = True) -> Decimal:
    """Convierte montos/porcentajes a Decimal, tolerando formato colombiano ("1.182.300", "16,70").

    Con `miles=False` (porcentajes) un único punto es siempre separador decimal: "1.940" -> 1.940.
    """
    if v is None or v == "":
        raise TablaIndicesError("Valor vacío en la tabla de índices")
    if isinstance(v, bool):
        raise TablaIndicesError(f"Valor no numérico: {v!r}")
    if isinstance(v, Decimal):
        return v
    if isinstance(v, (int, float)):
        return Decimal(str(v))
    s = str(v).strip().replace("$", "").replace("%", "").replace(" ", "")
    if s.count(",") == 1 and s.count(".") >= 1:
        # 1.182.300,50 -> 1182300.50
        s = s.replace(".", "").replace(",", ".")
    elif miles and s.count(",") == 0 and (s.count(".") > 1 or re.fullmatch(r"\d{1,3}\.\d{3}", s)):
        # 1.182.300 -> 1182300
        s = s.replace(".", "")
    else:
        s = s.replace(",", ".")
    try:
        return Decimal(s)
    except InvalidOperation:
        raise TablaIndicesError(f"Valor no numérico: {v!r}") from None


def _json_num(d: Decimal):
    return int(d) if d == d.to_integral_value() else float(d)


@dataclass(frozen=True)
class FilaIndice:
    anio: int
    ipc: Decimal
    smlmv: Decimal
    tope_5_smlmv: Decimal

    @classmethod
    def crear(cls, anio: Any, ipc: Any, smlmv: Any, tope_5_smlmv: Any = None) -> "FilaIndice":
        smlmv_d = to_decimal(smlmv)
        tope = to_decimal(tope_5_smlmv) if tope_5_smlmv not in (None, "") else smlmv_d * CINCO
        return cls(anio=int(anio), ipc=to_decimal(ipc, miles=False), smlmv=smlmv_d, tope_5_smlmv=tope)

    def a_dict(self) -> Dict[str, Any]:
        return {
            "anio": self.anio,
            "ipc": _json_num(self.ipc),
            "smlmv": _json_num(self.smlmv),
            "tope_5_smlmv": _json_num(self.tope_5_smlmv),
        }


class TablaIndices:
    """Tabla IPC/SMLMV por año: contigua, un registro por año, inmutable.

    Se versiona y sólo crece hacia adelante (cada año se agrega por decreto).
    """

    def __init__(self, filas: List[FilaIndice], version: str = ""):
        if not filas:
            raise TablaIndicesError("La tabla de índices está vacía")
        ordenadas = sorted(filas, key=lambda f: f.anio)
        por_anio: Dict[int, FilaIndice] = {}
        for f in ordenadas:
            if f.anio in por_anio:
                raise TablaIndicesError(f"Año {f.anio} repetido en la tabla de índices")
            if f.tope_5_smlmv != f.smlmv * CINCO:
                raise TablaIndicesError(
                    f"Tope 5 SMLMV de {f.anio} ({f.tope_5_smlmv}) no coincide con 5 x {f.smlmv}"
                )
            if por_anio and f.anio != ordenadas[0].anio + len(por_anio):
                raise TablaIndicesError(f"Hueco en la tabla de índices antes del año {f.anio}")
            por_anio[f.anio] = f
        self._filas = por_anio
        self.version = version

    # --- acceso tipo mapping ---
    def __getitem__(self, anio: int) -> FilaIndice:
        return self._filas[anio]

    def __contains__(self, anio: object) -> bool:
        return anio in self._filas

    def __iter__(self) -> Iterator[FilaIndice]:
        return iter(self._filas.values())

    def __len__(self) -> int:
        return len(self._filas)

    def get(self, anio: int) -> Optional[FilaIndice]:
        return self._filas.get(anio)

    @property
    def primer_anio(self) -> int:
        return next(iter(self._filas))

    @property
    def ultimo_anio(self) -> int:
        return next(reversed(self._filas))

    @property
    def rango(self) -> Tuple[int, int]:
        return (self.primer_anio, self.ultimo_anio)

    def extender(self, fila: FilaIndice, version: str = "") -> "TablaIndices":
        """Devuelve una tabla nueva con el año siguiente agregado (append-only)."""
        if fila.anio != self.ultimo_anio + 1:
            raise TablaIndicesError(
                f"Sólo se puede agregar el año {self.ultimo_anio + 1}, no {fila.anio}"
            )
        return TablaIndices(list(self) + [fila], version=version or self.version)

    def a_dict(self) -> Dict[str, Any]:
        return {"version": self.version, "filas": [f.a_dict() for f in self]}


# ---------------------------
# Carga
# ---------------------------

def tabla_desde_dict(data: Dict[str, Any]) -> TablaIndices:
    filas = [
        FilaIndice.crear(r.get("anio"), r.get("ipc"), r.get("smlmv"), r.get("tope_5_smlmv"))
        for r in data.get("filas", [])
    ]
    return TablaIndices(filas, version=str(data.get("version") or ""))


@lru_cache(maxsize=4)
def cargar_tabla(path: Optional[str] = None) -> TablaIndices:
    p = Path(path or INDICES_PATH)
    if not p.exists():
        raise FileNotFoundError(f"Missing indices.json at {p}")
    data = json.loads(p.read_text(encoding="utf-8"), parse_float=Decimal)
    tabla = tabla_desde_dict(data)
    logger.info("tabla_indices_cargada", path=str(p), version=tabla.version, rango=tabla.rango)
    return tabla


_ALIAS = {
    "anio": ("ano", "anio", "year"),
    "ipc": ("ipc", "ipc %", "% ipc"),
    "smlmv": ("smlmv", "salario minimo", "smmlv"),
    "tope_5_smlmv": ("tope 5 smlmv", "5 smlmv", "tope"),
}


def _anio(v: Any) -> int:
    """Año de una fila del maestro; notas al pie ("Fuente: DANE") no son años."""
    if isinstance(v, bool):
        raise TablaIndicesError(f"Año no numérico: {v!r}")
    try:
        anio = int(str(v).strip()) if isinstance(v, str) else int(v)
    except (TypeError, ValueError):
        raise TablaIndicesError(f"Año no numérico: {v!r}") from None
    if not isinstance(v, str) and anio != v:
        raise TablaIndicesError(f"Año no numérico: {v!r}")
    return anio


def leer_filas_xlsx(path: str, hoja: Optional[str] = None) -> List[Dict[str, Any]]:
    """Lee las filas crudas del maestro Excel (Año | IPC | SMLMV | Tope 5 SMLMV)."""
    wb = load_workbook(path, data_only=True, read_only=True)
    try:
        ws = wb[hoja] if hoja else wb.worksheets[0]

        rows = ws.iter_rows(values_only=True)
        header = [norm(c) for c in next(rows, ())]
        idx: Dict[str, int] = {}
        for campo, alias in _ALIAS.items():
            for i, h in enumerate(header):
                if h in alias:
                    idx[campo] = i
                    break

        missing = [k for k in ("anio", "ipc", "smlmv") if k not in idx]
        if missing:
            raise TablaIndicesError(f"Faltan columnas en {path}: {', '.join(missing)}")

        out: List[Dict[str, Any]] = []
        for r in rows:
            anio = r[idx["anio"]] if idx["anio"] < len(r) else None
            if anio in (None, ""):
                continue
            out.append({
                "anio": _anio(anio),
                "ipc": r[idx["ipc"]],
                "smlmv": r[idx["smlmv"]],
                "tope_5_smlmv": r[idx["tope_5_smlmv"]] if "tope_5_smlmv" in idx else None,
            })
        return out
    finally:
        wb.close()


def cargar_tabla_xlsx(path: str, hoja: Optional[str] = None, version: str = "") -> TablaIndices:
    filas = [
        FilaIndice.crear(r["anio"], r["ipc"], r["smlmv"], r["tope_5_smlmv"])
        for r in leer_filas_xlsx(path, hoja)
    ]
    return TablaIndices(filas, version=version or Path(path).stem)


def meta(tabla: TablaIndices) -> Dict[str, Any]:
    """Metadatos para los selectores del front."""
    from liquidador.services.metodos import METODOS

    return {
        "version": tabla.version,
        "anios": [f.anio for f in tabla],
        "metodos": [{"id": m.value, "nombre": impl.nombre} for m, impl in METODOS.items()],
    }
