"""Convierte el maestro Excel de IPC/SMLMV en data/indices.json.

Uso:
    python build_indices_json.py maestro_indices.xlsx --version 2016.1
"""
import argparse
import json
from pathlib import Path

from liquidador.services.repo import TablaIndices, cargar_tabla_xlsx

OUT = Path(__file__).resolve().parent / "data" / "indices.json"


def main():
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("xlsx", type=Path)
    parser.add_argument("--hoja", default=None)
    parser.add_argument("--version", default="")
    parser.add_argument("--out", type=Path, default=OUT)
    args = parser.parse_args()

    if not args.xlsx.exists():
        raise SystemExit(f"No existe {args.xlsx}")

    tabla: TablaIndices = cargar_tabla_xlsx(str(args.xlsx), hoja=args.hoja, version=args.version)

    args.out.parent.mkdir(parents=True, exist_ok=True)
    args.out.write_text(json.dumps(tabla.a_dict(), ensure_ascii=False, indent=2), encoding="utf-8")
    print(f"OK -> {args.out} (anios={tabla.primer_anio}-{tabla.ultimo_anio}, version={tabla.version})")


if __name__ == "__main__":
    main()
