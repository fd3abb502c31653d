# -*- coding: utf-8 -*-
"""
Configuración del liquidador (variables de entorno, con .env opcional).
"""
from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# ---------------------------
# Entorno
# ---------------------------
ENV = os.getenv("ENV", "development").strip().lower()
IS_PRODUCTION = ENV == "production"

# ---------------------------
# Tabla de índices (IPC / SMLMV)
# ---------------------------
ROOT_DIR = Path(__file__).resolve().parents[1]
DATA_DIR = ROOT_DIR / "data"

# Se resuelve relativo al paquete, no al CWD, para que funcione igual en deploy.
INDICES_PATH = os.getenv("INDICES_PATH", str(DATA_DIR / "indices.json"))

# ---------------------------
# Presentación de resultados
# ---------------------------
# Decimales al redondear importes en la salida (0 = pesos enteros).
DECIMALES_SALIDA = int(os.getenv("LIQUIDADOR_DECIMALES", "0"))

# Descuento de salud sobre diferencias de mesadas ordinarias.
PCT_DESCUENTO_SALUD = os.getenv("LIQUIDADOR_PCT_SALUD", "12")

# ---------------------------
# API
# ---------------------------
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
