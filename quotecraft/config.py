from __future__ import annotations
import logging
import os
from pathlib import Path

# Everything lives under one data directory unless overridden per file.
DATA_DIR = Path(os.environ.get("QUOTECRAFT_DATA_DIR", "quotecraft_data"))

QUOTES_DIR = Path(os.environ.get("QUOTECRAFT_QUOTES_DIR", DATA_DIR / "quotes"))
PRODUCTS_PATH = Path(os.environ.get("QUOTECRAFT_PRODUCTS", DATA_DIR / "products.json"))
CUSTOMERS_PATH = Path(os.environ.get("QUOTECRAFT_CUSTOMERS", DATA_DIR / "customers.json"))
SALES_TAX_PATH = Path(os.environ.get("QUOTECRAFT_SALES_TAX", DATA_DIR / "salestax.txt"))

DEFAULT_SALES_TAX = 8.25

LOG_LEVEL = os.environ.get("QUOTECRAFT_LOG_LEVEL", "INFO")
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str | None = None) -> None:
    """Set up root logging once; later calls only adjust the level."""
    root = logging.getLogger()
    lvl = (level or LOG_LEVEL).upper()
    if not root.handlers:
        logging.basicConfig(level=lvl, format=LOG_FORMAT)
    else:
        root.setLevel(lvl)
