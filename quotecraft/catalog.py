from __future__ import annotations
import io
import json
import logging
from pathlib import Path
from typing import List, Optional

import pandas as pd

from quotecraft import config
from quotecraft.models import CatalogProduct

logger = logging.getLogger(__name__)

# ---- Product list document --------------------------------------------------------
def load_products(path: Optional[Path] = None) -> List[CatalogProduct]:
    p = Path(path or config.PRODUCTS_PATH)
    if not p.exists():
        logger.warning("%s not found, using an empty product list", p)
        return []
    with open(p, "r", encoding="utf-8") as f:
        data = json.load(f)
    return [CatalogProduct.model_validate(row) for row in data]

def save_products(products: List[CatalogProduct], path: Optional[Path] = None) -> None:
    """Overwrite the whole product list document."""
    p = Path(path or config.PRODUCTS_PATH)
    p.parent.mkdir(parents=True, exist_ok=True)
    with open(p, "w", encoding="utf-8") as f:
        json.dump([prod.to_document() for prod in products], f, ensure_ascii=False, indent=2)

def add_product(products: List[CatalogProduct], product: CatalogProduct) -> List[CatalogProduct]:
    return [*products, product]

def replace_product(products: List[CatalogProduct], index: int, product: CatalogProduct) -> List[CatalogProduct]:
    out = list(products)
    out[index] = product
    return out

def remove_product(products: List[CatalogProduct], index: int) -> List[CatalogProduct]:
    out = list(products)
    del out[index]
    return out

def find_product(products: List[CatalogProduct], description: str) -> Optional[CatalogProduct]:
    # description is the only identity a catalog entry has
    for prod in products:
        if prod.description == description:
            return prod
    return None

def products_frame(products: List[CatalogProduct]) -> pd.DataFrame:
    cols = ["description", "square_footage_price", "dimensions"]
    return pd.DataFrame([p.model_dump() for p in products], columns=cols)

# ---- Sales tax document -----------------------------------------------------------
def load_sales_tax(path: Optional[Path] = None) -> float:
    p = Path(path or config.SALES_TAX_PATH)
    try:
        return float(p.read_text(encoding="utf-8").strip())
    except (OSError, ValueError) as e:
        logger.warning("Error reading sales tax rate from %s (%s), using %.2f", p, e, config.DEFAULT_SALES_TAX)
        return config.DEFAULT_SALES_TAX

def save_sales_tax(rate: float, path: Optional[Path] = None) -> None:
    p = Path(path or config.SALES_TAX_PATH)
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(str(float(rate)), encoding="utf-8")

# ---- Spreadsheet import -----------------------------------------------------------
PRICE_ALIASES = ["squarefootageprice", "price", "price_per_sq_ft", "price_sq_ft", "sq_ft_price", "unit_price"]
DESCRIPTION_ALIASES = ["product", "name", "item", "product_description"]

def _normalize_cols(df: pd.DataFrame) -> pd.DataFrame:
    df = df.copy()
    df.columns = (
        df.columns.astype(str)
        .str.strip().str.lower()
        .str.replace(r"[^\w]+", "_", regex=True)  # spaces/punct -> underscore
        .str.strip("_")
    )
    return df

def _postprocess(out: pd.DataFrame) -> pd.DataFrame:
    if "description" not in out.columns:
        for c in DESCRIPTION_ALIASES:
            if c in out.columns:
                out = out.rename(columns={c: "description"})
                break
        else:
            raise ValueError("Spreadsheet has no description column")
    if "square_footage_price" not in out.columns:
        for c in PRICE_ALIASES:
            if c in out.columns:
                out = out.rename(columns={c: "square_footage_price"})
                break
        else:
            out["square_footage_price"] = 0.0
    if "dimensions" not in out.columns:
        out["dimensions"] = None
    out = out.dropna(subset=["description"])
    out["description"] = out["description"].astype(str).str.strip()
    out["square_footage_price"] = pd.to_numeric(out["square_footage_price"], errors="coerce").fillna(0.0)
    out = out[out["description"].str.len() >= 2]
    return out[["description", "square_footage_price", "dimensions"]].reset_index(drop=True)

def _frame_to_products(df: pd.DataFrame) -> List[CatalogProduct]:
    products = []
    for row in df.to_dict(orient="records"):
        dims = row.get("dimensions")
        products.append(CatalogProduct(
            description=row["description"],
            square_footage_price=float(row["square_footage_price"]),
            dimensions=None if pd.isna(dims) else str(dims),
        ))
    return products

def import_products(buf: bytes, filename: str) -> List[CatalogProduct]:
    """
    Read a product list from an uploaded .xlsx or .csv file.

    Headers are matched loosely ("Price / sq ft" -> price_sq_ft); all sheets
    of a workbook are concatenated.
    """
    if filename.lower().endswith(".csv"):
        frames = [pd.read_csv(io.BytesIO(buf))]
    else:
        sheets = pd.read_excel(io.BytesIO(buf), sheet_name=None)
        frames = [df for df in sheets.values() if df is not None and not df.empty]
    frames = [_normalize_cols(df) for df in frames]
    if not frames:
        return []
    out = _postprocess(pd.concat(frames, ignore_index=True))
    return _frame_to_products(out)
