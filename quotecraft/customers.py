from __future__ import annotations
import json
import logging
import time
from pathlib import Path
from typing import List, Optional

import pandas as pd

from quotecraft import config
from quotecraft.models import Customer

logger = logging.getLogger(__name__)


class CustomerNotFoundError(LookupError):
    """Raised when no customer has the requested id."""
    pass


def _path(path: Optional[Path]) -> Path:
    return Path(path or config.CUSTOMERS_PATH)

def load_customers(path: Optional[Path] = None) -> List[Customer]:
    p = _path(path)
    if not p.exists():
        return []
    try:
        with open(p, "r", encoding="utf-8") as f:
            return [Customer.model_validate(row) for row in json.load(f)]
    except ValueError as e:
        logger.error("Error parsing customers file %s: %s", p, e)
        raise

def _write(customers: List[Customer], path: Optional[Path]) -> None:
    p = _path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    with open(p, "w", encoding="utf-8") as f:
        json.dump([c.to_document() for c in customers], f, ensure_ascii=False, indent=2)

def new_customer_id() -> str:
    # epoch milliseconds, same shape as ids written by earlier installs
    return str(int(time.time() * 1000))

def add_customer(data: dict, path: Optional[Path] = None) -> Customer:
    customers = load_customers(path)
    cust = Customer.model_validate({**data, "id": new_customer_id()})
    customers.append(cust)
    _write(customers, path)
    logger.info("Added customer %s (%s)", cust.id, cust.company_name)
    return cust

def update_customer(customer: Customer, path: Optional[Path] = None) -> Customer:
    customers = load_customers(path)
    for i, c in enumerate(customers):
        if c.id == customer.id:
            customers[i] = customer
            _write(customers, path)
            return customer
    raise CustomerNotFoundError(f"Customer {customer.id} not found")

def delete_customer(customer_id: str, path: Optional[Path] = None) -> None:
    customers = load_customers(path)
    remaining = [c for c in customers if c.id != customer_id]
    if len(remaining) == len(customers):
        raise CustomerNotFoundError(f"Customer {customer_id} not found")
    _write(remaining, path)
    logger.info("Deleted customer %s", customer_id)

def find_customer(customers: List[Customer], company_name: str) -> Optional[Customer]:
    for c in customers:
        if c.company_name == company_name:
            return c
    return None

def customers_frame(customers: List[Customer]) -> pd.DataFrame:
    cols = ["id", "company_name", "representative_name", "address", "phone", "email", "tax_exempt"]
    return pd.DataFrame([c.model_dump() for c in customers], columns=cols)
