# tests/conftest.py
import os, sys
# project root (the folder that contains "quotecraft") first on sys.path
PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

import pytest

from quotecraft.models import ProductLineItem, Quote
from quotecraft.store import QuoteStore


@pytest.fixture
def store(tmp_path):
    return QuoteStore(tmp_path / "quotes")


@pytest.fixture
def sample_quote():
    return Quote(
        customer_name="Acme Glass",
        project_name="Lobby Windows",
        description="Tempered panels",
        products=[
            ProductLineItem(product_description="Tempered 1/4", length_feet=3, length_inches=0,
                            width_feet=2, width_inches=6, price=4.0),
        ],
        total=30.0,
    )
