from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
import logging
from typing import List, Optional, Tuple

from pydantic import ValidationError

from quotecraft.models import CatalogProduct, ProductLineItem, Quote
from quotecraft.numbering import number_from_filename
from quotecraft.pricing import compute_total
from quotecraft.store import ErrorKind, QuoteStore, StoreResult

logger = logging.getLogger(__name__)

DIMENSION_FIELDS = ("length_feet", "length_inches", "width_feet", "width_inches")


@dataclass
class QuoteDraft:
    """In-progress form state for one quote.

    Lives in the caller's session; the workflow functions take it in and
    hand it back, nothing is kept at module level.
    """
    customer_name: str = ""
    project_name: str = ""
    description: str = ""
    products: List[ProductLineItem] = field(default_factory=list)
    quote_number: Optional[str] = None
    filename: Optional[str] = None  # set once the quote exists on disk
    read_only: bool = False

    @property
    def is_saved(self) -> bool:
        return self.filename is not None


@dataclass
class QuoteIndex:
    entries: List[Tuple[str, Quote]] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)

    def filenames(self) -> List[str]:
        return [name for name, _ in self.entries]

    def get(self, filename: str) -> Optional[Quote]:
        for name, quote in self.entries:
            if name == filename:
                return quote
        return None

    def remove(self, filename: str) -> None:
        self.entries = [(n, q) for n, q in self.entries if n != filename]


# ---- Line items -----------------------------------------------------------------

def new_draft() -> QuoteDraft:
    return QuoteDraft()

def add_product(draft: QuoteDraft, product: CatalogProduct) -> QuoteDraft:
    draft.products.append(ProductLineItem(
        product_description=product.description,
        price=product.square_footage_price,
    ))
    return draft

def remove_product(draft: QuoteDraft, index: int) -> QuoteDraft:
    del draft.products[index]
    return draft

def update_product(draft: QuoteDraft, index: int, field_name: str, value: float) -> QuoteDraft:
    if field_name not in DIMENSION_FIELDS + ("price",):
        raise ValueError(f"Unknown line item field: {field_name}")
    item = draft.products[index]
    # re-validate so a negative value is rejected like the form would
    data = item.model_dump()
    data[field_name] = value
    draft.products[index] = ProductLineItem.model_validate(data)
    return draft

def draft_total(draft: QuoteDraft) -> float:
    return compute_total(draft.products)


# ---- Create / edit ----------------------------------------------------------------

def _validation_message(err: ValidationError) -> str:
    parts = []
    for e in err.errors():
        loc = ".".join(str(p) for p in e.get("loc", ()))
        parts.append(f"{loc}: {e.get('msg')}" if loc else str(e.get("msg")))
    return "; ".join(parts)

def build_quote(draft: QuoteDraft) -> Quote:
    """Validated Quote from the draft, total recomputed from the current line items."""
    return Quote(
        customer_name=draft.customer_name,
        project_name=draft.project_name,
        description=draft.description or None,
        products=[p.model_copy() for p in draft.products],
        total=draft_total(draft),
        quote_number=draft.quote_number,
    )

def submit(draft: QuoteDraft, store: QuoteStore, now: Optional[datetime] = None) -> StoreResult:
    """
    Save a new quote or overwrite the one the draft was opened from.

    Invalid input never reaches the store. On failure the draft is left
    as it was so the user can fix it and try again.
    """
    if draft.read_only:
        return StoreResult(False, "Quote is open read-only", draft.filename, ErrorKind.VALIDATION)
    try:
        quote = build_quote(draft)
    except ValidationError as e:
        return StoreResult(False, _validation_message(e), draft.filename, ErrorKind.VALIDATION)

    if draft.is_saved:
        result = store.update(quote, draft.filename)
    else:
        result = store.save(quote, now=now)
        if result:
            draft.filename = result.filename
            draft.quote_number = number_from_filename(result.filename)
    if not result:
        logger.warning("Quote submit failed: %s", result.message)
    return result

def _open(store: QuoteStore, filename: str, read_only: bool) -> Optional[QuoteDraft]:
    quote = store.load(filename)
    if quote is None:
        return None
    return QuoteDraft(
        customer_name=quote.customer_name,
        project_name=quote.project_name,
        description=quote.description or "",
        products=list(quote.products),
        quote_number=quote.quote_number or number_from_filename(filename),
        filename=filename,
        read_only=read_only,
    )

def open_for_edit(store: QuoteStore, filename: str) -> Optional[QuoteDraft]:
    return _open(store, filename, read_only=False)

def open_for_view(store: QuoteStore, filename: str) -> Optional[QuoteDraft]:
    return _open(store, filename, read_only=True)


# ---- Index / delete -----------------------------------------------------------------

def load_index(store: QuoteStore) -> QuoteIndex:
    index = QuoteIndex()
    for name in store.list():
        quote = store.load(name)
        if quote is None:
            index.failed.append(name)
            continue
        index.entries.append((name, quote))
    return index

def delete_quote(store: QuoteStore, index: QuoteIndex, filename: str) -> StoreResult:
    result = store.delete(filename)
    if result:
        index.remove(filename)
    return result
