from __future__ import annotations
import re
from datetime import datetime
from typing import Optional

FILENAME_PREFIX = "quote-"
FILENAME_SUFFIX = ".json"
_FILENAME_RE = re.compile(r"quote-(\d+)\.json")

def generate_quote_number(now: Optional[datetime] = None) -> str:
    """
    Quote number from the local wall clock: MMDDYYHHmm.

    Resolution is one minute, so two quotes saved within the same minute
    get the same number (and the second save overwrites the first file).
    """
    now = now or datetime.now()
    return now.strftime("%m%d%y%H%M")

def quote_filename(quote_number: str) -> str:
    return f"{FILENAME_PREFIX}{quote_number}{FILENAME_SUFFIX}"

def number_from_filename(filename: str) -> Optional[str]:
    m = _FILENAME_RE.search(filename)
    return m.group(1) if m else None
