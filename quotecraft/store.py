from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
import json
import logging
import os
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

from quotecraft import config
from quotecraft.models import Quote
from quotecraft.numbering import FILENAME_SUFFIX, generate_quote_number, number_from_filename, quote_filename

logger = logging.getLogger(__name__)


class ErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    IO = "io"
    VALIDATION = "validation"


@dataclass
class StoreResult:
    success: bool
    message: str
    filename: Optional[str] = None
    error: Optional[ErrorKind] = None

    def __bool__(self) -> bool:
        return self.success


def _dumps(quote: Quote) -> str:
    return json.dumps(quote.to_document(), ensure_ascii=False, indent=2)


def sort_newest_first(filenames: List[str]) -> List[str]:
    """
    Order quote filenames newest first by the timestamp embedded in the name.

    The zero-padded digits are compared as strings. Names without a
    timestamp stay in the slot they already occupy.
    """
    slots = [i for i, name in enumerate(filenames) if number_from_filename(name)]
    ranked = sorted((filenames[i] for i in slots), key=number_from_filename, reverse=True)
    out = list(filenames)
    for i, name in zip(slots, ranked):
        out[i] = name
    return out


@dataclass
class QuoteStore:
    """One pretty-printed JSON document per quote inside ``quotes_dir``.

    No caching and no locking: every call goes to disk, and concurrent
    writers to the same file race (last writer wins).
    """
    quotes_dir: Path = field(default_factory=lambda: config.QUOTES_DIR)

    def __post_init__(self) -> None:
        self.quotes_dir = Path(self.quotes_dir)

    def _path(self, filename: str) -> Optional[Path]:
        # only plain names inside quotes_dir are addressable
        if not filename or os.path.basename(filename) != filename or filename in (".", ".."):
            return None
        return self.quotes_dir / filename

    def _write(self, path: Path, quote: Quote) -> None:
        self.quotes_dir.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            f.write(_dumps(quote))

    def save(self, quote: Quote, now: Optional[datetime] = None) -> StoreResult:
        if not quote.quote_number:
            quote = quote.model_copy(update={"quote_number": generate_quote_number(now)})
        filename = quote_filename(quote.quote_number)
        try:
            self._write(self.quotes_dir / filename, quote)
        except OSError as e:
            logger.error("Error saving quote %s: %s", filename, e)
            return StoreResult(False, "Error saving quote", filename, ErrorKind.IO)
        logger.info("Saved %s", filename)
        return StoreResult(True, f"Quote saved as {filename}", filename)

    def update(self, quote: Quote, filename: str) -> StoreResult:
        path = self._path(filename)
        if path is None or not path.is_file():
            return StoreResult(False, f"Quote {filename} not found", filename, ErrorKind.NOT_FOUND)
        try:
            self._write(path, quote)
        except OSError as e:
            logger.error("Error updating quote %s: %s", filename, e)
            return StoreResult(False, "Error updating quote", filename, ErrorKind.IO)
        logger.info("Updated %s", filename)
        return StoreResult(True, "Quote updated successfully!", filename)

    def list(self) -> List[str]:
        try:
            names = sorted(os.listdir(self.quotes_dir))
        except FileNotFoundError:
            return []
        except OSError as e:
            logger.error("Error reading directory %s: %s", self.quotes_dir, e)
            return []
        return sort_newest_first([n for n in names if n.endswith(FILENAME_SUFFIX)])

    def read(self, filename: str) -> Optional[str]:
        path = self._path(filename)
        if path is None:
            return None
        try:
            with open(path, "r", encoding="utf-8") as f:
                return f.read()
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            logger.error("Error reading file %s: %s", path, e)
            return None

    def load(self, filename: str) -> Optional[Quote]:
        raw = self.read(filename)
        if raw is None:
            return None
        try:
            return Quote.model_validate(json.loads(raw))
        except (ValueError, ValidationError) as e:
            logger.error("Error parsing file %s: %s", filename, e)
            return None

    def delete(self, filename: str) -> StoreResult:
        path = self._path(filename)
        if path is None or not path.is_file():
            return StoreResult(False, f"Quote {filename} not found", filename, ErrorKind.NOT_FOUND)
        try:
            path.unlink()
        except OSError as e:
            logger.error("Error deleting file %s: %s", path, e)
            return StoreResult(False, f"Error deleting {filename}.", filename, ErrorKind.IO)
        logger.info("Deleted %s", filename)
        return StoreResult(True, f"Quote {filename} has been deleted.", filename)
