import json
from datetime import datetime

from quotecraft.models import Quote
from quotecraft.store import ErrorKind, QuoteStore, sort_newest_first


def test_save_creates_directory_and_names_file(store, sample_quote):
    assert not store.quotes_dir.exists()
    result = store.save(sample_quote, now=datetime(2025, 1, 1, 9, 0))
    assert result.success
    assert result.filename == "quote-0101250900.json"
    assert result.message == "Quote saved as quote-0101250900.json"
    assert (store.quotes_dir / result.filename).is_file()


def test_saved_document_is_pretty_camel_case_json(store, sample_quote):
    result = store.save(sample_quote, now=datetime(2025, 1, 1, 9, 0))
    raw = store.read(result.filename)
    assert raw.startswith("{\n  ")
    doc = json.loads(raw)
    assert doc["customerName"] == "Acme Glass"
    assert doc["quoteNumber"] == "0101250900"
    assert doc["products"][0]["lengthFeet"] == 3
    assert doc["products"][0]["productDescription"] == "Tempered 1/4"


def test_round_trip(store, sample_quote):
    result = store.save(sample_quote, now=datetime(2025, 1, 1, 9, 0))
    loaded = Quote.model_validate(json.loads(store.read(result.filename)))
    expected = sample_quote.model_copy(update={"quote_number": "0101250900"})
    assert loaded.to_document() == expected.to_document()
    assert loaded.total == 30


def test_existing_quote_number_is_kept(store, sample_quote):
    quote = sample_quote.model_copy(update={"quote_number": "0505241200"})
    result = store.save(quote, now=datetime(2025, 1, 1, 9, 0))
    assert result.filename == "quote-0505241200.json"


def test_update_is_idempotent(store, sample_quote):
    filename = store.save(sample_quote, now=datetime(2025, 1, 1, 9, 0)).filename
    changed = store.load(filename).model_copy(update={"project_name": "Atrium"})
    assert store.update(changed, filename).success
    first = (store.quotes_dir / filename).read_bytes()
    assert store.update(changed, filename).success
    assert (store.quotes_dir / filename).read_bytes() == first
    assert store.load(filename).quote_number == "0101250900"


def test_update_missing_file_is_not_found(store, sample_quote):
    result = store.update(sample_quote, "quote-0000000000.json")
    assert not result
    assert result.error is ErrorKind.NOT_FOUND
    assert store.list() == []


def test_list_newest_first(store):
    store.quotes_dir.mkdir(parents=True)
    for name in ["quote-0101250900.json", "quote-0101251000.json", "quote-0101250800.json", "notes.txt"]:
        (store.quotes_dir / name).write_text("{}", encoding="utf-8")
    assert store.list() == ["quote-0101251000.json", "quote-0101250900.json", "quote-0101250800.json"]


def test_list_missing_directory_is_empty(tmp_path):
    assert QuoteStore(tmp_path / "nowhere").list() == []


def test_unparseable_names_keep_their_slot():
    names = ["a.json", "quote-0101250800.json", "b.json", "quote-0101251000.json"]
    assert sort_newest_first(names) == ["a.json", "quote-0101251000.json", "b.json", "quote-0101250800.json"]


def test_read_missing_returns_none(store):
    assert store.read("quote-0000000000.json") is None
    assert store.load("quote-0000000000.json") is None


def test_load_bad_json_returns_none(store):
    store.quotes_dir.mkdir(parents=True)
    (store.quotes_dir / "quote-0101250900.json").write_text("{not json", encoding="utf-8")
    (store.quotes_dir / "quote-0101251000.json").write_text('{"customerName": "A"}', encoding="utf-8")
    assert store.load("quote-0101250900.json") is None
    assert store.load("quote-0101251000.json") is None


def test_delete(store, sample_quote):
    filename = store.save(sample_quote, now=datetime(2025, 1, 1, 9, 0)).filename
    result = store.delete(filename)
    assert result and result.success
    assert store.list() == []


def test_delete_nonexistent_is_a_failure_not_an_exception(store, sample_quote):
    filename = store.save(sample_quote, now=datetime(2025, 1, 1, 9, 0)).filename
    before = store.list()
    result = store.delete("quote-0000000000.json")
    assert not result
    assert result.error is ErrorKind.NOT_FOUND
    assert store.list() == before == [filename]


def test_names_outside_directory_are_rejected(store, sample_quote):
    store.save(sample_quote, now=datetime(2025, 1, 1, 9, 0))
    assert store.read("../quote-0101250900.json") is None
    assert store.delete("../quote-0101250900.json").error is ErrorKind.NOT_FOUND


def test_write_failure_is_reported(tmp_path, sample_quote):
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory", encoding="utf-8")
    result = QuoteStore(blocker / "quotes").save(sample_quote)
    assert not result
    assert result.error is ErrorKind.IO
    assert result.message == "Error saving quote"


def test_non_utf8_file_reads_as_none(store):
    store.quotes_dir.mkdir(parents=True)
    (store.quotes_dir / "quote-0101250900.json").write_bytes(b"\xff\xfe")
    assert store.read("quote-0101250900.json") is None
    assert store.load("quote-0101250900.json") is None


def test_non_utf8_file_lands_in_failed_index(store, sample_quote):
    from quotecraft.workflow import load_index

    good = store.save(sample_quote, now=datetime(2025, 1, 1, 9, 0)).filename
    (store.quotes_dir / "quote-0101251000.json").write_bytes(b"\xff\xfe")
    index = load_index(store)
    assert index.filenames() == [good]
    assert index.failed == ["quote-0101251000.json"]


def test_unreadable_directory_lists_empty(store, sample_quote, monkeypatch):
    store.save(sample_quote, now=datetime(2025, 1, 1, 9, 0))

    def denied(path):
        raise PermissionError(13, "Permission denied", str(path))

    monkeypatch.setattr("quotecraft.store.os.listdir", denied)
    assert store.list() == []


def test_update_write_failure_is_io(store, sample_quote, monkeypatch):
    filename = store.save(sample_quote, now=datetime(2025, 1, 1, 9, 0)).filename
    before = store.read(filename)

    def broken(path, quote):
        raise OSError(28, "No space left on device")

    monkeypatch.setattr(store, "_write", broken)
    result = store.update(sample_quote, filename)
    assert not result
    assert result.error is ErrorKind.IO
    assert result.message == "Error updating quote"
    assert store.read(filename) == before
