import io

import pytest

from core.errors import ParseError, SourceUnavailable
from core import loader
from core.loader import load_persons, load_persons_strict, load_sample_persons
from core.models import Person


def _write(tmp_path, text, name="persons.txt"):
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    return path


def test_load_persons_from_path_returns_records_in_file_order(tmp_path):
    path = _write(tmp_path, "Alice 30 F\nBob 25 M\nCarol 30 M\n")
    result = load_persons(str(path))
    assert result.ok
    assert result.persons == (
        Person("Alice", 30, "F"),
        Person("Bob", 25, "M"),
        Person("Carol", 30, "M"),
    )


def test_load_persons_accepts_pathlike_and_bom(tmp_path):
    path = tmp_path / "bom.txt"
    path.write_text("\ufeffAlice 30 F\n", encoding="utf-8")
    result = load_persons(path)
    assert result.persons == (Person("Alice", 30, "F"),)


def test_load_persons_from_stream_leaves_it_open():
    stream = io.StringIO("Alice 30 F\nBob 25\n")
    result = load_persons(stream)
    assert [p.name for p in result.persons] == ["Alice", "Bob"]
    assert result.persons[1].gender is None
    assert not stream.closed


def test_load_persons_returns_partial_result_on_malformed_line(tmp_path):
    path = _write(tmp_path, "Alice 30 F\nBob 25 M\nCarol thirty M\nDan 40 M\n")
    result = load_persons(path)
    assert [p.name for p in result.persons] == ["Alice", "Bob"]
    assert isinstance(result.error, ParseError)
    assert result.error.lineno == 3


def test_load_persons_strict_raises_parse_error():
    with pytest.raises(ParseError):
        load_persons_strict(["Alice thirty F"])
    assert load_persons_strict(["Alice 30 F"]) == (Person("Alice", 30, "F"),)


def test_load_persons_missing_file_raises_source_unavailable(tmp_path):
    missing = tmp_path / "missing.txt"
    with pytest.raises(SourceUnavailable) as excinfo:
        load_persons(missing)
    assert excinfo.value.source == str(missing)
    assert isinstance(excinfo.value.__cause__, OSError)


def test_load_persons_directory_raises_source_unavailable(tmp_path):
    with pytest.raises(SourceUnavailable):
        load_persons(str(tmp_path))


def test_load_persons_empty_file_is_valid(tmp_path):
    result = load_persons(_write(tmp_path, ""))
    assert result.ok
    assert result.persons == ()


def test_load_sample_persons_reads_bundled_dataset():
    result = load_sample_persons()
    assert result.ok
    assert len(result.persons) == 12
    assert result.persons[0] == Person("Sachin", 45, "M")


def test_load_persons_undecodable_stream_raises_source_unavailable():
    stream = io.TextIOWrapper(io.BytesIO(b"Alice 30 F\nBob \xff\xfe 25\n"), encoding="utf-8")
    with pytest.raises(SourceUnavailable) as excinfo:
        load_persons(stream)
    assert isinstance(excinfo.value.__cause__, UnicodeDecodeError)


def test_load_persons_undecodable_file_raises_source_unavailable(tmp_path):
    path = tmp_path / "latin1.txt"
    path.write_bytes(b"Alice 30 F\nBob \xff\xfe 25\n")
    with pytest.raises(SourceUnavailable) as excinfo:
        load_persons(path)
    assert excinfo.value.source == str(path)
    assert isinstance(excinfo.value.__cause__, UnicodeDecodeError)


def test_load_sample_persons_missing_resource_raises_source_unavailable(monkeypatch):
    monkeypatch.setattr(loader, "SAMPLE_RESOURCE", "nobody.txt")
    with pytest.raises(SourceUnavailable) as excinfo:
        loader.load_sample_persons()
    assert excinfo.value.source == "nobody.txt"


def test_load_sample_persons_logs_record_count(caplog):
    with caplog.at_level("INFO", logger="core"):
        load_sample_persons()
    assert any("Loaded 12 persons from persons.txt" in r.getMessage() for r in caplog.records)
