import json
import os

import pytest

from accessdb import storage
from accessdb.errors import ReadError, WriteError
from accessdb.storage import JsonStore, atomic_write, load_collection


def test_missing_file_is_empty(tmp_path):
    assert load_collection(tmp_path / "users.json") == []


def test_load_array(tmp_path):
    p = tmp_path / "users.json"
    p.write_text('[{"id": 1, "name": "ann"}]', encoding="utf-8")
    assert load_collection(p) == [{"id": 1, "name": "ann"}]


def test_non_array_is_empty(tmp_path):
    p = tmp_path / "users.json"
    p.write_text('{"users": []}', encoding="utf-8")
    assert load_collection(p) == []


def test_unparsable_file_raises(tmp_path):
    p = tmp_path / "users.json"
    p.write_text("[{broken", encoding="utf-8")
    with pytest.raises(ReadError) as exc_info:
        load_collection(p)
    assert str(exc_info.value) == "Failed to read users.json"


def test_unreadable_path_raises(tmp_path):
    (tmp_path / "users.json").mkdir()
    with pytest.raises(ReadError):
        load_collection(tmp_path / "users.json")


def test_atomic_write_replaces_contents(tmp_path):
    p = tmp_path / "access.json"
    p.write_text("[]", encoding="utf-8")
    atomic_write(p, '[{"a": 1}]')
    assert p.read_text(encoding="utf-8") == '[{"a": 1}]'
    assert [f.name for f in tmp_path.iterdir()] == ["access.json"]


def test_failed_rename_leaves_original_untouched(tmp_path, monkeypatch):
    p = tmp_path / "access.json"
    original = b'[\n  {"user_id": 1}\n]'
    p.write_bytes(original)

    def crash(src, dst):
        raise OSError("simulated crash before rename")

    monkeypatch.setattr(storage.os, "replace", crash)
    with pytest.raises(WriteError) as exc_info:
        atomic_write(p, "[]")

    assert str(exc_info.value) == "Failed to write access.json"
    assert p.read_bytes() == original
    # the temp file does not linger
    assert [f.name for f in tmp_path.iterdir()] == ["access.json"]


def test_write_into_missing_directory_raises(tmp_path):
    with pytest.raises(WriteError):
        atomic_write(tmp_path / "nope" / "access.json", "[]")


def test_store_paths(tmp_path):
    store = JsonStore(tmp_path)
    assert store.path("access") == tmp_path / "access.json"
    assert store.path("users") == tmp_path / "users.json"
    assert store.path("projects") == tmp_path / "projects.json"
    with pytest.raises(KeyError):
        store.path("vendors")


def test_store_write_is_pretty_printed(tmp_path):
    store = JsonStore(tmp_path)
    store.write("projects", [{"id": 7, "name": "Zürich"}])
    text = (tmp_path / "projects.json").read_text(encoding="utf-8")
    assert text == '[\n  {\n    "id": 7,\n    "name": "Zürich"\n  }\n]'
    assert store.read("projects") == json.loads(text)


def test_store_creates_root(tmp_path):
    root = tmp_path / "data"
    JsonStore(root)
    assert os.path.isdir(root)


def test_unencodable_text_raises_and_cleans_up(tmp_path):
    p = tmp_path / "access.json"
    p.write_text("[]", encoding="utf-8")
    with pytest.raises(WriteError):
        atomic_write(p, '[{"note": "\ud800"}]')
    assert p.read_text(encoding="utf-8") == "[]"
    assert [f.name for f in tmp_path.iterdir()] == ["access.json"]


def test_store_refuses_non_json_numbers(tmp_path):
    store = JsonStore(tmp_path)
    store.write("access", [{"user_id": 1}])
    with pytest.raises(WriteError) as exc_info:
        store.write("access", [{"user_id": 1, "score": float("nan")}])
    assert str(exc_info.value) == "Failed to write access.json"
    assert store.read("access") == [{"user_id": 1}]
