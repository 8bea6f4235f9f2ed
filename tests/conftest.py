import json

import pytest
from fastapi.testclient import TestClient

from accessdb.config import Settings
from accessdb.main import create_app
from accessdb.storage import JsonStore


@pytest.fixture
def root(tmp_path):
    return tmp_path


@pytest.fixture
def store(root):
    return JsonStore(root)


@pytest.fixture
def settings(root):
    return Settings(root_dir=root)


@pytest.fixture
def client(settings, store):
    return TestClient(create_app(settings, store))


@pytest.fixture
def write_json(root):
    def _write(name, data):
        (root / name).write_text(json.dumps(data, indent=2), encoding="utf-8")

    return _write
