# storage.py
# JSON collection files on disk. One file per collection, each holding a
# JSON array. Writes go through a temp file + rename so readers never see a
# half-written file. There is no lock: concurrent writers are last-write-wins.

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, List

from .errors import ReadError, WriteError

logger = logging.getLogger(__name__)

COLLECTIONS = {
    "access": "access.json",
    "users": "users.json",
    "projects": "projects.json",
}


def load_collection(path: Path) -> List[Dict[str, Any]]:
    """Read a JSON array from ``path``. A missing file is an empty collection."""
    path = Path(path)
    try:
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        return []
    except (OSError, ValueError) as exc:
        raise ReadError(path, exc) from exc
    if not isinstance(data, list):
        logger.warning("%s does not hold a JSON array, treating it as empty", path.name)
        return []
    return data


def atomic_write(path: Path, data: str) -> None:
    """Replace ``path`` with ``data`` in one rename.

    On any failure the temp file is removed and the previous contents of
    ``path`` are left as they were.
    """
    path = Path(path)
    tmp_path = None
    try:
        with tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            dir=path.parent,
            prefix=f".tmp-{path.name}-",
            delete=False,
        ) as f:
            tmp_path = Path(f.name)
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_path, path)
        tmp_path = None
    except (OSError, ValueError) as exc:
        raise WriteError(path, exc) from exc
    finally:
        if tmp_path is not None:
            try:
                tmp_path.unlink()
            except FileNotFoundError:
                pass


def dumps(records: List[Dict[str, Any]]) -> str:
    return json.dumps(records, indent=2, ensure_ascii=False, allow_nan=False)


class JsonStore:
    """The three collection files of one service root.

    Built once at startup and handed to the request handlers. Holds no data,
    every read goes back to disk.
    """

    def __init__(self, root_dir: Path):
        self.root_dir = Path(root_dir)
        self.root_dir.mkdir(parents=True, exist_ok=True)

    def path(self, name: str) -> Path:
        return self.root_dir / COLLECTIONS[name]

    def read(self, name: str) -> List[Dict[str, Any]]:
        return load_collection(self.path(name))

    def write(self, name: str, records: List[Dict[str, Any]]) -> None:
        path = self.path(name)
        try:
            data = dumps(records)
        except ValueError as exc:
            raise WriteError(path, exc) from exc
        atomic_write(path, data)
