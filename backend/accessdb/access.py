# access.py
# Merge / replace logic for the access collection.

import enum
import logging
from typing import Any, Dict, Iterable, List, Optional

import pydantic

from .errors import ReadError, ValidationError
from .models import AccessRecord
from .storage import JsonStore

logger = logging.getLogger(__name__)

ACCESS = "access"


class WriteMode(str, enum.Enum):
    MERGE = "merge"
    REPLACE = "replace"


def parse_mode(raw: Optional[str]) -> WriteMode:
    """``replace`` (any case) selects replace mode, anything else merges."""
    if raw and raw.lower() == WriteMode.REPLACE.value:
        return WriteMode.REPLACE
    return WriteMode.MERGE


def is_valid_access(item: Any) -> bool:
    if not isinstance(item, dict):
        return False
    try:
        AccessRecord.model_validate(item)
    except pydantic.ValidationError:
        return False
    return True


def validate_payload(payload: Any) -> List[Dict[str, Any]]:
    if not isinstance(payload, list):
        raise ValidationError("Body must be an array of access items")
    bad = [i for i, item in enumerate(payload) if not is_valid_access(item)]
    if bad:
        raise ValidationError(f"Invalid access item(s) in payload at index {', '.join(map(str, bad))}")
    return payload


def access_key(item: Dict[str, Any]) -> str:
    return f"{item['user_id']}:{item['project_id']}"


def merge(existing: Iterable[Dict[str, Any]], incoming: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Upsert ``incoming`` into ``existing`` by (user_id, project_id).

    Fields of an incoming record overwrite the stored ones, fields it does
    not mention are kept.
    """
    by_key = {access_key(it): it for it in existing}
    for it in incoming:
        key = access_key(it)
        by_key[key] = {**by_key.get(key, {}), **it}
    return list(by_key.values())


def replace(incoming: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return list(incoming)


def order(records: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return sorted(records, key=lambda it: (it["user_id"], it["project_id"]))


def _check_unique(records: List[Dict[str, Any]]) -> None:
    seen = set()
    for it in records:
        key = access_key(it)
        if key in seen:
            raise ValidationError(f"Duplicate access item for user_id:project_id {key}")
        seen.add(key)


def apply_access_update(store: JsonStore, payload: Any, mode: WriteMode = WriteMode.MERGE) -> List[Dict[str, Any]]:
    """Validate, merge or replace, sort and persist an access batch.

    Returns the list that was written.
    """
    incoming = validate_payload(payload)

    if mode is WriteMode.REPLACE:
        _check_unique(incoming)
        result = replace(incoming)
    else:
        existing = store.read(ACCESS)
        if not all(is_valid_access(it) for it in existing):
            # a hand-edited file; merging into it would persist broken records
            raise ReadError(store.path(ACCESS), ValueError("malformed access records on disk"))
        result = merge(existing, incoming)

    result = order(result)
    store.write(ACCESS, result)
    logger.info("wrote %d access records (mode=%s)", len(result), mode.value)
    return result
