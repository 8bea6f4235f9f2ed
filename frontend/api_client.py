# api_client.py
# Thin requests wrapper around the access API, used by the Streamlit UI
import os
from typing import Any, Dict, List

import requests
from dotenv import load_dotenv

load_dotenv()

API = os.getenv("API_URL", "http://localhost:3000")
TIMEOUT = 10


class ApiError(Exception):
    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        super().__init__(f"{status_code}: {message}")


def _check(r: requests.Response) -> Any:
    if not r.ok:
        try:
            body = r.json()
        except ValueError:
            body = None
        message = body.get("error", r.text) if isinstance(body, dict) else r.text
        raise ApiError(r.status_code, message)
    return r.json()


def list_users(api: str = API) -> List[Dict[str, Any]]:
    return _check(requests.get(f"{api}/api/users", timeout=TIMEOUT))


def list_projects(api: str = API) -> List[Dict[str, Any]]:
    return _check(requests.get(f"{api}/api/projects", timeout=TIMEOUT))


def list_access(api: str = API) -> List[Dict[str, Any]]:
    return _check(requests.get(f"{api}/api/access", timeout=TIMEOUT))


def save_access(records: List[Dict[str, Any]], replace: bool = False, api: str = API) -> Dict[str, Any]:
    """POST access records; merge by default, replace the whole list if asked."""
    params = {"mode": "replace"} if replace else None
    return _check(requests.post(f"{api}/api/access", json=records, params=params, timeout=TIMEOUT))


def grant(user_id: int, project_id: int, read_access: bool, write_access: bool, api: str = API) -> Dict[str, Any]:
    record = {
        "user_id": int(user_id),
        "project_id": int(project_id),
        "read_access": bool(read_access),
        "write_access": bool(write_access),
    }
    return save_access([record], api=api)
