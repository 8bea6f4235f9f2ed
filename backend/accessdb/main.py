# main.py
# HTTP layer: read endpoints for users / projects / access, the access write
# endpoint, and static files for the browser frontend.

import json
import logging
from typing import Any, Optional

from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from fastapi.staticfiles import StaticFiles

from . import access, models
from .config import Settings
from .errors import AccessStoreError, PayloadTooLarge, ValidationError
from .storage import JsonStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")


def get_store(request: Request) -> JsonStore:
    return request.app.state.store


def _reject_constant(name):
    # NaN / Infinity are not JSON and could not be served back
    raise ValidationError("Body must be valid JSON")


async def read_json_body(request: Request) -> Any:
    """Request body parsed as JSON, refused past the configured size."""
    limit = request.app.state.settings.max_body_bytes
    declared = request.headers.get("content-length")
    if declared and declared.isdigit() and int(declared) > limit:
        raise PayloadTooLarge(f"Request body exceeds {limit} bytes")
    body = bytearray()
    async for chunk in request.stream():
        body.extend(chunk)
        if len(body) > limit:
            raise PayloadTooLarge(f"Request body exceeds {limit} bytes")
    try:
        payload = json.loads(bytes(body), parse_constant=_reject_constant)
    except ValueError:
        raise ValidationError("Body must be valid JSON")
    try:
        # lone surrogates from \ud800-style escapes cannot be written as UTF-8
        json.dumps(payload, ensure_ascii=False).encode("utf-8")
    except UnicodeEncodeError:
        raise ValidationError("Body must be valid JSON")
    return payload


# --- read endpoints ---
@router.get("/access")
def list_access(store: JsonStore = Depends(get_store)):
    return store.read("access")


@router.get("/users")
def list_users(store: JsonStore = Depends(get_store)):
    return store.read("users")


@router.get("/projects")
def list_projects(store: JsonStore = Depends(get_store)):
    return store.read("projects")


# --- write endpoint ---
@router.post("/access", response_model=models.WriteResult)
def write_access(
    mode: Optional[str] = None,
    payload: Any = Depends(read_json_body),
    store: JsonStore = Depends(get_store),
):
    """Merge the posted records into access.json by (user_id, project_id).

    ``?mode=replace`` overwrites the whole file with the posted array instead.
    """
    result = access.apply_access_update(store, payload, access.parse_mode(mode))
    return models.WriteResult(ok=True, count=len(result))


async def handle_store_error(request: Request, exc: AccessStoreError) -> JSONResponse:
    if isinstance(exc, ValidationError):
        return JSONResponse(status_code=exc.status_code, content={"error": str(exc)})
    logger.error("%s %s: %s", request.method, request.url.path, exc, exc_info=exc)
    return JSONResponse(status_code=500, content={"error": str(exc)})


def create_app(settings: Optional[Settings] = None, store: Optional[JsonStore] = None) -> FastAPI:
    settings = settings or Settings.from_env()
    store = store or JsonStore(settings.root_dir)

    app = FastAPI(title="Access Grant API (JSON storage)")
    app.state.settings = settings
    app.state.store = store

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(AccessStoreError, handle_store_error)
    app.include_router(router)

    @app.get("/", include_in_schema=False)
    def index():
        page = store.root_dir / settings.index_file
        if not page.is_file():
            return JSONResponse(status_code=404, content={"error": f"{settings.index_file} not found"})
        return FileResponse(page)

    # everything else under the service root is served as-is
    app.mount("/", StaticFiles(directory=store.root_dir), name="static")
    return app
