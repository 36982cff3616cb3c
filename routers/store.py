# routers/store.py
from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, Query, Request
from fastapi.responses import JSONResponse

from deps.auth import require_writer
from store import StoreError, load_questions, save_questions, store_info

logger = logging.getLogger(__name__)

router = APIRouter(tags=["store"])

_USAGE = "Invalid action. Use ?action=load, ?action=save, or ?action=info"


def _fail(status_code: int, error: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": error})


def _dump(model) -> JSONResponse:
    # drop unset optional keys at the top level only; question bodies pass through untouched
    body = {k: v for k, v in model.model_dump(by_alias=True).items() if v is not None}
    return JSONResponse(content=body)


def _read_action(action: str):
    if action == "load":
        return _dump(load_questions())
    if action == "info":
        return _dump(store_info())
    return None


@router.get("/api")
def store_get(action: str = Query(default="")):
    try:
        if action == "save":
            return _fail(405, "Method not allowed. Use POST.")
        res = _read_action(action)
    except StoreError as e:
        return _fail(e.status_code, e.message)
    return res if res is not None else _fail(400, _USAGE)


@router.post("/api")
async def store_post(request: Request, action: str = Query(default="")):
    try:
        if action == "save":
            require_writer(request.headers.get("x-api-key"))
            body = await request.body()
            return _dump(save_questions(body))
        res = _read_action(action)
    except HTTPException as e:
        return _fail(e.status_code, str(e.detail))
    except StoreError as e:
        logger.warning("store %s failed: %s", action, e.message)
        return _fail(e.status_code, e.message)
    return res if res is not None else _fail(400, _USAGE)
