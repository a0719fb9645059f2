from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Query

from ..logs import search_logs

router = APIRouter()


@router.get("/api/logs/search")
def api_logs_search(
    q: Optional[str] = None,
    action: Optional[str] = None,
    ts_from: Optional[str] = None,
    ts_to: Optional[str] = None,
    page: int = Query(1, ge=1),
    size: int = Query(20, ge=1, le=200),
):
    total, items = search_logs(q=q, action=action, ts_from=ts_from, ts_to=ts_to, page=page, size=size)
    return {"total": total, "items": items}
