from __future__ import annotations

from typing import Optional

from fastapi import APIRouter
from pydantic import BaseModel

from ..services import request_svc
from .common import audited, read

router = APIRouter()


class RequestOpen(BaseModel):
    customer_id: int
    vin: str
    date: str  # YYYY-MM-DD or MM/DD/YYYY
    odometer: int
    complain: Optional[str] = None


class RequestClose(BaseModel):
    mid: int
    date: str  # YYYY-MM-DD
    bill: int
    comment: Optional[str] = None


@router.post("/api/requests", status_code=201)
def api_request_open(body: RequestOpen):
    return audited(
        "OPEN_REQUEST", body.model_dump(), request_svc.open_request,
        body.customer_id, body.vin, body.date, body.odometer, body.complain,
    )


# registered before /{rid} so "open" is not parsed as an id
@router.get("/api/requests/open")
def api_request_open_list():
    return {"items": request_svc.list_open_requests()}


@router.get("/api/requests/{rid}")
def api_request_get(rid: int):
    return read(request_svc.get_request, rid)


@router.post("/api/requests/{rid}/close", status_code=201)
def api_request_close(rid: int, body: RequestClose):
    return audited(
        "CLOSE_REQUEST", {"rid": rid, **body.model_dump()}, request_svc.close_request,
        rid, body.mid, body.date, body.comment, body.bill,
    )
