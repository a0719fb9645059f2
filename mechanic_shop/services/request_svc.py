from __future__ import annotations

import logging

from ..db import get_conn, transaction
from ..domain.rules import (
    ensure_closing_after_opening,
    normalize_vin,
    require_id,
    parse_date,
    require_positive,
)
from ..errors import AlreadyClosedError, NotFoundError, ValidationError
from ..logs import LogContext
from ..repository import car_repo, customer_repo, mechanic_repo, request_repo
from ..repository.keys import next_id
from .utils import integrity_guard, row_dict

logger = logging.getLogger(__name__)


def open_request(customer_id: int, vin: str, date, odometer, complaint: str | None, log: LogContext) -> dict:
    """Open a service request for a car the customer owns."""
    customer_id = require_id("customer id", customer_id)
    v = normalize_vin(vin)
    day = parse_date(date)
    miles = require_positive("odometer", odometer)
    complain = (complaint or "").strip()
    log.set_payload({"customer_id": customer_id, "vin": v, "date": day.isoformat(), "odometer": miles, "complain": complain})

    with get_conn() as conn, integrity_guard():
        with transaction(conn):
            if not customer_repo.exists(conn, customer_id):
                raise NotFoundError(f"customer {customer_id} does not exist")
            if not car_repo.vin_exists(conn, v):
                raise NotFoundError(f"car {v} does not exist")
            if not car_repo.owns(conn, customer_id, v):
                raise ValidationError(f"customer {customer_id} does not own car {v}")
            rid = next_id(conn, "Service_Request")
            request_repo.insert_request(conn, rid, customer_id, v, day.isoformat(), miles, complain)

    out = {
        "rid": rid,
        "customer_id": customer_id,
        "car_vin": v,
        "date": day.isoformat(),
        "odometer": miles,
        "complain": complain,
    }
    log.set_entity("SERVICE_REQUEST", rid)
    log.set_after(out)
    logger.info("opened service request %d for car %s", rid, v)
    return out


def close_request(rid: int, mid: int, date, comment: str | None, bill, log: LogContext) -> dict:
    """
    Close an open request.
    - the request must exist and not be closed yet
    - the mechanic must exist
    - the closing date must be strictly after the request date
    - the bill must be positive
    """
    rid = require_id("request id", rid)
    mid = require_id("mechanic id", mid)
    amount = require_positive("bill", bill)
    note = (comment or "").strip()
    log.set_payload({"rid": rid, "mid": mid, "date": str(date), "comment": note, "bill": amount})

    with get_conn() as conn, integrity_guard():
        with transaction(conn):
            req = request_repo.get_request(conn, rid)
            if req is None:
                raise NotFoundError(f"service request {rid} does not exist")
            if request_repo.get_closing(conn, rid) is not None:
                raise AlreadyClosedError(rid)
            if mechanic_repo.get_mechanic(conn, mid) is None:
                raise NotFoundError(f"mechanic {mid} does not exist")
            closed_on = ensure_closing_after_opening(req["date"], date)
            wid = next_id(conn, "Closed_Request")
            request_repo.insert_closing(conn, wid, rid, mid, closed_on.isoformat(), note, amount)

    out = {"wid": wid, "rid": rid, "mid": mid, "date": closed_on.isoformat(), "comment": note, "bill": amount}
    log.set_entity("CLOSED_REQUEST", wid)
    log.set_before(dict(req))
    log.set_after(out)
    logger.info("closed service request %d as %d (bill %d)", rid, wid, amount)
    return out


def get_request(rid: int) -> dict:
    """The request row plus its closing row under `closed` (None while open)."""
    rid = require_id("request id", rid)
    with get_conn() as conn:
        req = request_repo.get_request(conn, rid)
        if req is None:
            raise NotFoundError(f"service request {rid} does not exist")
        out = dict(req)
        out["closed"] = row_dict(request_repo.get_closing(conn, rid))
    return out


def list_open_requests() -> list[dict]:
    with get_conn() as conn:
        return [dict(r) for r in request_repo.list_open(conn)]
