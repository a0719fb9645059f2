from __future__ import annotations

import logging

from ..db import get_conn, transaction
from ..domain.rules import require_id, require_text
from ..errors import NotFoundError
from ..logs import LogContext
from ..repository import customer_repo, car_repo
from ..repository.keys import next_id
from .utils import integrity_guard

logger = logging.getLogger(__name__)


def add_customer(fname: str, lname: str, phone: str, address: str, log: LogContext) -> dict:
    """Insert a customer under the next free id and return the stored row."""
    rec = {
        "fname": require_text("first name", fname),
        "lname": require_text("last name", lname),
        "phone": require_text("phone", phone),
        "address": require_text("address", address),
    }
    with get_conn() as conn, integrity_guard():
        with transaction(conn):
            cid = next_id(conn, "Customer")
            customer_repo.insert_customer(conn, cid, rec["fname"], rec["lname"], rec["phone"], rec["address"])
    out = {"id": cid, **rec}
    log.set_entity("CUSTOMER", cid)
    log.set_after(out)
    logger.info("added customer %s %s as id %d", rec["fname"], rec["lname"], cid)
    return out


def get_customer(cid: int) -> dict:
    cid = require_id("customer id", cid)
    with get_conn() as conn:
        row = customer_repo.get_customer(conn, cid)
    if row is None:
        raise NotFoundError(f"customer {cid} does not exist")
    return dict(row)


def find_customers(fname: str | None = None, lname: str | None = None) -> list[dict]:
    """Exact (whitespace-insensitive) match on first and/or last name."""
    with get_conn() as conn:
        return [dict(r) for r in customer_repo.find_by_name(conn, fname, lname)]


def cars_owned_by(customer_id: int) -> list[dict]:
    customer_id = require_id("customer id", customer_id)
    with get_conn() as conn:
        if not customer_repo.exists(conn, customer_id):
            raise NotFoundError(f"customer {customer_id} does not exist")
        return [dict(r) for r in car_repo.cars_owned_by(conn, customer_id)]
