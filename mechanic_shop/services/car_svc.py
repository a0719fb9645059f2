from __future__ import annotations

import logging

from ..db import get_conn, transaction
from ..domain.rules import normalize_vin, require_id, require_text, validate_year
from ..errors import DuplicateVinError, NotFoundError
from ..logs import LogContext
from ..repository import car_repo, customer_repo
from ..repository.keys import next_id
from .utils import integrity_guard

logger = logging.getLogger(__name__)


def is_unique_vin(vin: str) -> bool:
    v = normalize_vin(vin)
    with get_conn() as conn:
        return not car_repo.vin_exists(conn, v)


def add_car(vin: str, make: str, model: str, year, owner_id: int, log: LogContext) -> dict:
    """
    Register a car and its ownership in one transaction.
    Raises DuplicateVinError if the VIN is taken, NotFoundError if the owner is unknown.
    """
    rec = {
        "vin": normalize_vin(vin),
        "make": require_text("make", make),
        "model": require_text("model", model),
        "year": validate_year(year),
    }
    owner_id = require_id("owner id", owner_id)
    log.set_payload({**rec, "owner_id": owner_id})
    with get_conn() as conn, integrity_guard():
        with transaction(conn):
            if car_repo.vin_exists(conn, rec["vin"]):
                raise DuplicateVinError(rec["vin"])
            if not customer_repo.exists(conn, owner_id):
                raise NotFoundError(f"customer {owner_id} does not exist")
            car_repo.insert_car(conn, rec["vin"], rec["make"], rec["model"], rec["year"])
            ownership_id = next_id(conn, "Owns")
            car_repo.insert_ownership(conn, ownership_id, owner_id, rec["vin"])
    out = {**rec, "owner_id": owner_id, "ownership_id": ownership_id}
    log.set_entity("CAR", rec["vin"])
    log.set_after(out)
    logger.info("added car %s owned by customer %d (ownership %d)", rec["vin"], owner_id, ownership_id)
    return out


def get_car(vin: str) -> dict:
    v = normalize_vin(vin)
    with get_conn() as conn:
        row = car_repo.get_car(conn, v)
    if row is None:
        raise NotFoundError(f"car {v} does not exist")
    return dict(row)
