from __future__ import annotations

import logging

from ..db import get_conn, transaction
from ..domain.rules import require_id, require_text, validate_experience
from ..errors import NotFoundError
from ..logs import LogContext
from ..repository import mechanic_repo
from ..repository.keys import next_id
from .utils import integrity_guard

logger = logging.getLogger(__name__)


def add_mechanic(fname: str, lname: str, experience, log: LogContext) -> dict:
    rec = {
        "fname": require_text("first name", fname),
        "lname": require_text("last name", lname),
        "experience": validate_experience(experience),
    }
    with get_conn() as conn, integrity_guard():
        with transaction(conn):
            mid = next_id(conn, "Mechanic")
            mechanic_repo.insert_mechanic(conn, mid, rec["fname"], rec["lname"], rec["experience"])
    out = {"id": mid, **rec}
    log.set_entity("MECHANIC", mid)
    log.set_after(out)
    logger.info("added mechanic %s %s as id %d", rec["fname"], rec["lname"], mid)
    return out


def get_mechanic(mid: int) -> dict:
    mid = require_id("mechanic id", mid)
    with get_conn() as conn:
        row = mechanic_repo.get_mechanic(conn, mid)
    if row is None:
        raise NotFoundError(f"mechanic {mid} does not exist")
    return dict(row)
