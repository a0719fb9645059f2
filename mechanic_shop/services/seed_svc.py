from __future__ import annotations

import csv
import logging
import os
from functools import partial

from ..db import get_conn, transaction
from ..domain.rules import (
    normalize_vin,
    parse_date,
    require_id,
    require_positive,
    require_text,
    validate_experience,
    validate_year,
)
from ..errors import ValidationError
from ..logs import LogContext
from .utils import integrity_guard

logger = logging.getLogger(__name__)


def _iso_date(value) -> str:
    return parse_date(value).isoformat()


def _optional_text(value) -> str:
    return (value or "").strip()


# file, table, key column, (column, converter) pairs; parents before children so foreign keys resolve
SEED_FILES = (
    ("customer.csv", "Customer", "id", (
        ("id", partial(require_id, "id")),
        ("fname", partial(require_text, "fname")),
        ("lname", partial(require_text, "lname")),
        ("phone", partial(require_text, "phone")),
        ("address", partial(require_text, "address")),
    )),
    ("mechanic.csv", "Mechanic", "id", (
        ("id", partial(require_id, "id")),
        ("fname", partial(require_text, "fname")),
        ("lname", partial(require_text, "lname")),
        ("experience", validate_experience),
    )),
    ("car.csv", "Car", "vin", (
        ("vin", normalize_vin),
        ("make", partial(require_text, "make")),
        ("model", partial(require_text, "model")),
        ("year", validate_year),
    )),
    ("owns.csv", "Owns", "ownership_id", (
        ("ownership_id", partial(require_id, "ownership_id")),
        ("customer_id", partial(require_id, "customer_id")),
        ("car_vin", normalize_vin),
    )),
    ("service_request.csv", "Service_Request", "rid", (
        ("rid", partial(require_id, "rid")),
        ("customer_id", partial(require_id, "customer_id")),
        ("car_vin", normalize_vin),
        ("date", _iso_date),
        ("odometer", partial(require_positive, "odometer")),
        ("complain", _optional_text),
    )),
    ("closed_request.csv", "Closed_Request", "wid", (
        ("wid", partial(require_id, "wid")),
        ("rid", partial(require_id, "rid")),
        ("mid", partial(require_id, "mid")),
        ("date", _iso_date),
        ("comment", _optional_text),
        ("bill", partial(require_positive, "bill")),
    )),
)


def _convert(filename: str, line: int, row: dict, columns) -> tuple:
    try:
        return tuple(conv(row.get(col)) for col, conv in columns)
    except ValidationError as e:
        raise ValidationError(f"{filename} line {line}: {e}") from None


def seed_from_dir(seed_dir: str, log: LogContext) -> dict[str, int]:
    """
    Load CSV files (with a header row) from seed_dir in one transaction.

    Every value goes through the same rules as the interactive operations and
    dates are stored as ISO. Missing files are skipped, rows whose key already
    exists are skipped; any other bad row aborts the whole load with
    ValidationError. Returns inserted rows per table.
    """
    counts: dict[str, int] = {}
    with get_conn() as conn, integrity_guard():
        with transaction(conn):
            for filename, table, key, columns in SEED_FILES:
                path = os.path.join(seed_dir, filename)
                if not os.path.exists(path):
                    logger.debug("seed file %s not found, skipping", path)
                    continue
                names = [col for col, _ in columns]
                sql = "INSERT INTO {}({}) VALUES({}) ON CONFLICT({}) DO NOTHING".format(
                    table, ", ".join(names), ",".join(["?"] * len(names)), key
                )
                inserted = 0
                with open(path, "r", encoding="utf-8", newline="") as f:
                    # line 1 is the header
                    for line, r in enumerate(csv.DictReader(f), start=2):
                        cur = conn.execute(sql, _convert(filename, line, r, columns))
                        inserted += cur.rowcount
                counts[table] = inserted
                logger.info("seeded %d row(s) into %s", inserted, table)
    log.set_payload({"dir": seed_dir})
    log.set_after(counts)
    return counts
