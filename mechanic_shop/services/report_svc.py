from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Callable, Optional

import pandas as pd

from ..db import get_conn
from ..domain.rules import require_int, require_positive
from ..errors import ValidationError
from ..repository import reporting_repo
from .config_svc import get_config

logger = logging.getLogger(__name__)


def customers_with_bill_below(threshold: Optional[int] = None) -> list[dict]:
    if threshold is None:
        threshold = get_config()["bill_threshold"]
    with get_conn() as conn:
        return [dict(r) for r in reporting_repo.closed_requests_with_bill_below(conn, require_int("threshold", threshold))]


def customers_with_more_cars_than(count: Optional[int] = None) -> list[dict]:
    if count is None:
        count = get_config()["min_car_count"]
    with get_conn() as conn:
        return [dict(r) for r in reporting_repo.customers_owning_more_than(conn, require_int("count", count))]


def cars_before_year_under_mileage(year: Optional[int] = None, miles: Optional[int] = None) -> list[dict]:
    cfg = get_config()
    year = cfg["year_cutoff"] if year is None else require_int("year", year)
    miles = cfg["mileage_cutoff"] if miles is None else require_int("miles", miles)
    with get_conn() as conn:
        return [dict(r) for r in reporting_repo.cars_before_year_under_mileage(conn, year, miles)]


def cars_with_most_services(k) -> list[dict]:
    k = require_positive("k", k)
    with get_conn() as conn:
        return [dict(r) for r in reporting_repo.cars_with_most_services(conn, k)]


_ALL = object()


def customers_by_total_bill(limit=_ALL) -> list[dict]:
    """limit=None lists every customer; leaving it out uses the configured limit."""
    if limit is _ALL:
        limit = get_config()["total_bill_limit"]
    elif limit is not None:
        limit = require_positive("limit", limit)
    with get_conn() as conn:
        return [dict(r) for r in reporting_repo.customers_by_total_bill(conn, limit)]


@dataclass(frozen=True)
class Report:
    name: str
    title: str
    columns: tuple[str, ...]
    run: Callable[..., list[dict]]


REPORTS: dict[str, Report] = {
    r.name: r
    for r in (
        Report("bill-below", "Customers with bill less than threshold",
               ("date", "bill", "comment", "fname", "lname"), customers_with_bill_below),
        Report("many-cars", "Customers with more than N cars",
               ("fname", "lname"), customers_with_more_cars_than),
        Report("old-low-mileage", "Cars built before cutoff year with low mileage",
               ("make", "model", "year"), cars_before_year_under_mileage),
        Report("most-serviced", "K cars with the most services",
               ("make", "model", "year", "vin", "requests"), cars_with_most_services),
        Report("top-billed", "Customers in descending order of total bill",
               ("fname", "lname", "c_id", "total_bill"), customers_by_total_bill),
    )
}


def get_report(name: str) -> Report:
    try:
        return REPORTS[name]
    except KeyError:
        raise ValidationError(f"unknown report '{name}', choose from: {', '.join(REPORTS)}") from None


def to_frame(report: Report, rows: list[dict]) -> pd.DataFrame:
    return pd.DataFrame(rows, columns=list(report.columns))


def render(df: pd.DataFrame) -> str:
    if df.empty:
        return "(empty)"
    return df.to_string(index=False)


def export_csv(report: Report, df: pd.DataFrame, out_dir: str) -> str:
    os.makedirs(out_dir, exist_ok=True)
    path = os.path.join(out_dir, f"{report.name}.csv")
    df.to_csv(path, index=False, encoding="utf-8-sig")
    logger.info("exported %d rows of %s to %s", len(df), report.name, path)
    return path
