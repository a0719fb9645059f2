from __future__ import annotations

from typing import Optional

from fastapi import APIRouter

from ..services import report_svc
from .common import read

router = APIRouter()


@router.get("/api/reports")
def api_report_index():
    return {"items": [{"name": r.name, "title": r.title, "columns": list(r.columns)} for r in report_svc.REPORTS.values()]}


@router.get("/api/reports/bill-below")
def api_report_bill_below(threshold: Optional[int] = None):
    return {"items": read(report_svc.customers_with_bill_below, threshold)}


@router.get("/api/reports/many-cars")
def api_report_many_cars(count: Optional[int] = None):
    return {"items": read(report_svc.customers_with_more_cars_than, count)}


@router.get("/api/reports/old-low-mileage")
def api_report_old_low_mileage(year: Optional[int] = None, miles: Optional[int] = None):
    return {"items": read(report_svc.cars_before_year_under_mileage, year, miles)}


@router.get("/api/reports/most-serviced")
def api_report_most_serviced(k: int):
    return {"items": read(report_svc.cars_with_most_services, k)}


@router.get("/api/reports/top-billed")
def api_report_top_billed(limit: Optional[int] = None, all_rows: bool = False):
    if all_rows:
        return {"items": read(report_svc.customers_by_total_bill, None)}
    if limit is None:
        return {"items": read(report_svc.customers_by_total_bill)}
    return {"items": read(report_svc.customers_by_total_bill, limit)}
