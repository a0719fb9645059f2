from __future__ import annotations

from typing import Optional

from fastapi import APIRouter
from pydantic import BaseModel

from ..services import customer_svc
from .common import audited, read

router = APIRouter()


class CustomerCreate(BaseModel):
    fname: str
    lname: str
    phone: str
    address: str


@router.post("/api/customers", status_code=201)
def api_customer_create(body: CustomerCreate):
    return audited(
        "ADD_CUSTOMER", body.model_dump(), customer_svc.add_customer,
        body.fname, body.lname, body.phone, body.address,
    )


@router.get("/api/customers")
def api_customer_search(fname: Optional[str] = None, lname: Optional[str] = None):
    return {"items": customer_svc.find_customers(fname=fname, lname=lname)}


@router.get("/api/customers/{customer_id}")
def api_customer_get(customer_id: int):
    return read(customer_svc.get_customer, customer_id)


@router.get("/api/customers/{customer_id}/cars")
def api_customer_cars(customer_id: int):
    return {"items": read(customer_svc.cars_owned_by, customer_id)}
