from __future__ import annotations

from fastapi import APIRouter
from pydantic import BaseModel

from ..services import car_svc
from .common import audited, read

router = APIRouter()


class CarCreate(BaseModel):
    vin: str
    make: str
    model: str
    year: int
    owner_id: int


@router.post("/api/cars", status_code=201)
def api_car_create(body: CarCreate):
    return audited(
        "ADD_CAR", body.model_dump(), car_svc.add_car,
        body.vin, body.make, body.model, body.year, body.owner_id,
    )


@router.get("/api/cars/{vin}")
def api_car_get(vin: str):
    return read(car_svc.get_car, vin)
