from __future__ import annotations

from fastapi import APIRouter
from pydantic import BaseModel

from ..services import mechanic_svc
from .common import audited, read

router = APIRouter()


class MechanicCreate(BaseModel):
    fname: str
    lname: str
    experience: int


@router.post("/api/mechanics", status_code=201)
def api_mechanic_create(body: MechanicCreate):
    return audited(
        "ADD_MECHANIC", body.model_dump(), mechanic_svc.add_mechanic,
        body.fname, body.lname, body.experience,
    )


@router.get("/api/mechanics/{mechanic_id}")
def api_mechanic_get(mechanic_id: int):
    return read(mechanic_svc.get_mechanic, mechanic_id)
