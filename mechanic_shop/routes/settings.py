from __future__ import annotations

from fastapi import APIRouter
from pydantic import BaseModel

from ..services.config_svc import get_config, update_config
from .common import audited

router = APIRouter()


@router.get("/api/settings")
def api_settings_get():
    return get_config()


class SettingsUpdateBody(BaseModel):
    updates: dict


@router.post("/api/settings")
def api_settings_update(body: SettingsUpdateBody):
    updated_keys = audited("SETTINGS_UPDATE", body.model_dump(), update_config, body.updates)
    return {"message": "ok", "updated": updated_keys}
