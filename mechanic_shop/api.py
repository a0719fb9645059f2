"""
FastAPI app entry point aggregating per-entity routers under mechanic_shop/routes.
Run as `uvicorn mechanic_shop.api:app` or `python shop.py serve`.
"""
from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI

from .db import ensure_schema
from .logs import ensure_log_schema
from .services.config_svc import ensure_default_config
from . import __version__


@asynccontextmanager
async def lifespan(app: FastAPI):
    ensure_schema()
    ensure_log_schema()
    ensure_default_config()
    yield


app = FastAPI(title="mechanic-shop-api", version=__version__, lifespan=lifespan)


from .routes import base as base_routes
from .routes import customers as customer_routes
from .routes import mechanics as mechanic_routes
from .routes import cars as car_routes
from .routes import requests as request_routes
from .routes import reports as report_routes
from .routes import settings as settings_routes
from .routes import logs as logs_routes

app.include_router(base_routes.router)
app.include_router(customer_routes.router)
app.include_router(mechanic_routes.router)
app.include_router(car_routes.router)
app.include_router(request_routes.router)
app.include_router(report_routes.router)
app.include_router(settings_routes.router)
app.include_router(logs_routes.router)
