from __future__ import annotations

import logging

from fastapi import HTTPException

from ..errors import NotFoundError, ShopError
from ..logs import LogContext

logger = logging.getLogger(__name__)


def http_error(e: ShopError) -> HTTPException:
    if isinstance(e, NotFoundError):
        return HTTPException(status_code=404, detail=str(e))
    return HTTPException(status_code=400, detail=str(e))


def audited(action: str, payload: dict, fn, *args):
    """Call a service write with a LogContext, writing one audit row either way."""
    log = LogContext(action, user="api")
    log.set_payload(payload)
    try:
        res = fn(*args, log)
    except ShopError as e:
        log.write("ERROR", str(e))
        raise http_error(e)
    except Exception:
        logger.exception("%s failed", action)
        log.write("ERROR", "internal error")
        raise HTTPException(status_code=500, detail="internal error")
    log.write("OK")
    return res


def read(fn, *args):
    try:
        return fn(*args)
    except ShopError as e:
        raise http_error(e)
    except Exception:
        logger.exception("%s failed", getattr(fn, "__name__", fn))
        raise HTTPException(status_code=500, detail="internal error")
