# mechanic_shop/services/config_svc.py
from ..db import get_conn
from ..domain.rules import require_int
from ..errors import ValidationError
from ..logs import LogContext

# Report thresholds; the stock values are the ones the shop's canned reports were written for.
DEFAULTS = {
    "bill_threshold": "100",
    "min_car_count": "20",
    "year_cutoff": "1995",
    "mileage_cutoff": "50000",
    "total_bill_limit": "10",
}

def ensure_default_config():
    """Insert missing keys without overwriting existing values."""
    with get_conn() as conn:
        for k, v in DEFAULTS.items():
            conn.execute(
                "INSERT INTO config(key, value) VALUES (?, ?) "
                "ON CONFLICT(key) DO NOTHING",
                (k, v),
            )

def get_config() -> dict:
    with get_conn() as conn:
        rows = conn.execute("SELECT key, value FROM config").fetchall()
    cfg = {r["key"]: r["value"] for r in rows}
    return {k: int(cfg.get(k, DEFAULTS[k])) for k in DEFAULTS}

def update_config(upd: dict, log: LogContext) -> list[str]:
    unknown = sorted(set(upd) - set(DEFAULTS))
    if unknown:
        raise ValidationError(f"unknown config keys: {', '.join(unknown)}")
    values = {k: require_int(k, v) for k, v in upd.items()}

    updated = []
    with get_conn() as conn:
        before = {r["key"]: r["value"] for r in conn.execute("SELECT key,value FROM config")}
        for k, v in values.items():
            conn.execute(
                "INSERT INTO config(key,value) VALUES(?,?) "
                "ON CONFLICT(key) DO UPDATE SET value=excluded.value",
                (k, str(v))
            )
            updated.append(k)
        after = {r["key"]: r["value"] for r in conn.execute("SELECT key,value FROM config")}
    log.set_entity("CONFIG", ",".join(updated))
    log.set_before(before); log.set_after(after)
    return updated
