from __future__ import annotations

# mechanic_shop/services/utils.py
import sqlite3
from contextlib import contextmanager
from typing import Iterator

from ..errors import ValidationError


@contextmanager
def integrity_guard() -> Iterator[None]:
    """Turn constraint violations from SQLite into ValidationError."""
    try:
        yield
    except sqlite3.IntegrityError as e:
        raise ValidationError(f"constraint violated: {e}") from e


def row_dict(row) -> dict | None:
    return dict(row) if row is not None else None
