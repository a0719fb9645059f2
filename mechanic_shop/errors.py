"""Exceptions raised by the service layer.

The menu prints them, the API maps them to status codes, the CLI exits on them.
"""
from __future__ import annotations


class ShopError(Exception):
    """Base class for expected, user-facing failures."""


class ValidationError(ShopError, ValueError):
    pass


class NotFoundError(ShopError, LookupError):
    pass


class DuplicateVinError(ValidationError):
    def __init__(self, vin: str):
        super().__init__(f"'{vin}' is not a unique VIN")
        self.vin = vin


class AlreadyClosedError(ValidationError):
    def __init__(self, rid: int):
        super().__init__(f"service request {rid} has already been closed")
        self.rid = rid
