from __future__ import annotations

from sqlite3 import Connection
from typing import Optional


def closed_requests_with_bill_below(conn: Connection, threshold: int):
    """Columns: date, bill, comment, fname, lname"""
    return conn.execute(
        """
        SELECT cr.date, cr.bill, cr.comment, c.fname, c.lname
        FROM Closed_Request cr
        JOIN Service_Request sr ON sr.rid = cr.rid
        JOIN Customer c ON c.id = sr.customer_id
        WHERE cr.bill < ?
        ORDER BY cr.date, cr.wid
        """,
        (threshold,),
    ).fetchall()


def customers_owning_more_than(conn: Connection, count: int):
    """Columns: fname, lname"""
    return conn.execute(
        """
        SELECT c.fname, c.lname
        FROM Customer c
        WHERE ? < (SELECT COUNT(o.customer_id) FROM Owns o WHERE o.customer_id = c.id)
        ORDER BY c.lname, c.fname
        """,
        (count,),
    ).fetchall()


def cars_before_year_under_mileage(conn: Connection, year: int, miles: int):
    """Columns: make, model, year"""
    return conn.execute(
        """
        SELECT DISTINCT car.make, car.model, car.year
        FROM Car car
        JOIN Service_Request sr ON sr.car_vin = car.vin
        WHERE car.year < ? AND sr.odometer < ?
        ORDER BY car.year, car.make, car.model
        """,
        (year, miles),
    ).fetchall()


def cars_with_most_services(conn: Connection, k: int):
    """Columns: make, model, year, vin, requests"""
    return conn.execute(
        """
        SELECT car.make, car.model, car.year, sr.car_vin AS vin, COUNT(sr.rid) AS requests
        FROM Car car
        JOIN Service_Request sr ON sr.car_vin = car.vin
        GROUP BY car.make, car.model, car.year, sr.car_vin
        ORDER BY requests DESC, sr.car_vin
        LIMIT ?
        """,
        (k,),
    ).fetchall()


def customers_by_total_bill(conn: Connection, limit: Optional[int]):
    """Columns: fname, lname, c_id, total_bill. LIMIT -1 means no limit in SQLite."""
    return conn.execute(
        """
        SELECT c.fname, c.lname, c.id AS c_id, SUM(cr.bill) AS total_bill
        FROM Customer c
        JOIN Service_Request sr ON sr.customer_id = c.id
        JOIN Closed_Request cr ON cr.rid = sr.rid
        GROUP BY c.fname, c.lname, c.id
        ORDER BY total_bill DESC, c.id
        LIMIT ?
        """,
        (-1 if limit is None else limit,),
    ).fetchall()
