from __future__ import annotations

from sqlite3 import Connection


def insert_request(conn: Connection, rid: int, customer_id: int, vin: str, date_dash: str, odometer: int, complain: str) -> None:
    conn.execute(
        "INSERT INTO Service_Request(rid, customer_id, car_vin, date, odometer, complain) VALUES(?,?,?,?,?,?)",
        (rid, customer_id, vin, date_dash, int(odometer), complain),
    )


def get_request(conn: Connection, rid: int):
    return conn.execute(
        "SELECT rid, customer_id, car_vin, date, odometer, complain FROM Service_Request WHERE rid=?",
        (rid,),
    ).fetchone()


def get_closing(conn: Connection, rid: int):
    return conn.execute(
        "SELECT wid, rid, mid, date, comment, bill FROM Closed_Request WHERE rid=?", (rid,)
    ).fetchone()


def insert_closing(conn: Connection, wid: int, rid: int, mid: int, date_dash: str, comment: str, bill: int) -> None:
    conn.execute(
        "INSERT INTO Closed_Request(wid, rid, mid, date, comment, bill) VALUES(?,?,?,?,?,?)",
        (wid, rid, mid, date_dash, comment, int(bill)),
    )


def list_open(conn: Connection):
    return conn.execute(
        "SELECT s.rid, s.customer_id, c.fname, c.lname, s.car_vin, s.date, s.odometer, s.complain "
        "FROM Service_Request s JOIN Customer c ON c.id = s.customer_id "
        "WHERE s.rid NOT IN (SELECT rid FROM Closed_Request) "
        "ORDER BY s.date, s.rid"
    ).fetchall()
