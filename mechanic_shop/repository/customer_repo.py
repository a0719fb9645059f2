from __future__ import annotations

from sqlite3 import Connection
from typing import Optional


def insert_customer(conn: Connection, cid: int, fname: str, lname: str, phone: str, address: str) -> None:
    conn.execute(
        "INSERT INTO Customer(id, fname, lname, phone, address) VALUES(?,?,?,?,?)",
        (cid, fname, lname, phone, address),
    )


def get_customer(conn: Connection, cid: int):
    return conn.execute(
        "SELECT id, fname, lname, phone, address FROM Customer WHERE id=?", (cid,)
    ).fetchone()


def exists(conn: Connection, cid: int) -> bool:
    return conn.execute("SELECT 1 FROM Customer WHERE id=?", (cid,)).fetchone() is not None


def find_by_name(conn: Connection, fname: Optional[str], lname: Optional[str]):
    where = []
    params: list[object] = []
    if fname is not None:
        where.append("TRIM(fname) = ?")
        params.append(fname.strip())
    if lname is not None:
        where.append("TRIM(lname) = ?")
        params.append(lname.strip())
    sql = "SELECT id, fname, lname, phone, address FROM Customer"
    if where:
        sql += " WHERE " + " AND ".join(where)
    sql += " ORDER BY TRIM(lname), TRIM(fname), id"
    return conn.execute(sql, params).fetchall()
