from __future__ import annotations

from sqlite3 import Connection


def insert_mechanic(conn: Connection, mid: int, fname: str, lname: str, experience: int) -> None:
    conn.execute(
        "INSERT INTO Mechanic(id, fname, lname, experience) VALUES(?,?,?,?)",
        (mid, fname, lname, int(experience)),
    )


def get_mechanic(conn: Connection, mid: int):
    return conn.execute(
        "SELECT id, fname, lname, experience FROM Mechanic WHERE id=?", (mid,)
    ).fetchone()
