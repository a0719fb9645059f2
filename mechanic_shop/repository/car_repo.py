from __future__ import annotations

from sqlite3 import Connection


def insert_car(conn: Connection, vin: str, make: str, model: str, year: int) -> None:
    conn.execute(
        "INSERT INTO Car(vin, make, model, year) VALUES(?,?,?,?)",
        (vin, make, model, int(year)),
    )


def get_car(conn: Connection, vin: str):
    return conn.execute("SELECT vin, make, model, year FROM Car WHERE vin=?", (vin,)).fetchone()


def vin_exists(conn: Connection, vin: str) -> bool:
    return conn.execute("SELECT 1 FROM Car WHERE vin=?", (vin,)).fetchone() is not None


def insert_ownership(conn: Connection, ownership_id: int, customer_id: int, vin: str) -> None:
    conn.execute(
        "INSERT INTO Owns(ownership_id, customer_id, car_vin) VALUES(?,?,?)",
        (ownership_id, customer_id, vin),
    )


def owns(conn: Connection, customer_id: int, vin: str) -> bool:
    row = conn.execute(
        "SELECT 1 FROM Owns WHERE customer_id=? AND car_vin=?", (customer_id, vin)
    ).fetchone()
    return row is not None


def cars_owned_by(conn: Connection, customer_id: int):
    return conn.execute(
        "SELECT o.ownership_id, c.vin, c.make, c.model, c.year "
        "FROM Owns o JOIN Car c ON c.vin = o.car_vin "
        "WHERE o.customer_id=? ORDER BY o.ownership_id",
        (customer_id,),
    ).fetchall()
