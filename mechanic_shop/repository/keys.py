from __future__ import annotations

from sqlite3 import Connection

# table -> integer key column; names never come from user input
KEY_COLUMNS = {
    "Customer": "id",
    "Mechanic": "id",
    "Owns": "ownership_id",
    "Service_Request": "rid",
    "Closed_Request": "wid",
}


def next_id(conn: Connection, table: str) -> int:
    """MAX(key)+1, starting at 0 for an empty table. Call inside the insert's transaction."""
    column = KEY_COLUMNS[table]
    row = conn.execute(f"SELECT COALESCE(MAX({column}), -1) + 1 AS n FROM {table}").fetchone()
    return int(row["n"])
