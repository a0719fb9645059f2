#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Mechanic Shop (SQLite)

Commands:
  init                Create the schema and default report thresholds
  seed                Load customer/mechanic/car/owns/request CSVs from a directory
  menu                Run the interactive main menu
  report              Run one canned report, print it and optionally export CSV
  serve               Run the HTTP API (uvicorn)

Notes:
- The DB path comes from SHOP_DB_PATH, else config.yaml (db_path), else ./mechanic_shop.db.
- Report thresholds live in the `config` table; see `GET /api/settings`.
"""

import argparse
import logging
import os
import sys

import pandas as pd

from mechanic_shop.db import ensure_schema, get_db_path
from mechanic_shop.errors import ShopError
from mechanic_shop.logs import LogContext, ensure_log_schema
from mechanic_shop.services import report_svc, seed_svc
from mechanic_shop.services.config_svc import ensure_default_config

logger = logging.getLogger("mechanic_shop")

_SEEDS_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "seeds")


def _prepare():
    ensure_schema()
    ensure_log_schema()
    ensure_default_config()


# ---------------- Commands ----------------

def cmd_init(args):
    _prepare()
    print("Database ready at", get_db_path())


def cmd_seed(args):
    _prepare()
    log = LogContext("SEED")
    try:
        counts = seed_svc.seed_from_dir(args.dir, log)
    except ShopError as e:
        log.write("ERROR", str(e))
        raise
    log.write("OK")
    if not counts:
        print("No seed files found in", args.dir)
    for table, n in counts.items():
        print(f"{table}: {n} row(s) inserted")


def cmd_menu(args):
    from mechanic_shop.menu import ShopMenu

    _prepare()
    print("Connected to", get_db_path())
    try:
        ShopMenu().run()
    finally:
        print("Disconnecting from database...Done\n\nBye !")


def cmd_report(args):
    _prepare()
    report = report_svc.get_report(args.name)
    # most-serviced has no default k; None is rejected there
    params = [args.k] if args.k is not None or report.name == "most-serviced" else []
    rows = report.run(*params)
    df = report_svc.to_frame(report, rows)

    pd.set_option("display.max_rows", 200)
    pd.set_option("display.width", 160)
    print(f"\n=== {report.title} ===")
    print(report_svc.render(df))

    if args.export:
        path = report_svc.export_csv(report, df, args.export)
        print("\nCSV exported to", path)


def cmd_serve(args):
    import uvicorn

    uvicorn.run("mechanic_shop.api:app", host=args.host, port=args.port)


# ---------------- Entry ----------------

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Mechanic shop (SQLite)")
    parser.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    sub = parser.add_subparsers()

    p_init = sub.add_parser("init", help="create schema and default config")
    p_init.set_defaults(func=cmd_init)

    p_seed = sub.add_parser("seed", help="load CSV data")
    p_seed.add_argument("--dir", default=_SEEDS_DIR, help="directory with customer.csv, car.csv, ...")
    p_seed.set_defaults(func=cmd_seed)

    p_menu = sub.add_parser("menu", help="interactive main menu")
    p_menu.set_defaults(func=cmd_menu)

    p_rep = sub.add_parser("report", help="run a canned report")
    p_rep.add_argument("name", choices=sorted(report_svc.REPORTS))
    p_rep.add_argument("--k", type=int, default=None,
                       help="report parameter: number of cars for most-serviced (required), threshold/limit for others")
    p_rep.add_argument("--export", default=None, help="directory to write <report>.csv into")
    p_rep.set_defaults(func=cmd_report)

    p_srv = sub.add_parser("serve", help="run the HTTP API")
    p_srv.add_argument("--host", default="127.0.0.1")
    p_srv.add_argument("--port", type=int, default=8000)
    p_srv.set_defaults(func=cmd_serve)
    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    if not hasattr(args, "func"):
        parser.print_help()
        return 0
    try:
        args.func(args)
    except ShopError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
