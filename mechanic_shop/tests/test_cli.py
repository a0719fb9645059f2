from pathlib import Path

import shop
from mechanic_shop.services import customer_svc

SEEDS_DIR = Path(shop.__file__).resolve().parent / "seeds"


def test_init_and_seed(capsys):
    assert shop.main(["init"]) == 0
    assert shop.main(["seed", "--dir", str(SEEDS_DIR)]) == 0
    out = capsys.readouterr().out
    assert "Customer: 6 row(s) inserted" in out
    assert len(customer_svc.find_customers(lname="Vance")) == 2

    # seeding twice skips existing keys
    shop.main(["seed", "--dir", str(SEEDS_DIR)])
    assert "Customer: 0 row(s) inserted" in capsys.readouterr().out


def test_seed_empty_dir(tmp_path, capsys):
    assert shop.main(["seed", "--dir", str(tmp_path)]) == 0
    assert "No seed files found" in capsys.readouterr().out


def test_report_prints_and_exports(seeded, tmp_path, capsys):
    out_dir = tmp_path / "exports"
    assert shop.main(["report", "top-billed", "--export", str(out_dir)]) == 0
    out = capsys.readouterr().out
    assert "Customers in descending order of total bill" in out
    assert "Angela" in out
    assert (out_dir / "top-billed.csv").exists()


def test_report_most_serviced_requires_k(seeded, capsys):
    assert shop.main(["report", "most-serviced"]) == 1
    assert "k must be an integer" in capsys.readouterr().err
    assert shop.main(["report", "most-serviced", "--k", "2"]) == 0
    assert "1HGCM82633A004352" in capsys.readouterr().out


def test_menu_command(monkeypatch, capsys):
    answers = iter(["1", "Ann", "Lee", "555", "1 Road", "11"])
    monkeypatch.setattr("builtins.input", lambda prompt="": next(answers))
    assert shop.main(["menu"]) == 0
    out = capsys.readouterr().out
    assert "New Customer ID: 0" in out
    assert "Bye !" in out


def test_no_command_prints_help(capsys):
    assert shop.main([]) == 0
    assert "usage" in capsys.readouterr().out.lower()
