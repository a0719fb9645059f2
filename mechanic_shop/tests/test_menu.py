from mechanic_shop.db import get_conn
from mechanic_shop.logs import LogContext, search_logs
from mechanic_shop.menu import ShopMenu
from mechanic_shop.services import car_svc, customer_svc, mechanic_svc, request_svc


def run_menu(inputs):
    """Drive the menu with scripted answers; returns everything printed."""
    it = iter(inputs)
    printed = []

    def fake_input(prompt):
        printed.append(prompt)
        try:
            return next(it)
        except StopIteration:
            raise EOFError

    ShopMenu(input_fn=fake_input, print_fn=lambda *a: printed.append(" ".join(str(x) for x in a))).run()
    return "\n".join(printed)


def _log():
    return LogContext("TEST")


def _open_request_fixture():
    cust = customer_svc.add_customer("Ann", "Lee", "555", "1 Road", _log())
    car_svc.add_car("VIN0001", "Honda", "Civic", 2010, cust["id"], _log())
    mechanic_svc.add_mechanic("Max", "Power", 7, _log())
    request_svc.open_request(cust["id"], "VIN0001", "2024-01-10", 42000, "Brakes", _log())


def test_menu_lists_options_and_exits():
    out = run_menu(["11"])
    assert "MAIN MENU" in out
    assert "10. ListCustomersInDescendingOrderOfTheirTotalBill" in out
    assert "11. < EXIT" in out


def test_invalid_choice_reprompts_and_unknown_number_redisplays():
    out = run_menu(["abc", "42", "11"])
    assert "Your input is invalid!" in out
    assert out.count("MAIN MENU") == 2


def test_end_of_input_leaves_loop():
    assert "MAIN MENU" in run_menu([])


def test_add_customer_and_mechanic():
    out = run_menu(["1", "Ann", "Lee", "555-0100", "1 Road", "2", "Max", "Power", "7", "11"])
    assert "New Customer ID: 0" in out
    assert "New Mechanic ID: 0" in out
    assert customer_svc.get_customer(0)["address"] == "1 Road"
    assert mechanic_svc.get_mechanic(0)["experience"] == 7
    total, _ = search_logs(action="ADD_MECHANIC")
    assert total == 1


def test_add_mechanic_bad_experience_is_reported():
    out = run_menu(["2", "Max", "Power", "150", "11"])
    assert "Invalid Input: experience must be between 0 and 99" in out
    total, items = search_logs(action="ADD_MECHANIC")
    assert total == 1 and items[0]["result"] == "ERROR"


def test_add_car_without_owner_aborts():
    out = run_menu(["3", "Nobody", "Here", "11"])
    assert "Customer does not exist" in out
    with get_conn() as conn:
        assert conn.execute("SELECT COUNT(1) AS c FROM Car").fetchone()["c"] == 0


def test_add_car_reprompts_for_duplicate_vin():
    cust = customer_svc.add_customer("Ann", "Lee", "555", "1 Road", _log())
    car_svc.add_car("VIN0001", "Honda", "Civic", 2010, cust["id"], _log())
    out = run_menu(["3", "Ann", "Lee", "VIN0001", "VIN0002", "Ford", "Focus", "2012", "11"])
    assert "'VIN0001' is not a unique VIN" in out
    assert [c["vin"] for c in customer_svc.cars_owned_by(cust["id"])] == ["VIN0001", "VIN0002"]


def test_add_car_picks_among_namesakes():
    customer_svc.add_customer("Ann", "Lee", "555", "1 Road", _log())
    customer_svc.add_customer("Ann", "Lee", "777", "9 Road", _log())
    out = run_menu(["3", "Ann", "Lee", "5", "1", "VIN0009", "Kia", "Rio", "2015", "11"])
    assert "Select a customer:" in out
    assert "1. Lee, Ann, 777" in out
    assert customer_svc.cars_owned_by(1)[0]["vin"] == "VIN0009"
    assert customer_svc.cars_owned_by(0) == []


def test_insert_request_creating_customer_and_car():
    out = run_menu([
        "4", "Zed",
        "1", "Zoe", "Zed", "555", "Addr",
        "1", "VINZ", "Ford", "Focus", "2012",
        "03/15/2024", "42000", "Noise",
        "11",
    ])
    assert "There is no customer with the last name of 'Zed'" in out
    assert "There are no cars associated with this customer" in out
    assert "New Request ID: 0" in out
    req = request_svc.get_request(0)
    assert req["date"] == "2024-03-15"
    assert req["car_vin"] == "VINZ"
    assert req["complain"] == "Noise"


def test_insert_request_declined():
    out = run_menu(["4", "Nobody", "2", "11"])
    assert "New Request ID" not in out
    assert request_svc.list_open_requests() == []


def test_insert_request_picks_car():
    cust = customer_svc.add_customer("Ann", "Lee", "555", "1 Road", _log())
    car_svc.add_car("VIN0001", "Honda", "Civic", 2010, cust["id"], _log())
    car_svc.add_car("VIN0002", "Ford", "Focus", 2012, cust["id"], _log())
    out = run_menu(["4", "Lee", "1", "2024-05-01", "1200", "Rattle", "11"])
    assert "Select a car VIN:" in out
    assert request_svc.get_request(0)["car_vin"] == "VIN0002"


def test_insert_request_bad_odometer_reported():
    cust = customer_svc.add_customer("Ann", "Lee", "555", "1 Road", _log())
    car_svc.add_car("VIN0001", "Honda", "Civic", 2010, cust["id"], _log())
    out = run_menu(["4", "Lee", "2024-05-01", "-3", "Rattle", "11"])
    assert "Invalid Input: odometer must be a positive integer" in out
    assert request_svc.list_open_requests() == []


def test_close_request():
    _open_request_fixture()
    out = run_menu(["5", "0", "0", "2024-01-15", "Fixed", "150", "11"])
    assert "New Closed_Request ID: 0" in out
    assert request_svc.get_request(0)["closed"]["bill"] == 150


def test_close_request_rejections():
    _open_request_fixture()
    out = run_menu(["5", "0", "0", "2024-01-09", "Fixed", "150", "11"])
    assert "must be after the request date" in out
    out = run_menu(["5", "0", "0", "2024-01-15", "Fixed", "0", "11"])
    assert "Invalid Input: bill must be a positive integer" in out
    out = run_menu(["5", "3", "0", "11"])
    assert "Invalid inputs: service request 3 does not exist" in out
    out = run_menu(["5", "0", "4", "11"])
    assert "Invalid inputs: mechanic 4 does not exist" in out

    run_menu(["5", "0", "0", "2024-01-15", "Fixed", "150", "11"])
    out = run_menu(["5", "0", "0", "11"])
    assert "has already been closed" in out


def test_reports_print_tables(seeded):
    out = run_menu(["6", "8", "9", "1", "10", "11"])
    assert "Nunez" in out
    assert "Legend" in out
    assert "1HGCM82633A004352" in out
    assert "Angela" in out


def test_report_empty_and_bad_k():
    out = run_menu(["7", "9", "0", "11"])
    assert "(empty)" in out
    assert "Error with Request: k must be a positive integer" in out


def test_insert_request_picks_customer():
    ann = customer_svc.add_customer("Ann", "Lee", "555", "1 Road", _log())
    bob = customer_svc.add_customer("Bob", "Lee", "556", "2 Road", _log())
    car_svc.add_car("VIN0001", "Honda", "Civic", 2010, ann["id"], _log())
    car_svc.add_car("VIN0002", "Ford", "Focus", 2012, bob["id"], _log())
    out = run_menu(["4", "Lee", "1", "2024-05-01", "1200", "Rattle", "11"])
    assert "Select a customer:" in out
    assert "0. Lee, Ann" in out
    assert "1. Lee, Bob" in out
    req = request_svc.get_request(0)
    assert req["customer_id"] == bob["id"]
    assert req["car_vin"] == "VIN0002"


def test_oversized_numbers_do_not_end_the_session():
    _open_request_fixture()
    out = run_menu(["5", "99999999999999999999", "0", "11"])
    assert "Invalid inputs: request id is out of range" in out
    assert out.count("MAIN MENU") == 2

    out = run_menu(["5", "0", "99999999999999999999", "11"])
    assert "Invalid inputs: mechanic id is out of range" in out
    assert out.count("MAIN MENU") == 2

    out = run_menu(["5", "0", "0", "2024-01-15", "Fixed", "99999999999999999999", "11"])
    assert "Invalid Input: bill is out of range" in out
    assert out.count("MAIN MENU") == 2

    out = run_menu(["4", "Lee", "2024-05-01", "99999999999999999999", "Rattle", "11"])
    assert "Invalid Input: odometer is out of range" in out
    assert out.count("MAIN MENU") == 2
    assert [r["rid"] for r in request_svc.list_open_requests()] == [0]

    out = run_menu(["9", "99999999999999999999", "11"])
    assert "Error with Request: k is out of range" in out
    assert out.count("MAIN MENU") == 2
