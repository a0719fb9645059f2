"""
Interactive main menu.

Each option prompts for its fields, calls the service layer and prints the
outcome. Failures are printed and the loop carries on; only option 11 (or end
of input) leaves it.
"""
from __future__ import annotations

import logging
from typing import Callable, Optional

from .errors import ShopError
from .logs import LogContext
from .services import car_svc, customer_svc, mechanic_svc, report_svc, request_svc

logger = logging.getLogger(__name__)

MENU_ITEMS = (
    "AddCustomer",
    "AddMechanic",
    "AddCar",
    "InsertServiceRequest",
    "CloseServiceRequest",
    "ListCustomersWithBillLessThan100",
    "ListCustomersWithMoreThan20Cars",
    "ListCarsBefore1995With50000Miles",
    "ListKCarsWithTheMostServices",
    "ListCustomersInDescendingOrderOfTheirTotalBill",
    "< EXIT",
)
EXIT_CHOICE = len(MENU_ITEMS)


class ShopMenu:
    def __init__(self, input_fn: Optional[Callable[[str], str]] = None, print_fn: Optional[Callable[..., None]] = None):
        # resolved per call so a patched builtins.input is honoured
        self._input = input_fn or (lambda prompt: input(prompt))
        self.out = print_fn or print
        self._actions = {
            1: self.add_customer,
            2: self.add_mechanic,
            3: self.add_car,
            4: self.insert_service_request,
            5: self.close_service_request,
            6: self.report_bill_below,
            7: self.report_many_cars,
            8: self.report_old_low_mileage,
            9: self.report_most_serviced,
            10: self.report_top_billed,
        }

    # ---------- input helpers ----------

    def ask(self, prompt: str) -> str:
        return self._input(prompt).strip()

    def read_choice(self, prompt: str = "Please make your choice: ") -> int:
        """Re-prompt until an integer is entered."""
        while True:
            raw = self._input(prompt)
            try:
                return int(raw.strip())
            except ValueError:
                self.out("Your input is invalid!")

    def yes_no(self, question: str) -> bool:
        self.out(f"{question} <1 - Yes/ 2 - No>")
        while True:
            choice = self.read_choice()
            if choice in (1, 2):
                return choice == 1

    def pick(self, title: str, items: list[dict], label: Callable[[dict], str]) -> dict:
        self.out(title)
        for i, item in enumerate(items):
            self.out(f"{i}. {label(item)}")
        while True:
            choice = self.read_choice()
            if 0 <= choice < len(items):
                return items[choice]

    def _audited(self, action: str, fn, *args):
        """Run a write operation with its own LogContext; print and swallow ShopError."""
        log = LogContext(action)
        try:
            out = fn(*args, log)
        except ShopError as e:
            log.write("ERROR", str(e))
            self.out(f"Invalid Input: {e}")
            return None
        log.write("OK")
        return out

    # ---------- main loop ----------

    def display_menu(self):
        self.out("MAIN MENU")
        self.out("---------")
        for i, item in enumerate(MENU_ITEMS, start=1):
            self.out(f"{i}. {item}")

    def run(self):
        while True:
            self.display_menu()
            try:
                choice = self.read_choice()
            except EOFError:
                break
            if choice == EXIT_CHOICE:
                break
            action = self._actions.get(choice)
            if action is None:
                continue
            try:
                action()
            except EOFError:
                break

    # ---------- 1-5: writes ----------

    def add_customer(self) -> Optional[dict]:
        fname = self.ask("Enter Customer First Name: ")
        lname = self.ask("Enter Customer Last Name: ")
        phone = self.ask("Enter Customer Phone #: ")
        address = self.ask("Enter Customer Address: ")
        customer = self._audited("ADD_CUSTOMER", customer_svc.add_customer, fname, lname, phone, address)
        if customer:
            self.out(f"New Customer ID: {customer['id']}")
        return customer

    def add_mechanic(self) -> Optional[dict]:
        fname = self.ask("Enter Mechanic First Name: ")
        lname = self.ask("Enter Mechanic Last Name: ")
        years = self.ask("Enter Mechanic Years of Experience: ")
        mechanic = self._audited("ADD_MECHANIC", mechanic_svc.add_mechanic, fname, lname, years)
        if mechanic:
            self.out(f"New Mechanic ID: {mechanic['id']}")
        return mechanic

    def add_car(self) -> Optional[dict]:
        fname = self.ask("Enter the owner's first name: ")
        lname = self.ask("Enter the owner's last name: ")
        customers = customer_svc.find_customers(fname=fname, lname=lname)
        if not customers:
            self.out("Customer does not exist. Add customer to the database before trying again.")
            return None
        if len(customers) == 1:
            owner = customers[0]
        else:
            owner = self.pick(
                "Select a customer:", customers,
                lambda c: f"{c['lname'].strip()}, {c['fname'].strip()}, {c['phone'].strip()}",
            )
        return self._add_car_for(owner["id"])

    def _ask_unique_vin(self) -> str:
        while True:
            vin = self.ask("Enter Car VIN#: ")
            try:
                if car_svc.is_unique_vin(vin):
                    return vin.strip()
            except ShopError as e:
                self.out(f"Invalid Input: {e}")
                continue
            self.out(f"'{vin}' is not a unique VIN")

    def _add_car_for(self, owner_id: int) -> Optional[dict]:
        vin = self._ask_unique_vin()
        make = self.ask("Enter Car Make: ")
        model = self.ask("Enter Car Model: ")
        year = self.ask("Enter Car Year: ")
        car = self._audited("ADD_CAR", car_svc.add_car, vin, make, model, year, owner_id)
        if car:
            self.out(f"Car {car['vin']} registered to customer {owner_id}")
        return car

    def insert_service_request(self) -> Optional[dict]:
        lname = self.ask("Enter Customer Last Name: ")
        customers = customer_svc.find_customers(lname=lname)
        if not customers:
            if not self.yes_no(
                f"There is no customer with the last name of '{lname}'.\n"
                "Would you like to initiate Add Customer procedure?"
            ):
                return None
            customer = self.add_customer()
            if customer is None:
                return None
        elif len(customers) == 1:
            customer = customers[0]
        else:
            customer = self.pick(
                "Select a customer:", customers,
                lambda c: f"{c['lname'].strip()}, {c['fname'].strip()}",
            )
        cid = customer["id"]

        cars = customer_svc.cars_owned_by(cid)
        if not cars:
            if not self.yes_no(
                "There are no cars associated with this customer.\n"
                "Would you like to initiate Add Car procedure?"
            ):
                return None
            car = self._add_car_for(cid)
            if car is None:
                return None
            vin = car["vin"]
        elif len(cars) == 1:
            vin = cars[0]["vin"]
        else:
            vin = self.pick("Select a car VIN:", cars, lambda c: f"VIN: {c['vin'].strip()}")["vin"]

        date = self.ask("Enter Date (MM/DD/YYYY): ")
        odometer = self.ask("Enter Odometer Reading: ")
        complaint = self.ask("Enter Complaint: ")
        req = self._audited("OPEN_REQUEST", request_svc.open_request, cid, vin, date, odometer, complaint)
        if req:
            self.out(f"New Request ID: {req['rid']}")
        return req

    def close_service_request(self) -> Optional[dict]:
        rid = self.read_choice("Enter Request ID #: ")
        mid = self.read_choice("Enter Mechanic ID #: ")
        try:
            req = request_svc.get_request(rid)
            mechanic_svc.get_mechanic(mid)
        except ShopError as e:
            self.out(f"Invalid inputs: {e}")
            return None
        if req["closed"] is not None:
            self.out(f"Invalid inputs: service request {rid} has already been closed")
            return None

        date = self.ask("Enter Request Closing Date (YYYY-MM-DD): ")
        comment = self.ask("Enter comment: ")
        bill = self.ask("Enter bill: ")
        closed = self._audited("CLOSE_REQUEST", request_svc.close_request, rid, mid, date, comment, bill)
        if closed:
            self.out(f"New Closed_Request ID: {closed['wid']}")
        return closed

    # ---------- 6-10: reports ----------

    def _show(self, name: str, *args):
        report = report_svc.get_report(name)
        try:
            rows = report.run(*args)
        except ShopError as e:
            self.out(f"Error with Request: {e}")
            return
        self.out(report_svc.render(report_svc.to_frame(report, rows)))

    def report_bill_below(self):
        self._show("bill-below")

    def report_many_cars(self):
        self._show("many-cars")

    def report_old_low_mileage(self):
        self._show("old-low-mileage")

    def report_most_serviced(self):
        k = self.read_choice("How many cars do you want to find?: ")
        self._show("most-serviced", k)

    def report_top_billed(self):
        self._show("top-billed")
