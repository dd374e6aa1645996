#!/usr/bin/env python3.13

# amazon-store: a console storefront for customers and store managers
# --sql is used for syntax highlighting inline sql queries

import argparse
import atexit
import logging
import math
import os
import signal
import sqlite3
import sys
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Callable, Sequence

from termcolor import cprint, colored
from colorama import just_fix_windows_console as enable_windows_ansi_interpretation

# fix windows terminal misinterpreting ansi escape sequences
enable_windows_ansi_interpretation()

# constants
NEARBY_DISTANCE = 30.0
RECENT_LIMIT = 5
DEFAULT_DATABASE = "amazon-store.db"
DEFAULT_LOG_FILE = "amazon-store.log"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S.%f"
SEPARATOR = "-" * 30
# sqlite INTEGER is a signed 64-bit value
SQLITE_INT_MIN = -(2 ** 63)
SQLITE_INT_MAX = 2 ** 63 - 1

logger = logging.getLogger("amazon_store")


# errors
class StoreError(Exception):
    """base error for the storefront"""
    def __init__(self, message=None, code=None, details=None):
        self.message = message or "an error occurred in the storefront"
        self.code = code
        self.details = details
        super().__init__(self.message)

    def __str__(self):
        if self.code:
            return f"[{self.code}] {self.message}"
        return self.message


class DatabaseConnectionError(StoreError):
    """raised when the database cannot be opened"""
    def __init__(self, message=None, code=None, details=None):
        super().__init__(message or "unable to connect to database", code, details)


class DatabaseError(StoreError):
    """raised when a statement fails"""
    def __init__(self, message=None, code=None, details=None):
        super().__init__(message or "database error", code, details)


# helpers
def safe_int(value: str, minimum: int | None = None):
    """return int value or none if invalid / below minimum / out of sqlite range"""
    try:
        v = int(value.strip())
        if not SQLITE_INT_MIN <= v <= SQLITE_INT_MAX:
            return None
        if minimum is not None and v < minimum:
            return None
        return v
    except ValueError:
        return None

def safe_float(value: str):
    """return float value or none if invalid"""
    try:
        return float(value.strip())
    except ValueError:
        return None

def calculate_distance(lat1: float, long1: float, lat2: float, long2: float) -> float:
    """euclidean distance between two (latitude, longitude) pairs on the store grid"""
    t1 = (lat1 - lat2) * (lat1 - lat2)
    t2 = (long1 - long2) * (long1 - long2)
    return math.sqrt(t1 + t2)

def is_nearby(distance: float) -> bool:
    return distance < NEARBY_DISTANCE

def now_timestamp() -> str:
    """current time as sortable text (millisecond precision)"""
    return datetime.now().strftime(TIMESTAMP_FORMAT)[:-3]

def parse_timestamp(value: str) -> datetime:
    return datetime.fromisoformat(value)

def print_error(message: str):
    """print an error line to stderr"""
    cprint(message, "red", file=sys.stderr)


# database layer
class DatabaseManager:
    """manage the sqlite connection, schema and the sql executor"""
    def __init__(self, path: str = DEFAULT_DATABASE, seed: bool = True):
        self.path = path
        try:
            self.conn = sqlite3.connect(path)
        except sqlite3.Error as e:
            raise DatabaseConnectionError(str(e), details={"path": path}) from e
        self.conn.row_factory = sqlite3.Row
        self.conn.autocommit = True
        self.conn.execute("--sql\nPRAGMA foreign_keys=ON;")
        self._create_schema()
        if seed:
            self._seed_demo_data()
        logger.info("connected to database %s", path)

    def _create_schema(self):
        """create tables / triggers if missing"""
        self.conn.executescript(
            """--sql
            CREATE TABLE IF NOT EXISTS Users (
                userID INTEGER PRIMARY KEY AUTOINCREMENT,
                name TEXT NOT NULL,
                password TEXT NOT NULL, -- plain text, matched as-is on login
                latitude REAL NOT NULL,
                longitude REAL NOT NULL,
                type TEXT NOT NULL DEFAULT 'Customer'
            );
            CREATE TABLE IF NOT EXISTS Store (
                storeID INTEGER PRIMARY KEY,
                latitude REAL NOT NULL,
                longitude REAL NOT NULL,
                managerID INTEGER,
                FOREIGN KEY(managerID) REFERENCES Users(userID)
            );
            CREATE TABLE IF NOT EXISTS Product (
                storeID INTEGER NOT NULL,
                productName TEXT NOT NULL,
                numberOfUnits INTEGER NOT NULL DEFAULT 0,
                pricePerUnit REAL NOT NULL,
                PRIMARY KEY(storeID, productName),
                FOREIGN KEY(storeID) REFERENCES Store(storeID)
            );
            CREATE TABLE IF NOT EXISTS Orders (
                orderNumber INTEGER PRIMARY KEY AUTOINCREMENT,
                customerID INTEGER NOT NULL,
                storeID INTEGER NOT NULL,
                productName TEXT NOT NULL,
                unitsOrdered INTEGER NOT NULL,
                orderTime TEXT NOT NULL,
                FOREIGN KEY(customerID) REFERENCES Users(userID),
                FOREIGN KEY(storeID) REFERENCES Store(storeID)
            );
            CREATE TABLE IF NOT EXISTS ProductUpdates (
                updateNumber INTEGER PRIMARY KEY AUTOINCREMENT,
                managerID INTEGER NOT NULL,
                storeID INTEGER NOT NULL,
                productName TEXT NOT NULL,
                updatedOn TEXT NOT NULL,
                FOREIGN KEY(managerID) REFERENCES Users(userID),
                FOREIGN KEY(storeID) REFERENCES Store(storeID)
            );
            CREATE TABLE IF NOT EXISTS ProductSupplyRequests (
                requestNumber INTEGER PRIMARY KEY AUTOINCREMENT,
                managerID INTEGER NOT NULL,
                warehouseID INTEGER NOT NULL,
                storeID INTEGER NOT NULL,
                productName TEXT NOT NULL,
                unitsRequested INTEGER NOT NULL,
                FOREIGN KEY(managerID) REFERENCES Users(userID),
                FOREIGN KEY(storeID) REFERENCES Store(storeID)
            );
            CREATE TRIGGER IF NOT EXISTS trg_product_units_insert
            BEFORE INSERT ON Product
            WHEN NEW.numberOfUnits < 0
            BEGIN
                SELECT RAISE(ABORT, 'numberOfUnits must not be negative');
            END;
            CREATE TRIGGER IF NOT EXISTS trg_product_units_update
            BEFORE UPDATE ON Product
            WHEN NEW.numberOfUnits < 0
            BEGIN
                SELECT RAISE(ABORT, 'numberOfUnits must not be negative');
            END;
            """
        )

    def _seed_demo_data(self):
        """seed a default manager with a handful of stores once"""
        row = self.conn.execute(
            "SELECT userID FROM Users WHERE name=? AND type=? LIMIT 1;",
            ("admin", UserType.MANAGER.value)
        ).fetchone()
        if row:
            return
        cur = self.conn.execute(
            "INSERT INTO Users(name, password, latitude, longitude, type) VALUES(?,?,?,?,?);",
            ("admin", "admin", 50.0, 50.0, UserType.MANAGER.value)
        )
        manager_id = cur.lastrowid
        stores = [
            (1, 45.0, 40.0),
            (2, 60.0, 55.0),
            (3, 10.0, 20.0),
            (4, 85.0, 90.0),
            (5, 30.0, 70.0),
        ]
        self.conn.executemany(
            "INSERT OR IGNORE INTO Store(storeID, latitude, longitude, managerID) VALUES(?,?,?,?);",
            [(sid, lat, lng, manager_id) for sid, lat, lng in stores]
        )
        products = [
            ("Widget", 40, 2.50),
            ("Gadget", 25, 9.99),
            ("Notebook", 100, 1.25),
            ("Headphones", 10, 39.00),
        ]
        self.conn.executemany(
            """--sql
            INSERT OR IGNORE INTO Product(storeID, productName, numberOfUnits, pricePerUnit)
            VALUES(?,?,?,?);
            """,
            [(sid, name, units, price) for sid, _, _ in stores for name, units, price in products]
        )
        logger.info("seeded default manager #%s and %d stores", manager_id, len(stores))

    def close(self):
        """close the physical connection if open"""
        if self.conn is not None:
            self.conn.close()
            self.conn = None

    @contextmanager
    def transaction(self):
        """group statements; rolled back if anything inside raises"""
        self._execute("BEGIN;")
        try:
            yield self
        except BaseException:
            self._execute("ROLLBACK;")
            raise
        try:
            self._execute("COMMIT;")
        except DatabaseError:
            # a failed commit (e.g. database busy) leaves the transaction open
            if self.conn.in_transaction:
                self.conn.execute("ROLLBACK;")
            raise

    # sql executor
    def _execute(self, sql: str, params: Sequence = ()) -> sqlite3.Cursor:
        logger.debug("sql: %s params=%r", sql.strip(), tuple(params))
        try:
            return self.conn.execute(sql, params)
        except (sqlite3.Error, OverflowError) as e:
            logger.error("statement failed: %s (%s)", e, sql.strip())
            raise DatabaseError(str(e), code=type(e).__name__, details={"sql": sql}) from e

    def execute_update(self, sql: str, params: Sequence = ()) -> int:
        """run a non-query statement, return affected row count"""
        return self._execute(sql, params).rowcount

    def execute_query(self, sql: str, params: Sequence = ()) -> int:
        """run a query, return number of rows"""
        return len(self._execute(sql, params).fetchall())

    def execute_query_and_return_result(self, sql: str, params: Sequence = ()) -> list[list[str | None]]:
        """run a query, return rows as lists of text values in select order"""
        rows = self._execute(sql, params).fetchall()
        return [[None if v is None else str(v) for v in row] for row in rows]

    def execute_query_and_print_result(self, sql: str, params: Sequence = ()) -> int:
        """run a query, print a header and tab separated rows, return row count"""
        cur = self._execute(sql, params)
        columns = [d[0] for d in cur.description or ()]
        count = 0
        for row in cur:
            if count == 0:
                print("\t".join(columns) + "\t")
            print("\t".join(str(v) for v in row) + "\t")
            count += 1
        return count

    def get_current_sequence_value(self) -> int:
        """identity value generated by the last insert on this connection (-1 if none)"""
        row = self._execute("SELECT last_insert_rowid();").fetchone()
        return row[0] if row and row[0] else -1


# accounts/auth
class UserType(Enum):
    """user role; only the literal 'manager' grants manager actions"""
    CUSTOMER = "Customer"
    MANAGER = "manager"

    @classmethod
    def parse(cls, value: str | None) -> "UserType":
        if value is not None and value.strip() == cls.MANAGER.value:
            return cls.MANAGER
        return cls.CUSTOMER


@dataclass
class User:
    """session state for the logged in user"""
    user_id: int
    name: str
    password: str
    latitude: float
    longitude: float
    type: UserType

    @classmethod
    def from_record(cls, record: Sequence[str]) -> "User":
        user_id, name, password, latitude, longitude, type_ = record[:6]
        return cls(int(user_id), name, password, float(latitude), float(longitude), UserType.parse(type_))


class AccountManager:
    """manage user accounts and session state (plain text passwords accepted because assignment)"""
    def __init__(self, db: DatabaseManager):
        self.db = db
        self.current_user: User | None = None

    def is_manager(self) -> bool:
        return self.current_user is not None and self.current_user.type is UserType.MANAGER

    def require_manager(self) -> bool:
        """guard for manager-only actions"""
        if not self.is_manager():
            print_error("invalid permissions.")
            return False
        return True

    def create_user(self) -> int | None:
        """register a new customer account"""
        name = input(colored("\tenter name: ", "magenta"))
        password = input(colored("\tenter password: ", "magenta"))
        # coordinates live on a [0.0, 100.0] grid
        latitude = safe_float(input(colored("\tenter latitude: ", "magenta")))
        longitude = safe_float(input(colored("\tenter longitude: ", "magenta")))
        if latitude is None or longitude is None:
            cprint("latitude and longitude must be numbers", "red"); return None
        self.db.execute_update(
            "INSERT INTO Users(name, password, latitude, longitude, type) VALUES(?,?,?,?,?);",
            (name, password, latitude, longitude, UserType.CUSTOMER.value)
        )
        user_id = self.db.get_current_sequence_value()
        logger.info("created user #%s (%s)", user_id, name)
        cprint("user successfully created!", "green")
        return user_id

    def login(self) -> User | None:
        """check credentials; the first matching row becomes the session user"""
        name = input(colored("\tenter name: ", "magenta"))
        password = input(colored("\tenter password: ", "magenta"))
        result = self.db.execute_query_and_return_result(
            """--sql
            SELECT userID, name, password, latitude, longitude, type
            FROM Users WHERE name=? AND password=?
            ORDER BY userID;
            """,
            (name, password)
        )
        if not result:
            cprint("invalid name or password", "red")
            return None
        self.current_user = User.from_record(result[0])
        prefix = "manager: " if self.is_manager() else ""
        cprint(f"logged in as {prefix}{colored(self.current_user.name, 'yellow', attrs=['bold'])}", "green")
        logger.info("user #%s logged in", self.current_user.user_id)
        return self.current_user

    def logout(self):
        """log out current user"""
        if self.current_user is None:
            cprint("no user logged in", "red")
            return
        cprint(f"logged out user #{self.current_user.user_id}", "green")
        self.current_user = None

    def user_location(self) -> tuple[float, float] | None:
        """stored coordinates of the session user"""
        result = self.db.execute_query_and_return_result(
            "SELECT latitude, longitude FROM Users WHERE userID=?;",
            (self.current_user.user_id,)
        )
        if not result:
            return None
        return float(result[0][0]), float(result[0][1])


# customer actions
class ShopManager:
    """stores, products and orders as seen by a customer"""
    def __init__(self, db: DatabaseManager, account_manager: AccountManager):
        self.db = db
        self.account_manager = account_manager

    def _store_location(self, store_id: int) -> tuple[float, float] | None:
        result = self.db.execute_query_and_return_result(
            "SELECT latitude, longitude FROM Store WHERE storeID=?;",
            (store_id,)
        )
        if not result:
            return None
        return float(result[0][0]), float(result[0][1])

    def view_stores(self) -> list[tuple[int, float]]:
        """print stores within NEARBY_DISTANCE of the user"""
        location = self.account_manager.user_location()
        if location is None:
            cprint(f"user {self.account_manager.current_user.user_id} not found.", "red")
            return []
        user_lat, user_long = location
        stores = self.db.execute_query_and_return_result(
            "SELECT storeID, latitude, longitude FROM Store ORDER BY storeID;"
        )
        nearby = []
        cprint(f"stores within {NEARBY_DISTANCE:g} miles of you", "green", attrs=["bold"])
        print(SEPARATOR)
        for store_id, lat, lng in stores:
            distance = calculate_distance(float(lat), float(lng), user_lat, user_long)
            if not is_nearby(distance):
                continue
            nearby.append((int(store_id), distance))
            print(f"store id: {store_id}")
            print(f"distance: {distance:.2f} miles")
            print(SEPARATOR)
        if not nearby:
            cprint("no stores nearby", "yellow")
        return nearby

    def view_products(self) -> list[list[str]] | None:
        """list products of a store"""
        store_id = safe_int(input("enter store id: "))
        if store_id is None:
            cprint("your input is invalid", "red"); return None
        if not self.db.execute_query("SELECT 1 FROM Store WHERE storeID=?;", (store_id,)):
            cprint(f"store {store_id} not found.", "red"); return None
        results = self.db.execute_query_and_return_result(
            """--sql
            SELECT productName, numberOfUnits, pricePerUnit
            FROM Product WHERE storeID=?
            ORDER BY productName;
            """,
            (store_id,)
        )
        cprint(f"items in store {store_id}", "green", attrs=["bold"])
        print(SEPARATOR)
        for name, units, price in results:
            print(f"item: {name}")
            print(f"units available: {int(units)}")
            print(f"price: {colored(f'${float(price):.2f}', 'green')}")
            print(SEPARATOR)
        if not results:
            cprint("no products", "yellow")
        return results

    def place_order(self) -> int | None:
        """order units of a product from a nearby store, returns the order number"""
        user = self.account_manager.current_user
        location = self.account_manager.user_location()
        if location is None:
            cprint(f"user {user.user_id} not found.", "red"); return None

        store_id = safe_int(input("enter store id: "))
        if store_id is None:
            cprint("your input is invalid", "red"); return None
        store_location = self._store_location(store_id)
        if store_location is None:
            cprint(f"store {store_id} not found.", "red"); return None
        distance = calculate_distance(*store_location, *location)
        if not is_nearby(distance):
            cprint(f"store {store_id} is too far from the current location.", "red"); return None

        product_name = input("\nenter product name: ").strip()
        result = self.db.execute_query_and_return_result(
            "SELECT numberOfUnits FROM Product WHERE storeID=? AND productName=?;",
            (store_id, product_name)
        )
        if not result:
            cprint(f"product {product_name} not found at store {store_id}.", "red"); return None
        available = int(result[0][0])
        if available == 0:
            cprint(f"product {product_name} out of stock at store {store_id}.", "red"); return None

        units = safe_int(input(f"\n{available} units available. enter amount of units to purchase: "), minimum=1)
        if units is None:
            cprint("invalid quantity", "red"); return None
        if units > available:
            cprint("not enough units available.", "red"); return None

        order_number = None
        with self.db.transaction():
            # conditional on stock so a concurrent sale cannot push units negative
            taken = self.db.execute_update(
                """--sql
                UPDATE Product SET numberOfUnits = numberOfUnits - ?
                WHERE storeID=? AND productName=? AND numberOfUnits >= ?;
                """,
                (units, store_id, product_name, units)
            )
            if taken:
                self.db.execute_update(
                    """--sql
                    INSERT INTO Orders(customerID, storeID, productName, unitsOrdered, orderTime)
                    VALUES(?,?,?,?,?);
                    """,
                    (user.user_id, store_id, product_name, units, now_timestamp())
                )
                order_number = self.db.get_current_sequence_value()
        if order_number is None:
            cprint("not enough units available.", "red"); return None
        logger.info("order #%s: user #%s bought %d x %s at store %s",
                    order_number, user.user_id, units, product_name, store_id)
        cprint(f"order #{order_number} placed!", "green")
        return order_number

    def view_recent_orders(self) -> list[list[str]]:
        """print the user's most recent orders"""
        results = self.db.execute_query_and_return_result(
            """--sql
            SELECT storeID, productName, unitsOrdered, orderTime
            FROM Orders WHERE customerID=?
            ORDER BY orderTime DESC, orderNumber DESC
            LIMIT ?;
            """,
            (self.account_manager.current_user.user_id, RECENT_LIMIT)
        )
        cprint("\nrecent orders", "green", attrs=["bold"])
        print(SEPARATOR)
        if not results:
            cprint("no orders yet", "yellow")
        for store_id, product_name, units, ordered_on in results:
            print(f"store id: {store_id}")
            print(f"product name: {product_name}")
            print(f"units ordered: {int(units)}")
            print(f"date ordered: {ordered_on}")
            print(SEPARATOR)
        return results


# manager actions
class InventoryManager:
    """inventory updates, supply requests and reports for store managers"""
    def __init__(self, db: DatabaseManager, account_manager: AccountManager):
        self.db = db
        self.account_manager = account_manager

    def managed_stores(self) -> list[int]:
        """store ids managed by the session user"""
        rows = self.db.execute_query_and_return_result(
            "SELECT storeID FROM Store WHERE managerID=? ORDER BY storeID;",
            (self.account_manager.current_user.user_id,)
        )
        return [int(r[0]) for r in rows]

    def _choose_managed_store(self, action: str) -> int | None:
        """list managed stores and prompt for one of them"""
        stores = self.managed_stores()
        if not stores:
            cprint("you don't manage any stores.", "yellow"); return None
        cprint("stores you manage:", "green", attrs=["bold"])
        print(SEPARATOR)
        for store_id in stores:
            print(f"store id: {store_id}")
        print(SEPARATOR + "\n")
        store_id = safe_int(input(f"enter store id to {action}: "))
        if store_id is None:
            cprint("your input is invalid", "red"); return None
        if store_id not in stores:
            cprint(f"you don't manage store {store_id}.", "red"); return None
        return store_id

    def _list_products(self, store_id: int) -> list[str]:
        rows = self.db.execute_query_and_return_result(
            "SELECT productName FROM Product WHERE storeID=? ORDER BY productName;",
            (store_id,)
        )
        cprint(f"products available at store {store_id}:", "green", attrs=["bold"])
        print(SEPARATOR)
        for (name,) in rows:
            print(name)
            print(SEPARATOR)
        return [r[0] for r in rows]

    def update_product(self) -> bool:
        """overwrite units and price of a product and log the update"""
        if not self.account_manager.require_manager():
            return False
        store_id = self._choose_managed_store("update products")
        if store_id is None:
            return False
        products = self._list_products(store_id)
        name = input("enter product name to update: ").strip()
        if name not in products:
            cprint(f"product {name} not found at store {store_id}.", "red"); return False
        units = safe_int(input("enter updated number of units: "), minimum=0)
        price = safe_float(input("enter updated price per unit: "))
        if units is None or price is None:
            cprint("units and price must be numbers", "red"); return False

        manager_id = self.account_manager.current_user.user_id
        with self.db.transaction():
            self.db.execute_update(
                "UPDATE Product SET numberOfUnits=?, pricePerUnit=? WHERE storeID=? AND productName=?;",
                (units, price, store_id, name)
            )
            self.db.execute_update(
                "INSERT INTO ProductUpdates(managerID, storeID, productName, updatedOn) VALUES(?,?,?,?);",
                (manager_id, store_id, name, now_timestamp())
            )
        logger.info("manager #%s updated %s at store %s: units=%d price=%.2f",
                    manager_id, name, store_id, units, price)
        cprint(f"successfully updated {name} in store {store_id}", "green")
        return True

    def view_recent_updates(self) -> list[list[str]] | None:
        """print the latest product updates across all managed stores"""
        if not self.account_manager.require_manager():
            return None
        recent_updates = []
        for store_id in self.managed_stores():
            updates = self.db.execute_query_and_return_result(
                "SELECT productName, updatedOn FROM ProductUpdates WHERE storeID=? ORDER BY updatedOn;",
                (store_id,)
            )
            recent_updates += [[str(store_id), *u] for u in updates]
        recent_updates.sort(key=lambda u: parse_timestamp(u[2]), reverse=True)
        recent_updates = recent_updates[:RECENT_LIMIT]

        cprint("\nrecent updates:", "green", attrs=["bold"])
        print(SEPARATOR)
        if not recent_updates:
            cprint("no recent updates.", "yellow")
        for store_id, product_name, updated_on in recent_updates:
            print(f"store id: {store_id}")
            print(f"product name: {product_name}")
            print(f"updated on: {updated_on}")
            print(SEPARATOR)
        return recent_updates

    def view_popular_products(self) -> list[list[str]] | None:
        """top products of a store by units ordered"""
        if not self.account_manager.require_manager():
            return None
        store_id = self._choose_managed_store("view popular products")
        if store_id is None:
            return None
        results = self.db.execute_query_and_return_result(
            """--sql
            SELECT productName, SUM(unitsOrdered) AS totalOrdered
            FROM Orders WHERE storeID=?
            GROUP BY productName
            ORDER BY totalOrdered DESC, productName ASC
            LIMIT ?;
            """,
            (store_id, RECENT_LIMIT)
        )
        cprint(f"\nmost popular products at store {store_id}", "green", attrs=["bold"])
        print(SEPARATOR)
        if not results:
            cprint("no data", "yellow")
        for name, total in results:
            print(f"product name: {name}")
            print(f"total ordered: {total}")
            print(SEPARATOR)
        return results

    def view_popular_customers(self) -> list[list[str]] | None:
        """top customers of a store by number of orders"""
        if not self.account_manager.require_manager():
            return None
        store_id = self._choose_managed_store("view popular customers")
        if store_id is None:
            return None
        results = self.db.execute_query_and_return_result(
            """--sql
            SELECT u.userID, u.name, COUNT(o.orderNumber) AS orderCount
            FROM Users u
            JOIN Orders o ON u.userID = o.customerID
            WHERE o.storeID=?
            GROUP BY u.userID, u.name
            ORDER BY orderCount DESC, u.userID ASC
            LIMIT ?;
            """,
            (store_id, RECENT_LIMIT)
        )
        cprint(f"\nmost popular customers at store {store_id}", "green", attrs=["bold"])
        print(SEPARATOR)
        if not results:
            cprint("no data", "yellow")
        for user_id, name, count in results:
            print(f"customer id: {user_id}")
            print(f"name: {name}")
            print(f"order count: {count}")
            print(SEPARATOR)
        return results

    def place_product_supply_request(self) -> int | None:
        """request units from a warehouse; the product is restocked immediately"""
        if not self.account_manager.require_manager():
            return None
        cprint("\nplace product supply request", "green", attrs=["bold"])
        store_id = self._choose_managed_store("supply")
        if store_id is None:
            return None
        products = self._list_products(store_id)
        product = input("enter desired product to supply: ").strip()
        if product not in products:
            cprint(f"product {product} not found at store {store_id}.", "red"); return None
        units = safe_int(input("enter number of units needed: "), minimum=1)
        if units is None:
            cprint("invalid number of units", "red"); return None
        warehouse_id = safe_int(input("enter warehouse id: "))
        if warehouse_id is None:
            cprint("invalid warehouse id", "red"); return None

        manager_id = self.account_manager.current_user.user_id
        with self.db.transaction():
            self.db.execute_update(
                """--sql
                INSERT INTO ProductSupplyRequests(managerID, warehouseID, storeID, productName, unitsRequested)
                VALUES(?,?,?,?,?);
                """,
                (manager_id, warehouse_id, store_id, product, units)
            )
            request_number = self.db.get_current_sequence_value()
            self.db.execute_update(
                "UPDATE Product SET numberOfUnits = numberOfUnits + ? WHERE storeID=? AND productName=?;",
                (units, store_id, product)
            )
        logger.info("manager #%s requested %d x %s for store %s from warehouse %s",
                    manager_id, units, product, store_id, warehouse_id)
        cprint(f"product supply request for {product} has been placed successfully.", "green")
        return request_number


# menu infrastructure
def read_choice() -> int:
    """prompt until an integer is entered"""
    while True:
        choice = safe_int(input(colored("please make your choice: ", "blue")))
        if choice is not None:
            return choice
        cprint("your input is invalid!", "red")


class MenuOption:
    """bind a menu number to a function"""
    def __init__(self, number: int, label: str, function: Callable, manager_only: bool = False):
        self.number = number
        self.label = label
        self._fn = function
        self.manager_only = manager_only

    def execute(self):
        """invoke the function; database failures abort only this action"""
        try:
            return self._fn()
        except DatabaseError as e:
            logger.error("%s failed: %s", self.label, e)
            print_error(f"an error occurred: {e}")
            return None


class Menu:
    """numbered console menu"""
    def __init__(self, title: str, options: list[MenuOption]):
        self.title = title
        self.options = options

    def show(self):
        cprint(self.title, "green", attrs=["bold"])
        print("-" * len(self.title))
        for opt in self.options:
            if opt.number >= 20:
                print("." * 25)
            tag = colored(" (managers)", "cyan") if opt.manager_only else ""
            print(f"{colored(str(opt.number), 'blue')}. {opt.label}{tag}")

    def prompt(self):
        """show the menu, read a choice and run the matching option"""
        self.show()
        choice = read_choice()
        option = next((o for o in self.options if o.number == choice), None)
        if option is None:
            cprint("unrecognized choice!", "red")
            return None
        return option.execute()


# application wiring
class Application:
    """bootstrap objects & run the menu loop"""
    def __init__(self, db: DatabaseManager):
        self.db = db
        self.running = True
        self.account_manager = AccountManager(db)
        self.shop_manager = ShopManager(db, self.account_manager)
        self.inventory_manager = InventoryManager(db, self.account_manager)

        self.main_menu = Menu("main menu", [
            MenuOption(1, "create user", self.account_manager.create_user),
            MenuOption(2, "log in", self.account_manager.login),
            MenuOption(9, "< exit", self.stop),
        ])
        self.user_menu = Menu("user menu", [
            MenuOption(1, f"view stores within {NEARBY_DISTANCE:g} miles", self.shop_manager.view_stores),
            MenuOption(2, "view product list", self.shop_manager.view_products),
            MenuOption(3, "place an order", self.shop_manager.place_order),
            MenuOption(4, f"view {RECENT_LIMIT} recent orders", self.shop_manager.view_recent_orders),
            MenuOption(5, "update product", self.inventory_manager.update_product, True),
            MenuOption(6, f"view {RECENT_LIMIT} recent product updates", self.inventory_manager.view_recent_updates, True),
            MenuOption(7, f"view {RECENT_LIMIT} popular items", self.inventory_manager.view_popular_products, True),
            MenuOption(8, f"view {RECENT_LIMIT} popular customers", self.inventory_manager.view_popular_customers, True),
            MenuOption(9, "place product supply request to warehouse", self.inventory_manager.place_product_supply_request, True),
            MenuOption(20, "log out", self.account_manager.logout),
        ])

    def stop(self):
        self.running = False

    def run(self):
        """main menu loop; the user menu runs while someone is logged in"""
        greeting()
        try:
            while self.running:
                self.main_menu.prompt()
                while self.running and self.account_manager.current_user is not None:
                    self.user_menu.prompt()
        except EOFError:
            print()
            logger.info("input closed, leaving menu loop")


def greeting():
    cprint("""
*******************************************************
              amazon-store user interface
*******************************************************
""", "green", attrs=["bold"])


def configure_logging(level: str = "INFO", path: str = DEFAULT_LOG_FILE):
    """send the storefront logger to a file so the console stays clean"""
    handler = logging.FileHandler(path)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    for old in logger.handlers[:]:
        logger.removeHandler(old)
        old.close()
    logger.addHandler(handler)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    logger.propagate = False


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="amazon-store", description="console storefront for customers and store managers")
    parser.add_argument("database", nargs="?", default=DEFAULT_DATABASE, help="sqlite database file")
    parser.add_argument("--no-seed", action="store_true", help="do not create the demo manager and stores")
    parser.add_argument("--log-level", default=os.environ.get("AMAZON_STORE_LOG_LEVEL", "INFO"),
                        help="logging level (default: $AMAZON_STORE_LOG_LEVEL or INFO)")
    parser.add_argument("--log-file", default=DEFAULT_LOG_FILE, help="log file path")
    return parser.parse_args(argv)


# entry point
def main(argv: Sequence[str] | None = None):
    """entrypoint wrapper"""
    args = parse_args(argv)
    signal.signal(signal.SIGINT, SignalHandler.sigint)
    configure_logging(args.log_level, args.log_file)
    print("connecting to database...", end="")
    try:
        db = DatabaseManager(args.database, seed=not args.no_seed)
    except DatabaseConnectionError as e:
        print_error(f"\nerror - unable to connect to database: {e}")
        sys.exit(-1)
    cprint("done", "green")
    atexit.register(db.close)
    try:
        Application(db).run()
    finally:
        print("disconnecting from database...", end="")
        db.close()
        cprint("done\n\nbye!", "green")


# signal handler
class SignalHandler:
    """ctrl+c leaves quietly"""
    @staticmethod
    def sigint(_, __):
        cprint("\nnext time, use the exit option!", "yellow")
        sys.exit(0)


if __name__ == "__main__":
    main()
