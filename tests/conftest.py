import sqlite3
from decimal import Decimal

import pytest

from pizzastore.accounts import AccountManager
from pizzastore.catalog import MenuManager
from pizzastore.database import DatabaseManager
from pizzastore.orders import OrderManager
from pizzastore.stores import StoreManager

sqlite3.register_adapter(Decimal, str)

SCHEMA = """
CREATE TABLE Users (
    login TEXT PRIMARY KEY,
    password TEXT NOT NULL,
    role TEXT NOT NULL,
    favoriteItems TEXT,
    phoneNum TEXT
);
CREATE TABLE Store (
    storeID INTEGER PRIMARY KEY,
    address TEXT,
    city TEXT,
    state TEXT,
    isOpen TEXT,
    reviewScore REAL
);
CREATE TABLE Items (
    itemName TEXT PRIMARY KEY,
    ingredients TEXT,
    typeOfItem TEXT,
    price NUMERIC,
    description TEXT
);
CREATE TABLE FoodOrder (
    orderID INTEGER PRIMARY KEY,
    login TEXT,
    storeID INTEGER,
    totalPrice NUMERIC,
    orderTimestamp TEXT,
    orderStatus TEXT
);
CREATE TABLE ItemsInOrder (
    orderID INTEGER,
    itemName TEXT,
    quantity INTEGER
);
INSERT INTO Users VALUES ('alice', 'pw1', 'customer', NULL, '111-111-1111');
INSERT INTO Users VALUES ('dan', 'pw2', 'driver    ', NULL, '222-222-2222');
INSERT INTO Users VALUES ('mia', 'pw3', 'manager', 'Pepperoni', '333-333-3333');
INSERT INTO Store VALUES (1, '1 Main St', 'Riverside', 'CA', 'yes', 4.5);
INSERT INTO Store VALUES (2, '2 Side St', 'Irvine', 'CA', 'no', 3.0);
INSERT INTO Store VALUES (3, '3 Oak Ave', 'Corona', 'CA', 'YES', 4.0);
INSERT INTO Items VALUES ('Pepperoni', 'dough,cheese,pepperoni', 'entree', 5.00, 'classic');
INSERT INTO Items VALUES ('Garlic Bread', 'bread,garlic', 'sides', 3.00, 'warm');
INSERT INTO Items VALUES ('Cola', 'cola', ' drinks', 1.50, 'cold');
INSERT INTO Items VALUES ('Supreme', 'everything', 'entree', 9.00, 'loaded');
"""


class SqliteDatabaseManager(DatabaseManager):
    """runs the postgres statements on sqlite

    %s placeholders become ?, regclass casts are dropped, and constraint
    ddl sqlite cannot run is recorded instead of executed.
    """
    def __init__(self, conn):
        super().__init__(conn, driver_error=sqlite3.Error)
        self.constraint_ddl: list[str] = []

    def _execute(self, sql, params, fetch):
        if sql.startswith("ALTER TABLE") and "CONSTRAINT" in sql:
            self.constraint_ddl.append(sql)
            return None, []
        sql = sql.replace("CAST(%s AS regclass)", "%s")
        return super()._execute(sql.replace("%s", "?"), params, fetch)


@pytest.fixture
def db():
    conn = sqlite3.connect(":memory:", isolation_level=None)
    conn.executescript(SCHEMA)
    manager = SqliteDatabaseManager(conn)
    yield manager
    manager.close()


@pytest.fixture
def feed(monkeypatch):
    """answer input() prompts in order; eof once the answers run out"""
    def _feed(*answers):
        remaining = iter(answers)

        def fake_input(prompt=""):
            try:
                return next(remaining)
            except StopIteration:
                raise EOFError from None
        monkeypatch.setattr("builtins.input", fake_input)
    return _feed


@pytest.fixture
def accounts(db):
    return AccountManager(db)

@pytest.fixture
def catalog(db, accounts):
    return MenuManager(db, accounts)

@pytest.fixture
def orders(db, accounts):
    return OrderManager(db, accounts)

@pytest.fixture
def stores(db):
    return StoreManager(db)
