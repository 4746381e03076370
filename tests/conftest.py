"""Pytest configuration and shared fixtures."""

import itertools

import pytest

from db.connection import SQLiteConnectionProvider
from repositories.customer_dao import CustomerDAO

SCHEMA_SQL = """
CREATE TABLE CUSTOMER (
    CUSTOMER_ID     INTEGER PRIMARY KEY,
    NAME            VARCHAR(30),
    ADDRESSLINE1    VARCHAR(30),
    STATE           CHAR(2)
);

CREATE TABLE PURCHASE_ORDER (
    ORDER_NUM       INTEGER PRIMARY KEY,
    CUSTOMER_ID     INTEGER NOT NULL REFERENCES CUSTOMER(CUSTOMER_ID),
    QUANTITY        SMALLINT
);
"""

CUSTOMERS = [
    (1, "Jumbo Eagle Corp", "111 E. Las Olivas Blvd", "FL"),
    (7, "Acme", "1 Main St", "CA"),
    (25, "Wren Computers", "8989 Red Albatross Drive", "CA"),
]

ORDERS = [
    (10398001, 1, 10),
    (10398002, 1, 8),
    (10398003, 25, 20),
]

_db_names = itertools.count()


@pytest.fixture
def provider():
    """A seeded shared in-memory SQLite store, private to each test."""
    sqlite_provider = SQLiteConnectionProvider(memory_name=f"customers_{next(_db_names)}")
    conn = sqlite_provider.acquire()
    try:
        conn.executescript(SCHEMA_SQL)
        conn.executemany("INSERT INTO CUSTOMER VALUES (?, ?, ?, ?)", CUSTOMERS)
        conn.executemany("INSERT INTO PURCHASE_ORDER VALUES (?, ?, ?)", ORDERS)
        conn.commit()
    finally:
        sqlite_provider.release(conn)
    yield sqlite_provider
    sqlite_provider.close()


@pytest.fixture
def dao(provider):
    """CustomerDAO over the seeded store."""
    return CustomerDAO(provider)
