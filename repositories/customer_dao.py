"""
repositories/customer_dao.py
----------------------------
Data access layer for customers and their purchase orders.
Every method borrows one connection from the provider, runs a single
parameterized statement and gives the connection back before returning.
"""

import logging
from contextlib import closing, contextmanager
from typing import Any, Iterator, Optional

from db.connection import ConnectionProvider
from db.errors import DataAccessError
from models.customer import Customer
from utils.logger import get_logger

# Positional marker used by each supported DB-API paramstyle.
_MARKERS = {"qmark": "?", "format": "%s"}


class CustomerDAO:
    """Queries against the CUSTOMER and PURCHASE_ORDER tables."""

    def __init__(self, provider: ConnectionProvider, logger: Optional[logging.Logger] = None):
        """
        Args:
            provider: Source of short-lived connections; not owned by the DAO.
            logger: Where failures are reported. Defaults to this module's logger.

        Raises:
            ValueError: If the provider's paramstyle is not supported.
        """
        if provider.paramstyle not in _MARKERS:
            raise ValueError(f"Unsupported paramstyle: {provider.paramstyle!r}")
        self._provider = provider
        self._marker = _MARKERS[provider.paramstyle]
        self._logger = logger or get_logger(__name__)

    # ── COUNT ─────────────────────────────────────────────

    def number_of_customers(self) -> int:
        """
        Count the rows of the CUSTOMER table.

        Raises:
            DataAccessError: If the query cannot be run.
        """
        sql = "SELECT COUNT(*) AS NUMBER FROM CUSTOMER"
        with self._cursor("number_of_customers") as (_, cur):
            cur.execute(self._sql(sql))
            return int(self._row_to_dict(cur, cur.fetchone())["NUMBER"])

    def number_of_orders_for_customer(self, customer_id: int) -> int:
        """
        Count the purchase orders of one customer; 0 if it has none.

        Raises:
            DataAccessError: If the query cannot be run.
        """
        sql = "SELECT COUNT(*) AS NOMBRE_BONS_COMMANDE FROM PURCHASE_ORDER WHERE CUSTOMER_ID = ?"
        with self._cursor(f"number_of_orders_for_customer({customer_id})") as (_, cur):
            cur.execute(self._sql(sql), (customer_id,))
            return int(self._row_to_dict(cur, cur.fetchone())["NOMBRE_BONS_COMMANDE"])

    # ── DELETE ────────────────────────────────────────────

    def delete_customer(self, customer_id: int) -> int:
        """
        Delete a customer by key.

        Returns:
            The number of deleted rows: 1, or 0 when no customer has this key.

        Raises:
            DataAccessError: If the statement fails; nothing is committed.
        """
        sql = "DELETE FROM CUSTOMER WHERE CUSTOMER_ID = ?"
        with self._cursor(f"delete_customer({customer_id})") as (conn, cur):
            cur.execute(self._sql(sql), (customer_id,))
            deleted = cur.rowcount
            conn.commit()
        self._logger.info(f"Deleted {deleted} customer row(s) with id {customer_id}")
        return deleted

    # ── READ ──────────────────────────────────────────────

    def find_customer(self, customer_id: int) -> Optional[Customer]:
        """
        Fetch a single customer by key.

        Returns:
            The matching Customer, or None if not found.

        Raises:
            DataAccessError: If the query cannot be run.
        """
        sql = "SELECT * FROM CUSTOMER WHERE CUSTOMER_ID = ?"
        with self._cursor(f"find_customer({customer_id})") as (_, cur):
            cur.execute(self._sql(sql), (customer_id,))
            row = cur.fetchone()
            if row is None:
                return None
            record = self._row_to_dict(cur, row)
            return Customer(customer_id, record["NAME"], record["ADDRESSLINE1"])

    def customers_in_state(self, state: str) -> list[Customer]:
        """
        List the customers located in a US state.

        Args:
            state: Two-letter state code, e.g. 'CA'.

        Returns:
            Customers in the order the database returns them; empty if none.

        Raises:
            DataAccessError: If the query cannot be run.
        """
        sql = "SELECT * FROM CUSTOMER WHERE STATE = ?"
        with self._cursor(f"customers_in_state({state!r})") as (_, cur):
            cur.execute(self._sql(sql), (state,))
            return [self._row_to_customer(cur, row) for row in cur]

    # ── Helpers ───────────────────────────────────────────

    @contextmanager
    def _cursor(self, operation: str) -> Iterator[tuple[Any, Any]]:
        """Borrow a connection and a cursor, translating any failure into DataAccessError."""
        conn = None
        failed = False
        try:
            conn = self._provider.acquire()
            with closing(conn.cursor()) as cur:
                yield conn, cur
        except Exception as e:
            failed = True
            if conn is not None:
                self._rollback(conn)
            self._logger.error(f"{operation} failed: {e}")
            raise DataAccessError(str(e)) from e
        finally:
            if conn is not None:
                self._release(conn, operation, failed)

    def _release(self, conn, operation: str, failed: bool) -> None:
        """Give the connection back; a release error only surfaces if nothing else failed."""
        try:
            self._provider.release(conn)
        except Exception as e:
            self._logger.error(f"Releasing connection after {operation} failed: {e}")
            if not failed:
                raise DataAccessError(str(e)) from e

    def _rollback(self, conn) -> None:
        try:
            conn.rollback()
        except Exception as e:
            self._logger.warning(f"Rollback failed: {e}")

    def _sql(self, sql: str) -> str:
        return sql.replace("?", self._marker)

    @staticmethod
    def _row_to_dict(cur, row) -> dict:
        """Key a result row by upper-cased column name."""
        return {col[0].upper(): value for col, value in zip(cur.description, row)}

    def _row_to_customer(self, cur, row) -> Customer:
        record = self._row_to_dict(cur, row)
        return Customer(
            customer_id=int(record["CUSTOMER_ID"]),
            name=record["NAME"],
            address_line=record["ADDRESSLINE1"],
        )
