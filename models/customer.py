"""
models/customer.py
------------------
Domain model for rows of the CUSTOMER table.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Customer:
    """
    A customer as read from the database.

    Attributes:
        customer_id: CUSTOMER_ID primary key.
        name: NAME column.
        address_line: ADDRESSLINE1 column.
    """
    customer_id: int
    name: str
    address_line: str

    def __str__(self) -> str:
        return f"#{self.customer_id} {self.name}, {self.address_line}"
