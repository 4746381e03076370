"""
repositories/ - Data Access Layer
==================================
Each repository encapsulates all SQL queries for a specific domain entity.
Repositories receive raw data from the database and return domain model objects.
"""

from repositories.customer_dao import CustomerDAO

__all__ = ["CustomerDAO"]
