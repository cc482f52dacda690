"""
                        Services Module

Business logic that sits between the routes and the database.

Services:
    - billing: bill/item join query and row grouping
"""

from pos_api.services.billing import bill_rows_query, group_bill_rows

__all__ = ["bill_rows_query", "group_bill_rows"]
