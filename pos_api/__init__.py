"""
                Restaurant POS Backend

Menu catalog, table status and billing API for a restaurant
point-of-sale front end, backed by PostgreSQL.

Version: 1.0.0
License: MIT
"""

__version__ = "1.0.0"
