"""
SQLAlchemy Database Models

Tables owned by the POS backend:
- menu: the catalog, keyed by dish name
- bill: one finalized order per row
- bill_items: the line items of each bill

The ``tablestat`` table belongs to the table-management side of the system
and is only ever read here, so it is not mapped.
"""

from sqlalchemy import Column, Integer, String, Float, ForeignKey

from pos_api.database import Base


class MenuItem(Base):
    """A dish on the menu. ``menu_name`` is the natural key."""
    __tablename__ = "menu"

    menu_name = Column(String(100), primary_key=True)
    menu_type = Column(String(50), nullable=False)
    menu_price = Column(Float, nullable=False)

    def __repr__(self):
        return f"<MenuItem {self.menu_name} ({self.menu_type}) - {self.menu_price}>"


class Bill(Base):
    """
    A finalized order for one table.

    Bills are written once together with their items and never modified
    through the API afterwards.
    """
    __tablename__ = "bill"

    bill_id = Column(Integer, primary_key=True, autoincrement=True)
    table_name = Column(String(50), nullable=False)
    order_number = Column(String(50), nullable=False, index=True)
    bill_time = Column(String(20), nullable=False)
    bill_date = Column(String(20), nullable=False)
    total_amount = Column(Float, nullable=False)

    def __repr__(self):
        return f"<Bill #{self.bill_id} - {self.table_name} - order {self.order_number}>"


class BillItem(Base):
    """One line of a bill, with the price captured at billing time."""
    __tablename__ = "bill_items"

    item_id = Column(Integer, primary_key=True, autoincrement=True)
    bill_id = Column(Integer, ForeignKey("bill.bill_id"), nullable=False, index=True)
    menu_name = Column(String(100), nullable=False)
    price = Column(Float, nullable=False)
    quantity = Column(Integer, nullable=False)
    amount = Column(Float, nullable=False)

    def __repr__(self):
        return f"<BillItem {self.menu_name} x{self.quantity} (bill #{self.bill_id})>"
