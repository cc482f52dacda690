"""
Pydantic Schemas for Request/Response Validation

Request models mirror the JSON the POS front end sends. Numeric fields are
strict: the front end sends JSON numbers, and a price of ``"12"`` or ``true``
is treated as invalid input rather than coerced. Infinity and NaN are
rejected too.
"""

from datetime import datetime
from typing import List

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# MENU
# =============================================================================

class MenuItemUpdate(BaseModel):
    """Request body for updating a menu item (the name comes from the URL)."""
    menu_type: str = Field(..., min_length=1, max_length=50, examples=["Beverage"])
    menu_price: float = Field(..., strict=True, allow_inf_nan=False, examples=[45.0])


class MenuItemCreate(MenuItemUpdate):
    """Request body for adding a menu item."""
    menu_name: str = Field(..., min_length=1, max_length=100, examples=["Butter Tea"])


class MenuItemResponse(BaseModel):
    """A menu row as stored."""
    model_config = ConfigDict(from_attributes=True)

    menu_name: str
    menu_type: str
    menu_price: float


# =============================================================================
# BILLS
# =============================================================================

class BillItemCreate(BaseModel):
    """
    Single line of a new bill.

    The front end posts items with PascalCase keys (``MenuName``, ``Price``,
    ...); snake_case keys are accepted as well.
    """
    model_config = ConfigDict(populate_by_name=True)

    menu_name: str = Field(..., alias="MenuName", min_length=1, max_length=100)
    price: float = Field(..., alias="Price", strict=True, allow_inf_nan=False)
    quantity: int = Field(..., alias="Quantity", strict=True)
    amount: float = Field(..., alias="Amount", strict=True, allow_inf_nan=False)


class BillCreate(BaseModel):
    """Request body for recording a bill together with its items."""
    table_name: str = Field(..., min_length=1, max_length=50, examples=["Table 4"])
    order_number: str = Field(..., min_length=1, max_length=50, examples=["ORD-0042"])
    bill_time: str = Field(..., min_length=1, max_length=20, examples=["19:45:10"])
    bill_date: str = Field(..., min_length=1, max_length=20, examples=["2024-03-14"])
    total_amount: float = Field(..., strict=True, allow_inf_nan=False, examples=[20.0])
    items: List[BillItemCreate]


class BillCreateResponse(BaseModel):
    """Identifier of the newly recorded bill."""
    billId: int


class BillItemResponse(BaseModel):
    menu_name: str
    price: float
    quantity: int
    amount: float


class BillResponse(BaseModel):
    """A bill with its items nested under it."""
    bill_id: int
    table_name: str
    order_number: str
    bill_time: str
    bill_date: str
    total_amount: float
    items: List[BillItemResponse] = Field(default_factory=list)


# =============================================================================
# SERVICE
# =============================================================================

class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    database: str
    timestamp: datetime
