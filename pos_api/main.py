"""
FastAPI Application Entry Point

Restaurant POS Backend - menu catalog, table status and billing.

Endpoints:
    - GET/POST /api/menu: List and add menu items
    - PUT/DELETE /api/menu/{menu_name}: Edit and remove menu items
    - GET /api/tablestat: Table status rows
    - POST /api/bill: Record a bill with its items
    - GET /api/bill: All bills with nested items
    - GET /api/bill/order_number/{order_number}: Bills for one order
    - GET /api/bill/bill_id/{bill_id}: A single bill
    - GET /health: System health check

Errors are returned as plain text: 400 ``Invalid input`` for anything that
fails validation, 404 with a short message, and 500 ``Server error`` for any
database failure (details are logged, never sent to the caller).
"""

import logging
from datetime import datetime
from typing import Any
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Depends, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from sqlalchemy import select, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.exceptions import HTTPException as StarletteHTTPException

from pos_api.core.config import get_settings, setup_logging
from pos_api.database import get_db, init_db, engine
from pos_api.models import MenuItem, Bill, BillItem
from pos_api.schemas import (
    MenuItemCreate,
    MenuItemUpdate,
    MenuItemResponse,
    BillCreate,
    BillCreateResponse,
    BillResponse,
    HealthResponse,
)
from pos_api.services.billing import bill_rows_query, group_bill_rows

# Initialize configuration and logging
settings = get_settings()
setup_logging()
logger = logging.getLogger(__name__)

SERVER_ERROR = "Server error"
INVALID_INPUT = "Invalid input"
MENU_NOT_FOUND = "Menu item not found"


# =============================================================================
# APPLICATION LIFECYCLE
# =============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application startup and shutdown events.
    """
    # Startup
    logger.info("=" * 60)
    logger.info(f"🚀 Starting {settings.app_name}")
    logger.info(f"   Version: {settings.app_version}")
    logger.info(f"   Environment: {settings.env_mode.value}")
    logger.info(f"   Debug: {settings.debug}")
    logger.info("=" * 60)

    if settings.db_create_tables:
        await init_db()
        logger.info("✅ Database initialized")

    yield  # Application runs

    # Shutdown
    logger.info("Shutting down...")
    await engine.dispose()
    logger.info("✅ Cleanup complete")


# =============================================================================
# APPLICATION INSTANCE
# =============================================================================

app = FastAPI(
    title=settings.app_name,
    description="Menu, table status and billing API for the restaurant point of sale.",
    version=settings.app_version,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def server_error(action: str, exc: Exception) -> HTTPException:
    """Log a database failure and build the generic 500 for the caller."""
    logger.exception(f"Error {action}: {exc}")
    return HTTPException(status_code=500, detail=SERVER_ERROR)


async def fetch_bills(db: AsyncSession, *criteria) -> list[dict[str, Any]]:
    """Run the bill/item join with optional filters and nest the rows."""
    query = bill_rows_query()
    if criteria:
        query = query.where(*criteria)
    result = await db.execute(query)
    return group_bill_rows(result.mappings().all())


# =============================================================================
# ROOT & HEALTH ENDPOINTS
# =============================================================================

@app.get("/", tags=["Root"])
async def root() -> dict[str, str]:
    """API root with navigation links."""
    return {
        "message": f"Welcome to {settings.app_name}",
        "version": settings.app_version,
        "environment": settings.env_mode.value,
        "documentation": "/docs",
        "health": "/health",
    }


@app.get(
    "/health",
    response_model=HealthResponse,
    tags=["Health"],
    summary="System Health Check",
)
async def health_check(
    db: AsyncSession = Depends(get_db)
) -> HealthResponse:
    """Verify the database is reachable."""
    db_status = "healthy"
    try:
        await db.execute(select(1))
    except SQLAlchemyError as e:
        db_status = f"unhealthy: {e.__class__.__name__}"
        logger.error(f"Database health check failed: {e}")

    return HealthResponse(
        status="operational" if db_status == "healthy" else "degraded",
        database=db_status,
        timestamp=datetime.now(),
    )


# =============================================================================
# MENU ENDPOINTS
# =============================================================================

@app.get(
    "/api/menu",
    response_model=list[MenuItemResponse],
    tags=["Menu"],
    summary="List Menu Items",
)
async def list_menu(
    db: AsyncSession = Depends(get_db),
) -> list[MenuItem]:
    """Return every menu item, unfiltered."""
    try:
        result = await db.execute(select(MenuItem))
        return list(result.scalars().all())
    except SQLAlchemyError as e:
        raise server_error("listing menu", e)


@app.post(
    "/api/menu",
    response_model=MenuItemResponse,
    status_code=201,
    tags=["Menu"],
    summary="Add Menu Item",
)
async def create_menu_item(
    item_data: MenuItemCreate,
    db: AsyncSession = Depends(get_db),
) -> MenuItem:
    """Add a dish to the menu and return it as stored."""
    try:
        item = MenuItem(
            menu_name=item_data.menu_name,
            menu_type=item_data.menu_type,
            menu_price=item_data.menu_price,
        )
        db.add(item)
        await db.commit()
        await db.refresh(item)
    except SQLAlchemyError as e:
        await db.rollback()
        raise server_error(f"adding menu item {item_data.menu_name!r}", e)

    logger.info(f"Menu item {item.menu_name!r} added")
    return item


@app.put(
    "/api/menu/{menu_name}",
    response_model=MenuItemResponse,
    tags=["Menu"],
    summary="Edit Menu Item",
)
async def update_menu_item(
    menu_name: str,
    item_data: MenuItemUpdate,
    db: AsyncSession = Depends(get_db),
) -> MenuItem:
    """Change the type and price of an existing dish."""
    try:
        item = await db.get(MenuItem, menu_name)
        if item is None:
            raise HTTPException(status_code=404, detail=MENU_NOT_FOUND)

        item.menu_type = item_data.menu_type
        item.menu_price = item_data.menu_price
        await db.commit()
        await db.refresh(item)
    except SQLAlchemyError as e:
        await db.rollback()
        raise server_error(f"updating menu item {menu_name!r}", e)

    logger.info(f"Menu item {menu_name!r} updated")
    return item


@app.delete(
    "/api/menu/{menu_name}",
    status_code=204,
    response_class=Response,
    tags=["Menu"],
    summary="Remove Menu Item",
)
async def delete_menu_item(
    menu_name: str,
    db: AsyncSession = Depends(get_db),
) -> Response:
    """Remove a dish from the menu."""
    try:
        item = await db.get(MenuItem, menu_name)
        if item is None:
            raise HTTPException(status_code=404, detail=MENU_NOT_FOUND)

        await db.delete(item)
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        raise server_error(f"deleting menu item {menu_name!r}", e)

    logger.info(f"Menu item {menu_name!r} deleted")
    return Response(status_code=204)


# =============================================================================
# TABLE STATUS ENDPOINTS
# =============================================================================

@app.get(
    "/api/tablestat",
    tags=["Tables"],
    summary="List Table Status",
)
async def list_table_status(
    db: AsyncSession = Depends(get_db),
) -> list[dict[str, Any]]:
    """Return the table status rows exactly as stored."""
    try:
        result = await db.execute(text("SELECT * FROM tablestat"))
        return [dict(row) for row in result.mappings().all()]
    except SQLAlchemyError as e:
        raise server_error("listing table status", e)


# =============================================================================
# BILL ENDPOINTS
# =============================================================================

@app.post(
    "/api/bill",
    response_model=BillCreateResponse,
    status_code=201,
    tags=["Bills"],
    summary="Record Bill",
)
async def create_bill(
    bill_data: BillCreate,
    db: AsyncSession = Depends(get_db),
) -> BillCreateResponse:
    """
    Record a bill and its items.

    The bill row and every item row are committed together; if any insert
    fails nothing is kept.
    """
    try:
        bill = Bill(
            table_name=bill_data.table_name,
            order_number=bill_data.order_number,
            bill_time=bill_data.bill_time,
            bill_date=bill_data.bill_date,
            total_amount=bill_data.total_amount,
        )
        db.add(bill)
        await db.flush()  # assigns bill.bill_id

        if not bill_data.items:
            logger.warning(f"No items to insert for bill ID: {bill.bill_id}")

        for item in bill_data.items:
            db.add(BillItem(
                bill_id=bill.bill_id,
                menu_name=item.menu_name,
                price=item.price,
                quantity=item.quantity,
                amount=item.amount,
            ))

        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        raise server_error(f"inserting bill for order {bill_data.order_number!r}", e)

    logger.info(f"Bill #{bill.bill_id} recorded with {len(bill_data.items)} item(s)")
    return BillCreateResponse(billId=bill.bill_id)


@app.get(
    "/api/bill",
    response_model=list[BillResponse],
    tags=["Bills"],
    summary="List Bills",
)
async def list_bills(
    db: AsyncSession = Depends(get_db),
) -> list[dict[str, Any]]:
    """All bills with their items, oldest first."""
    try:
        return await fetch_bills(db)
    except SQLAlchemyError as e:
        raise server_error("listing bills", e)


@app.get(
    "/api/bill/order_number/{order_number}",
    response_model=list[BillResponse],
    tags=["Bills"],
    summary="Bills by Order Number",
)
async def get_bills_by_order_number(
    order_number: str,
    db: AsyncSession = Depends(get_db),
) -> list[dict[str, Any]]:
    """Bills recorded under one order number."""
    try:
        bills = await fetch_bills(db, Bill.order_number == order_number)
    except SQLAlchemyError as e:
        raise server_error(f"fetching bills for order {order_number!r}", e)

    if not bills:
        raise HTTPException(
            status_code=404,
            detail="No bill found with the specified order number.",
        )
    return bills


@app.get(
    "/api/bill/bill_id/{bill_id}",
    response_model=list[BillResponse],
    tags=["Bills"],
    summary="Bill by ID",
)
async def get_bill_by_id(
    bill_id: int,
    db: AsyncSession = Depends(get_db),
) -> list[dict[str, Any]]:
    """A single bill, returned as a one-element list."""
    try:
        bills = await fetch_bills(db, Bill.bill_id == bill_id)
    except SQLAlchemyError as e:
        raise server_error(f"fetching bill #{bill_id}", e)

    if not bills:
        raise HTTPException(
            status_code=404,
            detail="No bill found with the specified bill ID.",
        )
    return bills


# =============================================================================
# ERROR HANDLERS
# =============================================================================

@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> PlainTextResponse:
    """Reject malformed requests with a bare 400."""
    logger.warning(f"Invalid input on {request.method} {request.url.path}: {exc.errors()}")
    return PlainTextResponse(INVALID_INPUT, status_code=400)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> PlainTextResponse:
    """Render HTTP errors as plain text."""
    return PlainTextResponse(str(exc.detail), status_code=exc.status_code, headers=exc.headers)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> PlainTextResponse:
    """Catch-all exception handler."""
    logger.exception(f"Unhandled exception: {exc}")
    return PlainTextResponse(SERVER_ERROR, status_code=500)
