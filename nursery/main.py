# nursery/main.py
from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from nursery.core.config import get_settings
from nursery.core.errors import ShopError, StoreError
from nursery.core.responses import send_response
from nursery.database import create_db_and_tables

# Import models so SQLModel metadata is populated before create_all()
from nursery.models import product as _product_models  # noqa: F401
from nursery.models import category as _category_models  # noqa: F401
from nursery.models import cart as _cart_models  # noqa: F401
from nursery.models import order as _order_models  # noqa: F401

# Routers
from nursery.routers.products import router as products_router
from nursery.routers.category import router as category_router
from nursery.routers.cart import router as cart_router
from nursery.routers.orders import router as orders_router

settings = get_settings()

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("uvicorn")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Startup:
      - Verify DB connectivity and create tables.
    """
    logger.info("🔄 Startup: Connecting to database...")
    try:
        create_db_and_tables()
        logger.info("✅ Startup: DB connection OK, tables verified.")
    except Exception as e:
        logger.error(f"❌ Startup: DB connection FAILED: {e}")
        raise
    yield


app = FastAPI(
    title=settings.PROJECT_NAME,
    version="0.1.0",
    lifespan=lifespan,
)


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# --- Error envelopes ---
# Every failure uses the same body as a success, with success=false.


@app.exception_handler(ShopError)
async def shop_error_handler(request: Request, exc: ShopError):
    body = send_response(False, exc.message, exc.data)
    # Keep the specific message even when there is no payload
    body["message"] = exc.message
    return JSONResponse(status_code=exc.status_code, content=body)


@app.exception_handler(SQLAlchemyError)
async def store_error_handler(request: Request, exc: SQLAlchemyError):
    logger.error(f"❌ Store error on {request.method} {request.url.path}: {exc}")
    return await shop_error_handler(request, StoreError())


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    body = send_response(False, "Invalid request", jsonable_encoder(exc.errors()))
    return JSONResponse(status_code=422, content=body)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    body = send_response(False, str(exc.detail), None)
    body["message"] = str(exc.detail)
    return JSONResponse(status_code=exc.status_code, content=body)


app.include_router(products_router, prefix=settings.API_PREFIX)
app.include_router(category_router, prefix=settings.API_PREFIX)
app.include_router(cart_router, prefix=settings.API_PREFIX)
app.include_router(orders_router, prefix=settings.API_PREFIX)


@app.get("/")
def root():
    """Health check endpoint."""
    return send_response(True, "Server is working", {"service": "nursery-backend"})
