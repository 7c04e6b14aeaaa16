import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from inventory_api.lib.config import settings
from inventory_api.lib.database import init_db
from inventory_api.lib.errors import InventoryError
from inventory_api.lib.logging_config import configure_logging
from inventory_api.features.health.routes import router as health_router
from inventory_api.features.companies.routes import router as companies_router
from inventory_api.features.buildings.routes import router as buildings_router
from inventory_api.features.floor_plans.routes import router as floor_plans_router
from inventory_api.features.apartments.routes import router as apartments_router
from inventory_api.services.storage_service import get_storage

configure_logging()
logger = logging.getLogger(__name__)

HTTP_ERROR_CODES = {
    400: "BAD_REQUEST",
    404: "NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
    409: "CONFLICT",
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create tables on startup when enabled."""
    if settings.auto_create_tables:
        await init_db()
    yield


app = FastAPI(
    title="Apartment Inventory API",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ============================================
# ERROR ENVELOPE
# ============================================

@app.exception_handler(InventoryError)
async def inventory_error_handler(request: Request, exc: InventoryError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Report the first failing field only."""
    errors = exc.errors()
    message = "Invalid request."
    if errors:
        first = errors[0]
        field = ".".join(str(part) for part in first.get("loc", ()) if part not in ("body", "path", "query", "form"))
        text = str(first.get("msg", message)).replace("Value error, ", "")
        message = f"{field}: {text}" if field else text

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"status": "ERROR", "error": "VALIDATION_ERROR", "message": message},
    )


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    if isinstance(exc.detail, dict):
        code = exc.detail.get("error", HTTP_ERROR_CODES.get(exc.status_code, "ERROR"))
        message = exc.detail.get("message", "")
    else:
        code = HTTP_ERROR_CODES.get(exc.status_code, "ERROR")
        message = str(exc.detail)

    return JSONResponse(
        status_code=exc.status_code,
        content={"status": "ERROR", "error": code, "message": message},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(Exception)
async def server_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)

    content = {
        "status": "ERROR",
        "error": "SERVER_ERROR",
        "message": "An error occurred while processing your request.",
    }
    if settings.is_development:
        content["details"] = str(exc)

    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=content)


# ============================================
# ROUTES
# ============================================

app.include_router(health_router, prefix="/api", tags=["Health"])
app.include_router(companies_router, prefix="/api", tags=["Companies"])
app.include_router(buildings_router, prefix="/api", tags=["Buildings"])
app.include_router(floor_plans_router, prefix="/api", tags=["Floor Plans"])
app.include_router(apartments_router, prefix="/api", tags=["Apartments"])

app.mount("/uploads", StaticFiles(directory=str(get_storage().storage.root)), name="uploads")


@app.get("/")
async def root():
    return {"message": "Apartment Inventory API", "docs": "/docs"}
