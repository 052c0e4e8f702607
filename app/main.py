# Main application file



import logging
import time

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from app import models  # noqa: F401  (registers tables on Base)
from app.database import engine, Base
from app.core.rate_limiter import limiter
from app.core.config import settings
from app.core.errors import StoreUnavailableError, ValidationError
from app.routers import (
    auth,
    customers,
    staff,
    reports,
    exports,
    imports,
    uploads,
    health,
)


# LOGGING CONFIGURATION

logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s | %(levelname)s | %(message)s",
)

logger = logging.getLogger("app")


# DATABASE

if settings.STORE_BACKEND == "sql":
    Base.metadata.create_all(bind=engine)


# APP INIT

app = FastAPI(
    title="Salon Desk API",
    description="Customer visits, staff, import/export and revenue reports for a salon",
    version="1.0.0",
)



# CORS (Token-based auth)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=False,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["Authorization", "Content-Type"],
)


# RATE LIMITING

app.state.limiter = limiter
app.add_exception_handler(
    RateLimitExceeded,
    _rate_limit_exceeded_handler
)


# DOMAIN ERRORS

@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    return JSONResponse(status_code=400, content={"detail": str(exc)})


@app.exception_handler(StoreUnavailableError)
async def store_unavailable_handler(request: Request, exc: StoreUnavailableError):
    return JSONResponse(status_code=503, content={"detail": str(exc)})


# REQUEST LOGGING MIDDLEWARE

@app.middleware("http")
async def log_requests(request: Request, call_next):
    start_time = time.time()

    response = await call_next(request)

    duration = round((time.time() - start_time) * 1000, 2)

    logger.info(
        f"{request.method} {request.url.path} "
        f"Status: {response.status_code} "
        f"Time: {duration}ms"
    )

    return response


# ROUTERS

app.include_router(auth.router)
app.include_router(customers.router)
app.include_router(staff.router)
app.include_router(reports.router)
app.include_router(exports.router)
app.include_router(imports.router)
app.include_router(uploads.router)
app.include_router(health.router)


# UPLOADED PHOTOS (after the routers so POST /uploads/photo still routes)

app.mount(
    "/uploads",
    StaticFiles(directory=settings.UPLOAD_DIR, check_dir=False),
    name="uploads",
)


# ROOT

@app.get("/")
def root():
    logger.info("Health check endpoint called")
    return {"message": "Salon Desk API is running"}
