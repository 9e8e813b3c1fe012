from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from contextlib import asynccontextmanager
import logging

from app.core.config import settings
from app.core.exceptions import INVALID_RGB_MESSAGE
from app.routers import foundation
from app.services.catalog_service import catalog_rgb_matrix, get_catalog

# Configure logging
logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

MATCH_PATH = f"{settings.API_PREFIX}{foundation.router.prefix}"


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: build the read-only catalog matrix once before serving requests
    catalog_rgb_matrix()
    logger.info(f"Shade catalog loaded with {len(get_catalog())} shades.")

    yield

    logger.info("Shutting down application...")


app = FastAPI(
    title=settings.PROJECT_NAME,
    debug=settings.DEBUG,
    lifespan=lifespan
)

# Enable CORS for frontend development
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Every error leaves the API as {"error": "..."}."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None)
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    # Unparseable match bodies are reported exactly like a bad rgb field
    if request.url.path == MATCH_PATH:
        message = INVALID_RGB_MESSAGE
    else:
        message = "Invalid request parameters"
    logger.debug(f"Request validation failed on {request.url.path}: {exc.errors()}")
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": message})


# Unified API Prefix: /api
app.include_router(foundation.router, prefix=settings.API_PREFIX)


@app.get("/health")
async def health_check():
    return {"status": "ok", "project": settings.PROJECT_NAME}


@app.get("/")
async def root():
    return {"message": f"{settings.PROJECT_NAME} API is running", "docs": "/docs"}
