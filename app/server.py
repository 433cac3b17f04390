"""
Primary FastAPI application entry point
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.config import settings
from app.api.deps import initialize_connections, close_connections
from app.api.api import api_router
from app.core.security import RoleHeaderPolicy
from app.data_access.mongo_client import StoreUnavailableError
from app.services.validation import MovieValidationError

logger = logging.getLogger(__name__)
logger.info("Starting Movie Catalog API server...")


# Define application lifespan
@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup; a failed connection aborts it
    logger.info("Application startup: Initializing connections...")
    await initialize_connections(app)
    yield
    # Shutdown
    logger.info("Application shutdown: Closing connections...")
    await close_connections(app)


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    docs_url=f"{settings.API_PREFIX}/docs",
    redoc_url=f"{settings.API_PREFIX}/redoc",
    openapi_url=f"{settings.API_PREFIX}/openapi.json",
    lifespan=lifespan
)

app.state.authorization_policy = RoleHeaderPolicy(
    header_name=settings.ADMIN_ROLE_HEADER,
    required_role=settings.ADMIN_ROLE_VALUE,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.BACKEND_CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# --- Error responses: every body carries a `message` ---

@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(MovieValidationError)
async def movie_validation_exception_handler(request: Request, exc: MovieValidationError):
    logger.info(f"Rejected {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"message": "Validation failed", "errors": exc.errors},
    )


@app.exception_handler(RequestValidationError)
async def request_validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = [
        {"field": ".".join(str(part) for part in err["loc"]), "message": err["msg"]}
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"message": "Validation failed", "errors": errors},
    )


@app.exception_handler(StoreUnavailableError)
async def store_unavailable_exception_handler(request: Request, exc: StoreUnavailableError):
    logger.error(f"Store failure on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": "Database error"},
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": "Internal server error"},
    )


# Include routers
app.include_router(api_router, prefix=settings.API_PREFIX)


# Root endpoint
@app.get("/", status_code=status.HTTP_200_OK)
async def root():
    """Root endpoint to confirm the API is running."""
    return {"message": "Welcome to the Movie Catalog API"}


# For local development
if __name__ == "__main__":
    import uvicorn
    uvicorn.run("app.server:app", host=settings.HOST, port=settings.PORT, reload=True)
