"""
Main FastAPI application for the Prompt Enhancer Service.
"""
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.config import settings
from app.database import check_db_connection, engine
from app.routes import auth, health, subscription, suggestions
from app.middleware.logging import RequestLoggingMiddleware
from app.schemas.suggestion import UpsellMode
from app.utils.logger import get_logger

logger = get_logger("main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.
    Handles startup and shutdown events.
    """
    logger.info("Starting Prompt Enhancer Service")
    logger.info(f"Environment: {'DEBUG' if settings.DEBUG else 'PRODUCTION'}")

    # Unknown upsell modes are a configuration error
    try:
        UpsellMode(settings.SUGGESTION_UPSELL_MODE)
    except ValueError as e:
        raise RuntimeError(
            f"Invalid SUGGESTION_UPSELL_MODE: {settings.SUGGESTION_UPSELL_MODE}"
        ) from e

    logger.info(
        f"Suggestion engine configured",
        upsell_mode=settings.SUGGESTION_UPSELL_MODE,
        free_cap=settings.FREE_SUGGESTION_CAP,
        premium_cap=settings.PREMIUM_SUGGESTION_CAP
    )

    # Not fatal: tier lookups degrade to free without a database
    if await check_db_connection():
        logger.info("Database connection established")
    else:
        logger.error("Failed to connect to database; all users will be served as free tier")

    yield

    logger.info("Shutting down Prompt Enhancer Service")
    await engine.dispose()


app = FastAPI(
    title="Prompt Enhancer Service",
    description="Prompt-improvement suggestions for AI chat platforms, gated by subscription tier",
    version="0.1.0",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)

app.add_middleware(RequestLoggingMiddleware)


def jsonable_errors(exc: RequestValidationError) -> list:
    """Validation errors reduced to location and message."""
    return [
        {"loc": list(error.get("loc", ())), "msg": error.get("msg", "")}
        for error in exc.errors()
    ]


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render HTTP errors as {"error": message}."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None)
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed bodies are client errors: 400 with the validation details."""
    logger.debug(f"Request validation failed", path=request.url.path, errors=len(exc.errors()))
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Invalid request body", "details": jsonable_errors(exc)}
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        f"Unhandled error",
        path=request.url.path,
        error=str(exc),
        exc_info=True
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error"}
    )


app.include_router(health.router, tags=["Health"])
app.include_router(
    suggestions.router,
    prefix="/suggestions",
    tags=["Suggestions"]
)
app.include_router(
    auth.router,
    prefix="/auth",
    tags=["Authentication"]
)
app.include_router(
    subscription.router,
    prefix="/subscription",
    tags=["Subscription"]
)


@app.get("/", include_in_schema=False)
async def root():
    """Root endpoint with service pointers."""
    return {
        "message": "Prompt Enhancer Service",
        "docs": "/docs",
        "health": "/health"
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.RELOAD,
        log_level=settings.LOG_LEVEL.lower()
    )
