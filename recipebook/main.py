# Recipe Book Main Entry Point
import logging
import sys
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from .db import create_tables
from .errors import RecipeBookError, recipe_book_error_handler, request_validation_error_handler
from .limiter import limiter
from .middleware.locale import LocaleMiddleware
from .settings import settings
from .routers.admin_pages import router as admin_pages_router
from .routers.dev import router as dev_router
from .routers.images import router as images_router
from .routers.pages import router as pages_router
from .routers.ready import router as ready_router
from .routers.recipes import router as recipes_router

# Configure structured logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[logging.StreamHandler(sys.stdout)]
)
logger = logging.getLogger("recipebook")


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.auto_create_tables:
        create_tables()
        logger.info("Database tables ensured")
    yield


app = FastAPI(
    title="Recipe Book API",
    version="1.0.0",
    description="Recipe catalog with English/Chinese translation and image uploads",
    docs_url="/api/docs",
    redoc_url=None,
    openapi_url="/api/openapi.json",
    lifespan=lifespan,
)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_exception_handler(RecipeBookError, recipe_book_error_handler)
app.add_exception_handler(RequestValidationError, request_validation_error_handler)


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=500,
        content={"error": "internal_error", "message": "An unexpected error occurred"},
    )


def cors_origins() -> list[str]:
    if settings.cors_allow_all:
        return ["*"]
    return [*settings.cors_assistant_origins, *settings.cors_extra_origins]


app.add_middleware(SlowAPIMiddleware)
app.add_middleware(LocaleMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins(),
    allow_credentials=not settings.cors_allow_all,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(ready_router, prefix="/api", tags=["ready"])
app.include_router(recipes_router, prefix="/api", tags=["recipes"])
app.include_router(images_router, prefix="/api", tags=["images"])
app.include_router(dev_router, prefix="/api", tags=["dev"])
app.include_router(admin_pages_router)
app.include_router(pages_router)

# Uploaded images: <static_root>/images/... served at /images/...
images_dir = Path(settings.static_root) / "images"
images_dir.mkdir(parents=True, exist_ok=True)
app.mount("/images", StaticFiles(directory=str(images_dir)), name="images")
