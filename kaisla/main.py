"""FastAPI application entrypoint. No business logic; only wiring, middleware and error mapping."""

from dotenv import load_dotenv

load_dotenv()

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from kaisla.api import router as api_router
from kaisla.core.config import settings
from kaisla.core.errors import ServiceError
from kaisla.core.logging import configure_logging
from kaisla.services.uploads import UPLOADS_URL_PATH

configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    Path(settings.UPLOAD_DIR).mkdir(parents=True, exist_ok=True)
    logger.info("Serving %s at %s", settings.UPLOAD_DIR, UPLOADS_URL_PATH)
    yield


app = FastAPI(
    title="Atelier Kaisla API",
    version="0.1.0",
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


@app.exception_handler(ServiceError)
async def service_error_handler(_request: Request, exc: ServiceError) -> JSONResponse:
    """Render service errors as {"detail": message} with the error's status code."""
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(_request: Request, exc: RequestValidationError) -> JSONResponse:
    """Invalid bodies, form fields and parameters are a 400 carrying pydantic's error list."""
    return JSONResponse(status_code=400, content={"detail": jsonable_encoder(exc.errors())})


app.include_router(api_router, prefix=settings.API_PREFIX)

# The directory is created at startup, after the mount is declared.
app.mount(
    UPLOADS_URL_PATH,
    StaticFiles(directory=settings.UPLOAD_DIR, check_dir=False),
    name="uploads",
)


@app.get("/")
def root() -> dict[str, str]:
    """Root route; minimal payload for discovery."""
    return {"message": "Atelier Kaisla API"}
