"""Main FastAPI application for Gemini Gateway."""

import logging
import os
from contextlib import asynccontextmanager
from logging.handlers import RotatingFileHandler
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import __version__
from .config import settings
from .routes import generate
from .services.gemini import GeminiGateway


def setup_logging():
    """Configure logging with console and optional file output."""
    log_level = logging.DEBUG if settings.DEBUG_MODE else logging.INFO
    log_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler()
    console_handler.setLevel(log_level)
    console_handler.setFormatter(logging.Formatter(log_format))
    root_logger.addHandler(console_handler)

    if settings.LOG_TO_FILE:
        # Relative LOG_DIR is resolved against the project root
        if os.path.isabs(settings.LOG_DIR):
            log_dir = Path(settings.LOG_DIR)
        else:
            log_dir = Path(__file__).parent.parent / settings.LOG_DIR

        log_dir.mkdir(parents=True, exist_ok=True)
        log_file = log_dir / settings.LOG_FILE

        # 10MB per file, 5 backups
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=10 * 1024 * 1024,
            backupCount=5,
            encoding="utf-8",
        )
        file_handler.setLevel(log_level)
        file_handler.setFormatter(logging.Formatter(log_format))
        root_logger.addHandler(file_handler)

        return str(log_file)

    return None


log_file_path = setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    logger.info("Starting Gemini Gateway...")

    # Raises StartupConfigMissing and aborts startup when the key is absent
    api_key = settings.require_api_key()
    gateway = GeminiGateway(
        api_key=api_key,
        model=settings.GEMINI_MODEL,
        base_url=settings.GEMINI_BASE_URL,
        timeout=settings.REQUEST_TIMEOUT,
    )
    generate.init_gateway(gateway)

    logger.info(f"Gemini API server is running at http://localhost:{settings.PORT}")
    logger.info(f"Model: {gateway.model}")
    logger.info(f"Upload staging directory: {settings.UPLOAD_DIR}")
    if log_file_path:
        logger.info(f"Log file: {log_file_path}")

    yield

    logger.info("Shutting down...")
    generate.init_gateway(None)
    await gateway.aclose()


app = FastAPI(
    title="Gemini Gateway",
    description="HTTP gateway forwarding text prompts and uploaded media to Gemini",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(generate.router)


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}


@app.get("/")
async def root():
    """Root endpoint with API information."""
    return {
        "name": "Gemini Gateway",
        "version": __version__,
        "model": settings.GEMINI_MODEL,
        "endpoints": {
            "text": "/generate-text",
            "image": "/generate-from-image",
            "document": "/generate-from-document",
            "audio": "/generate-from-audio",
            "health": "/health",
        },
        "documentation": "/docs",
    }


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Report malformed request bodies as ``{"error"}``."""
    details = "; ".join(
        f"{'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}" for err in exc.errors()
    )
    logger.warning(f"Invalid request to {request.url.path}: {details}")
    return JSONResponse(status_code=400, content={"error": details})


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Report HTTP errors as ``{"error"}``."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler."""
    logger.error(f"Unhandled exception: {exc}")
    return JSONResponse(status_code=500, content={"error": str(exc)})


def main():
    """Run the server."""
    import uvicorn

    # Fail before binding the port when the key is missing
    settings.require_api_key()

    uvicorn.run(
        "gemini_gateway.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG_MODE,
    )


if __name__ == "__main__":
    main()
