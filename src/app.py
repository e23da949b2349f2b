"""Main FastAPI application module.

This module initializes the FastAPI application, registers all route handlers
and serves the static front end.
"""

import logging
from pathlib import Path

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from core.logging_config import setup_logging
from config import (
    CORS_ALLOWED_ORIGINS,
    API_HOST,
    API_PORT,
    PUBLIC_DIR,
)
from core.database import init_db
from core.exceptions import ConfigurationError
from api.routes import auth, grading, leaderboard

# Setup logging
setup_logging()
logger = logging.getLogger(__name__)

# Initialize FastAPI application
app = FastAPI(
    title="Progress Tracker API",
    description="Student signup, login, answer grading and leaderboard.",
    version="1.0.0",
)

# Configure CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register route handlers
app.include_router(auth.router)
app.include_router(grading.router)
app.include_router(leaderboard.router)


@app.on_event("startup")
def startup_tasks() -> None:
    """Create database tables once, before the first request.

    A missing DATABASE_URL does not stop the server: grading still works and
    storage routes answer 500.
    """
    try:
        init_db()
    except ConfigurationError as e:
        logger.error("%s; storage endpoints will fail", e)
        return
    logger.info("Database schema ready")


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Render every HTTP error as ``{"error": "<message>"}``."""
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Malformed request bodies are client errors, reported as 400."""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Invalid request body"},
    )


@app.get("/api/health", summary="Health check", tags=["Health"])
def health() -> dict:
    """Health check endpoint.

    Returns:
        Dictionary with status "ok".
    """
    return {"status": "ok"}


@app.get("/{full_path:path}", include_in_schema=False)
def serve_frontend(full_path: str) -> FileResponse:
    """Serve a static file from the public directory, or index.html.

    Unknown ``/api`` paths are not rewritten to the front end.
    """
    if full_path == "api" or full_path.startswith("api/"):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not Found")

    public_dir = Path(PUBLIC_DIR).resolve()
    if full_path:
        candidate = (public_dir / full_path).resolve()
        if candidate.is_relative_to(public_dir) and candidate.is_file():
            return FileResponse(candidate)

    index_file = public_dir / "index.html"
    if not index_file.is_file():
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not Found")
    return FileResponse(index_file)


# --- Startup code for direct execution ---
if __name__ == "__main__":
    import uvicorn

    print(f"Server running on port {API_PORT}")
    uvicorn.run("app:app", host=API_HOST, port=API_PORT)
