from datetime import datetime, timezone
import logging
import os

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
import uvicorn

from api import applications, stats  # importing routers
from schemas.applications import validation_messages
from store import ApplicationNotFound, StorageError, init_data_file

load_dotenv()

logger = logging.getLogger("uvicorn.error")

logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO").upper())

app = FastAPI(title="Career Tracker API")

frontend_url = os.getenv("FRONTEND_URL", "http://localhost:5173")
logging.info(f"Allowed frontend URL: {frontend_url}")
app.add_middleware(
    CORSMiddleware,
    allow_origins=[frontend_url],
    allow_credentials=True,
    allow_methods=["*"],  # Allow all HTTP methods (GET, POST, etc..)
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    logger.info(f"{request.method} {request.url.path}")
    return await call_next(request)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = validation_messages(exc.errors())
    logger.info(f"Validation failed for {request.method} {request.url.path}: {errors}")
    return JSONResponse(status_code=400, content={"error": "Validation failed", "errors": errors})


@app.exception_handler(ApplicationNotFound)
async def not_found_handler(request: Request, exc: ApplicationNotFound):
    return JSONResponse(
        status_code=404,
        content={"error": "Application not found", "id": exc.application_id},
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    # unknown paths and unsupported methods both count as unmatched routes
    if exc.status_code in (404, 405):
        return JSONResponse(
            status_code=404,
            content={"error": "Route not found", "path": request.url.path, "method": request.method},
        )
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})


@app.exception_handler(StorageError)
async def storage_error_handler(request: Request, exc: StorageError):
    logger.error(f"Storage error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=500,
        content={"error": "Failed to access application data", "message": str(exc)},
    )


@app.exception_handler(Exception)
async def global_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error: {exc}")
    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error", "message": "An unexpected error occurred"},
    )


@app.get("/", response_class=PlainTextResponse, include_in_schema=False)
def root():
    return "Welcome to Career Tracker API! Use /api/applications, /api/stats or /health"


@app.get("/health")
def health():
    return {
        "status": "ok",
        "message": "Server is running",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


# Include routers from separate modules.
app.include_router(applications.router)
app.include_router(stats.router)


def run():
    init_data_file()
    port = int(os.environ.get("PORT", 5001))
    host = os.environ.get("HOST", "localhost")
    uvicorn.run("main:app", host=host, port=port, reload=os.getenv("RELOAD", "false").lower() == "true")


if __name__ == "__main__":
    run()
