import logging

# Log configuration (before other imports)
# ruff: noqa: E402
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    force=True
)

from contextlib import asynccontextmanager  # noqa: E402

from fastapi import FastAPI, Request  # noqa: E402
from fastapi.exceptions import RequestValidationError  # noqa: E402
from fastapi.middleware.cors import CORSMiddleware  # noqa: E402
from starlette.exceptions import HTTPException as StarletteHTTPException  # noqa: E402

from app.api.base import api_router  # noqa: E402
from app.api.responses import error_response  # noqa: E402
from app.config import get_settings  # noqa: E402
from app.dependencies import get_scheduler  # noqa: E402
from app.services.dream_analysis import new_request_id  # noqa: E402
from app.services.dream_analysis.errors import NotFoundError  # noqa: E402

logger = logging.getLogger(__name__)

# Extension pages, localhost and loopback; requests without Origin pass untouched
ALLOWED_ORIGIN_REGEX = r".*(chrome-extension://|localhost|127\.0\.0\.1).*"


@asynccontextmanager
async def lifespan(app: FastAPI):
    scheduler = get_scheduler()
    scheduler.restore()
    scheduler.start_loop()
    yield
    await scheduler.shutdown()


app = FastAPI(
    title="Lifeclock Backend API",
    description="Segmented timer and dream analysis backend for the Lifeclock extension",
    version=get_settings().api_version,
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origin_regex=ALLOWED_ORIGIN_REGEX,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", "X-User-ID"],
)

# Include all API routes
app.include_router(api_router)


@app.exception_handler(RequestValidationError)
async def handle_request_validation_error(request: Request, exc: RequestValidationError):
    details = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ()) if part != "body"]
        details.append(f"{'.'.join(loc) or 'body'}: {err.get('msg')}")
    return error_response(400, f"Validation failed: {', '.join(details)}", new_request_id())


@app.exception_handler(StarletteHTTPException)
async def handle_http_exception(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 404:
        error = NotFoundError()
        return error_response(error.status_code, error.message)
    return error_response(exc.status_code, str(exc.detail))


@app.exception_handler(Exception)
async def handle_unexpected_error(request: Request, exc: Exception):
    logger.error(f"Unhandled error: {exc}")
    return error_response(500, "Internal server error")


@app.get("/")
def read_root():
    return {
        "message": "Lifeclock Backend API",
        "docs": "/docs",
        "version": get_settings().api_version
    }
