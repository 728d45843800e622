from dotenv import load_dotenv
load_dotenv()

import time
import uuid
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from api.v1.quick_edit import router as v1_quick_edit_router

# Setup logging
from core.logging_config import setup_logging, get_logger, LogContext
setup_logging()
logger = get_logger(__name__)

# Setup Sentry error tracking
from core.settings import settings
import sentry_sdk
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.starlette import StarletteIntegration
from sentry_sdk.integrations.sqlalchemy import SqlalchemyIntegration

from db.session import init_db
from services.field_module_loader_service import load_field_modules
from services.quick_edit_registry import QuickEditRegistry

if settings.SENTRY_DSN:
    sentry_sdk.init(
        dsn=settings.SENTRY_DSN,
        environment=settings.SENTRY_ENVIRONMENT,
        integrations=[
            FastApiIntegration(transaction_style="endpoint"),
            StarletteIntegration(transaction_style="endpoint"),
            SqlalchemyIntegration(),
        ],
        traces_sample_rate=0.1,
        attach_stacktrace=True,
        send_default_pii=False,
        before_send=lambda event, hint: filter_sentry_event(event, hint),
        auto_enabling_integrations=False,
    )
    logger.info_ctx("Sentry error tracking enabled", environment=settings.SENTRY_ENVIRONMENT)


def filter_sentry_event(event, hint):
    """Drop health check transactions"""
    if "transaction" in event and "/health" in event["transaction"]:
        return None
    return event


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Quick Edit API starting up")

    init_db()

    loaded = load_field_modules(app.state.quick_edit_registry, settings.field_modules)
    if loaded:
        logger.info(f"Quick edit field modules loaded: {', '.join(loaded)}")

    yield

    logger.info("Quick Edit API shutting down")

app = FastAPI(title="Quick Edit API", version="1.0.0", lifespan=lifespan)

# Created once per process, read by every request
app.state.quick_edit_registry = QuickEditRegistry()


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start_time = time.time()
    request_id = getattr(request.state, "request_id", "unknown")

    if request.url.path == "/health":
        return await call_next(request)

    with LogContext(request_id=request_id, path=request.url.path, method=request.method):
        logger.info(f"Request started: {request.method} {request.url.path}")

        response = await call_next(request)
        duration = round(time.time() - start_time, 3)

        with LogContext(
            request_id=request_id,
            path=request.url.path,
            method=request.method,
            status_code=response.status_code,
            duration=duration
        ):
            if response.status_code >= 500:
                logger.error(f"Request failed: {request.method} {request.url.path} - {response.status_code} in {duration}s")
            elif response.status_code >= 400:
                logger.warning(f"Request client error: {request.method} {request.url.path} - {response.status_code} in {duration}s")
            else:
                logger.info(f"Request completed: {request.method} {request.url.path} - {response.status_code} in {duration}s")

        return response


# Registered last so it runs first and the request id is set for log_requests
@app.middleware("http")
async def add_request_id(request: Request, call_next):
    request_id = str(uuid.uuid4())
    request.state.request_id = request_id

    response = await call_next(request)
    response.headers["X-Request-ID"] = request_id
    return response


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    request_id = getattr(request.state, "request_id", "unknown")

    with LogContext(
        request_id=request_id,
        path=request.url.path,
        method=request.method,
        error_type=type(exc).__name__,
        error_message=str(exc)
    ):
        logger.exception("Unhandled exception")

    return JSONResponse(
        status_code=500,
        content={
            "detail": "Internal server error",
            "request_id": request_id
        }
    )

app.include_router(v1_quick_edit_router, prefix="/api/v1/quick-edit")


@app.get("/health")
async def health():
    return {"status": "healthy", "service": "quick-edit-api"}
