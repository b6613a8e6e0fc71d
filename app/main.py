# app/main.py
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response, status
from fastapi.exceptions import RequestValidationError

from app.core.config import settings
from app.core.errors import DownstreamError, SignupError
from app.core.logging import configure_logging
from app.db.mongo import close_client, ensure_indexes, get_client, get_master_db, init_client
from app.db.repositories import OrganizationRepository, SignupRepository
from app.routes.signup import router as signup_router

configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    # startup: create client and verify connection
    init_client()
    try:
        await get_client().admin.command("ping")
        await ensure_indexes(get_master_db())
        logger.info("Connected to MongoDB")
    except Exception:
        logger.exception("Mongo ping failed")
    yield
    # shutdown: close client
    close_client()
    logger.info("MongoDB connection closed")

app = FastAPI(title="Tenant Signup Service", lifespan=lifespan)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    # only log locations, inputs may contain passwords
    logger.info("rejected malformed request to %s: %s", request.url.path, [e.get("loc") for e in exc.errors()])
    return Response(status_code=status.HTTP_400_BAD_REQUEST)


@app.exception_handler(SignupError)
async def signup_error_handler(request: Request, exc: SignupError):
    # error responses never carry a body
    if isinstance(exc, DownstreamError):
        logger.error("%s failed: %s", request.url.path, exc, exc_info=exc)
    else:
        logger.info("%s answered %d: %s", request.url.path, exc.status_code, exc)
    return Response(status_code=exc.status_code)


@app.get("/help")
async def root():
    return {"message": "Tenant Signup Service is running."}

@app.get("/ping")
async def ping():
    db = get_master_db()
    return {
        "message": "pong",
        "organizations": await OrganizationRepository(db).count(),
        "pending_signups": await SignupRepository(db).count(),
    }

app.include_router(signup_router)
