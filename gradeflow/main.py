# /gradeflow/main.py

# --- Core FastAPI Imports ---
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

# --- Application-specific Imports ---
from .core.config import settings
from .core.exceptions import GradeflowError
from .core.logging_config import logger, set_user_id
from .db.database import init_db
from .routers import (
    auth_router,
    users_router,
    tasks_router,
    polls_router,
    tickets_router,
    dashboard_router,
)

# --- Application Lifecycle Management ---
@asynccontextmanager
async def lifespan(app: FastAPI):
    # This code runs ONCE when the application starts up.
    init_db()
    logger.info(
        f"Gradeflow API started (poll visibility: {settings.POLL_VISIBILITY_MODE.value}, "
        f"task transitions: {settings.TASK_TRANSITION_MODE.value})"
    )
    yield

# --- FastAPI Application Instance Creation ---
app = FastAPI(
    title="Gradeflow Onboarding API",
    description="Tasks, polls and support tickets for admins, teachers and students.",
    version="1.0.0",
    lifespan=lifespan
)

# --- Middleware Configuration ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    # Propagates into the threadpool that runs sync dependencies and endpoints.
    set_user_id(request.headers.get("x-user-id", ""))
    started = time.perf_counter()
    response = await call_next(request)
    duration_ms = (time.perf_counter() - started) * 1000
    logger.info(
        f"HTTP {request.method} {request.url.path} - {response.status_code} ({duration_ms:.2f}ms)",
        extra={
            "event_type": "http_request",
            "http_method": request.method,
            "http_path": request.url.path,
            "http_status": response.status_code,
            "duration_ms": duration_ms,
        }
    )
    return response

# --- Domain Error Translation ---
@app.exception_handler(GradeflowError)
async def gradeflow_error_handler(request: Request, exc: GradeflowError):
    """Maps every domain error onto its HTTP status in one place."""
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict(),
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=True)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})

# --- API Router Inclusion ---
app.include_router(auth_router.router, prefix="/api/auth", tags=["Auth"])
app.include_router(users_router.router, prefix="/api/users", tags=["Users"])
app.include_router(tasks_router.router, prefix="/api/tasks", tags=["Tasks"])
app.include_router(polls_router.router, prefix="/api/polls", tags=["Polls"])
app.include_router(tickets_router.router, prefix="/api/tickets", tags=["Support Tickets"])
app.include_router(dashboard_router.router, prefix="/api/dashboard", tags=["Dashboard"])

# --- Root / Health Check Endpoint ---
@app.get("/", tags=["Health Check"])
async def read_root():
    """A simple health check endpoint to confirm the API is online."""
    return {"status": "Gradeflow API is running!", "version": app.version}
