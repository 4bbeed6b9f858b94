"""
LiveKit Test Bench - Main Application Entry Point

Operator backend for a LiveKit voice agent stack: places test calls and
browser sessions through the Control API, inspects and deletes live rooms,
and tails service logs from CloudWatch or the local docker-compose stack.
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from testbench import __version__
from testbench.core.config import settings
from testbench.core.logging import setup_logging, get_logger
from testbench.core.exceptions import TestBenchException, AuthenticationError
from testbench.api.routes import logs, calls, rooms, configs, activity, catalog, debug, health

# Setup logging
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler for startup and shutdown events
    """
    logger.info("=" * 60)
    logger.info("Starting LiveKit Test Bench")
    logger.info(f"Version: {__version__}")
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"LiveKit URL: {settings.livekit_url}")
    logger.info(f"Control API: {settings.control_api_base if settings.control_api_configured else '(not configured)'}")
    logger.info(f"CloudWatch logs: {'enabled' if settings.enable_cloudwatch_logs else 'disabled'}")
    logger.info(f"Local logs: {'enabled' if settings.enable_local_logs and not settings.is_production else 'disabled'}")
    logger.info("=" * 60)

    if not settings.livekit_configured:
        logger.warning("LIVEKIT_API_KEY / LIVEKIT_API_SECRET not set; room endpoints will fail")

    yield

    logger.info("Shutting down LiveKit Test Bench")


# Create FastAPI application
app = FastAPI(
    title="LiveKit Test Bench API",
    description="""
    ## LiveKit Voice Agent Test Bench

    Backend for operators testing a LiveKit voice agent deployment.

    ### Features

    - **Outbound Calls**: Trigger agent calls to a phone number through the Control API
    - **Web Sessions**: Get a join token for a browser voice session
    - **Rooms**: List live rooms with participants and tracks, delete rooms
    - **Logs**: Tail CloudWatch or local docker-compose logs per service
    - **Configs**: Manage SIP trunk and agent configs per phone number
    - **Activity**: Recent operator actions per page

    ### Authentication

    When `CLOUDWATCH_LOGS_TOKEN` is set, `/api/cloudwatch-logs` requires
    `Authorization: Bearer <token>`.
    """,
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json"
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Custom Exception Handlers
@app.exception_handler(AuthenticationError)
async def auth_exception_handler(request: Request, exc: AuthenticationError):
    """Handle authentication errors"""
    logger.warning(f"AuthenticationError: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict(),
        headers={"WWW-Authenticate": "Bearer"}
    )


@app.exception_handler(TestBenchException)
async def test_bench_exception_handler(request: Request, exc: TestBenchException):
    """Handle application exceptions"""
    logger.warning(f"TestBenchException: {exc.error_code} - {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Handle all unhandled exceptions"""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={
            "error": "An unexpected error occurred",
            "code": "INTERNAL_ERROR",
            "details": {"exception": str(exc)} if settings.debug else {}
        }
    )


# Include routers
app.include_router(health.router)
app.include_router(logs.router, prefix="/api")
app.include_router(calls.router, prefix="/api")
app.include_router(rooms.router, prefix="/api")
app.include_router(configs.router, prefix="/api")
app.include_router(activity.router, prefix="/api")
app.include_router(catalog.router, prefix="/api")
app.include_router(debug.router, prefix="/api")


@app.get("/", include_in_schema=False)
async def root():
    return JSONResponse({
        "service": "LiveKit Test Bench",
        "version": __version__,
        "docs": "/docs",
        "health": "/health"
    })


@app.get("/api")
async def api_info():
    """API information endpoint"""
    return {
        "service": "LiveKit Test Bench API",
        "version": __version__,
        "docs": "/docs",
        "health": "/health",
        "endpoints": {
            "calls": "/api/make-call",
            "web_sessions": "/api/start-web-session",
            "rooms": "/api/rooms",
            "cloudwatch_logs": "/api/cloudwatch-logs",
            "local_logs": "/api/local-logs",
            "sip_configs": "/api/sip-configs",
            "agent_configs": "/api/agent-configs",
            "numbers": "/api/numbers",
            "stats": "/api/stats",
            "activity": "/api/activity",
            "models": "/api/models",
            "plugins": "/api/plugins",
            "debug": "/api/debug"
        }
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "testbench.main:app",
        host=settings.server_host,
        port=settings.server_port,
        reload=settings.debug
    )
