"""
Main Application Entry Point.

This module initializes the FastAPI application, configures middleware (CORS,
request tracing), registers the exception handlers and includes all API
routers. It serves as the root of the web server.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from legal_aid.core.database import async_session_maker, init_db
from legal_aid.core.database.repositories import build_repos
from legal_aid.core.logging_config import get_logger, setup_logging
from legal_aid.core.monitoring import initialize_logfire

from .api.v1 import (
    admin,
    auth,
    billing,
    client,
    coordinator,
    documents,
    health,
    intake,
    kebeles,
    lawyer,
    notifications,
    offices,
    reports,
    roles,
)
from .core import constant
from .core.config import settings
from .exception_handlers import setup_exception_handlers
from .middleware import LogfireMiddleware
from .services.access import AccessService

# Initialize logging
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifespan events.

    On startup the schema is created when ``AUTO_CREATE_TABLES`` is set, the
    system roles and permission catalogue are seeded and the bootstrap
    administrator is created when configured.
    """
    # Startup
    try:
        logger.info("Starting up Legal Aid Server...")
        await init_db()
        async with async_session_maker() as session:
            access = AccessService(build_repos(session))
            await access.seed_defaults()
            await access.ensure_bootstrap_admin(settings.bootstrap_admin_email, settings.bootstrap_admin_password)
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error(f"Database initialization failed: {e}", exc_info=True)

    yield

    # Shutdown
    logger.info("Shutting down Legal Aid Server...")


app = FastAPI(
    title=constant.PROJECT_NAME,
    description="""
    Legal Aid Server API

    Backend of the legal aid platform: public client intake, case management
    portals for clients, coordinators, lawyers and kebele managers, appointment
    scheduling, document verification, billing through Chapa and admin reports.
    """,
    version=constant.VERSION,
    openapi_url=f"{constant.API_V1_STR}/openapi.json",
    docs_url=f"{constant.API_V1_STR}/docs",
    redoc_url=f"{constant.API_V1_STR}/redoc",
    lifespan=lifespan,
)

cors = settings.cors
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors.origins,
    allow_credentials=cors.allow_credentials,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(LogfireMiddleware)

setup_exception_handlers(app)
initialize_logfire(app)


app.include_router(health.router, tags=["health"])
app.include_router(auth.router, prefix=f"{constant.API_V1_STR}/auth", tags=["auth"])
app.include_router(intake.router, prefix=f"{constant.API_V1_STR}/intake", tags=["intake"])
app.include_router(client.router, prefix=f"{constant.API_V1_STR}/client", tags=["client"])
app.include_router(coordinator.router, prefix=f"{constant.API_V1_STR}/coordinator", tags=["coordinator"])
app.include_router(lawyer.router, prefix=f"{constant.API_V1_STR}/lawyer", tags=["lawyer"])
app.include_router(admin.router, prefix=f"{constant.API_V1_STR}/admin", tags=["admin"])
app.include_router(roles.router, prefix=f"{constant.API_V1_STR}/roles", tags=["roles"])
app.include_router(offices.router, prefix=f"{constant.API_V1_STR}/offices", tags=["offices"])
app.include_router(kebeles.router, prefix=f"{constant.API_V1_STR}/kebeles", tags=["kebeles"])
app.include_router(billing.router, prefix=f"{constant.API_V1_STR}/billing", tags=["billing"])
app.include_router(documents.router, prefix=f"{constant.API_V1_STR}/documents", tags=["documents"])
app.include_router(notifications.router, prefix=f"{constant.API_V1_STR}/notifications", tags=["notifications"])
app.include_router(reports.router, prefix=f"{constant.API_V1_STR}/reports", tags=["reports"])
