"""
Campus Events API - Event registration, geofenced attendance and certificates
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from atams.db import Base
from atams.logging import setup_logging_from_settings, get_logger
from atams.middleware import RequestIDMiddleware, create_rate_limit_middleware
from atams.exceptions import setup_exception_handlers
from atams.api import health_router

from app import models  # noqa: F401  registers tables on Base.metadata
from app.core.config import settings
from app.core.exceptions import setup_domain_exception_handlers
from app.db.session import engine
from app.services.notification_service import EmailNotifier
from app.api.v1.api import api_router

# Setup logging
setup_logging_from_settings(settings)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.DB_AUTO_CREATE:
        Base.metadata.create_all(bind=engine)
    app.state.notifier = EmailNotifier(settings)
    logger.info(
        "Application started",
        extra={'extra_data': {'app': settings.APP_NAME, 'version': settings.APP_VERSION}}
    )
    yield


# Create FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    debug=settings.DEBUG,
    description="Campus events: registrations, geofenced attendance and verifiable certificates",
    lifespan=lifespan,
    swagger_ui_parameters={
        "persistAuthorization": True,
    },
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
    allow_methods=settings.cors_methods_list,
    allow_headers=settings.cors_headers_list,
)

# Rate limiting and request ID middleware
app.add_middleware(create_rate_limit_middleware(settings))
app.add_middleware(RequestIDMiddleware)

# Exception handlers (domain handlers add the error code)
setup_exception_handlers(app)
setup_domain_exception_handlers(app)

# Include routers
app.include_router(health_router, prefix="/health", tags=["Health"])
app.include_router(api_router, prefix="/api/v1")


@app.get("/", tags=["Root"])
async def root():
    """API Root - Basic information"""
    return {"name": settings.APP_NAME, "version": settings.APP_VERSION}
