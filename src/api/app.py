"""FastAPI application factory"""

import logging
import time
import sentry_sdk
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from src.adapter.services.mail_service import create_mail_service
from src.api.error import ClientError, client_error_handler
from src.api.routes import catalog, guests, invoices, kitchen_orders, reports, settings
from src.depends import create_engine, create_session_factory, init_db

logger = logging.getLogger(__name__)


def _init_sentry(config):
    sentry_sdk.init(
        dsn=config.DSN_SENTRY,
        environment=config.SENTRY_ENVIRONMENT,
        traces_sample_rate=0.1,
    )
    logger.info(f"Sentry enabled ({config.SENTRY_ENVIRONMENT})")


def create_app(config) -> FastAPI:
    logging.basicConfig(
        level=getattr(logging, str(config.LOG_LEVEL).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if config.ENABLE_SENTRY and config.DSN_SENTRY:
        _init_sentry(config)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        engine = create_engine(config)
        if config.DB_AUTO_CREATE:
            await init_db(engine, config)
        app.state.engine = engine
        app.state.session_factory = create_session_factory(engine)
        app.state.mail_service = create_mail_service(config)
        logger.info(f"Database engine started ({engine.url.get_backend_name()})")
        try:
            yield
        finally:
            await app.state.mail_service.close()
            await engine.dispose()
            logger.info("Database engine disposed")

    app = FastAPI(
        title="Resort Billing API",
        description="Kitchen orders, resort and kitchen invoices, and billing reports",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.config = config

    if config.CORS_ORIGINS:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=config.CORS_ORIGINS,
            allow_credentials=config.CORS_ALLOW_CREDENTIALS,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    if config.ENABLE_LOGGING_MIDDLEWARE:
        @app.middleware("http")
        async def log_requests(request: Request, call_next):
            started = time.perf_counter()
            response = await call_next(request)
            elapsed_ms = int((time.perf_counter() - started) * 1000)
            logger.info(
                f"{request.method} {request.url.path} -> {response.status_code} ({elapsed_ms}ms)"
            )
            return response

    app.add_exception_handler(ClientError, client_error_handler)

    for module in (kitchen_orders, invoices, reports, catalog, guests, settings):
        app.include_router(module.router, prefix=config.API_PREFIX)

    @app.get("/health", tags=["Health"])
    async def health():
        return {"status": "ok"}

    return app
