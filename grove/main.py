"""Grove API application: logging, middleware, error mapping and routers."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from grove import __version__
from grove.api.v1 import api_router
from grove.core.config import get_settings
from grove.core.errors import register_error_handlers
from grove.db.session import engine

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Tables come from Alembic migrations, never from create_all here
    logger.info("%s %s starting (%s)", settings.app_name, __version__, settings.environment)
    try:
        yield
    finally:
        await engine.dispose()
        logger.info("%s stopped", settings.app_name)


def create_application() -> FastAPI:
    app = FastAPI(
        title=settings.app_name,
        version=__version__,
        lifespan=lifespan,
        openapi_url=f"{settings.api_v1_prefix}/openapi.json",
        docs_url="/docs",
        redoc_url=None,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_error_handlers(app)
    app.include_router(api_router, prefix=settings.api_v1_prefix)

    @app.get("/", include_in_schema=False)
    async def root():
        return {"name": settings.app_name, "version": __version__, "docs": app.docs_url}

    return app


app = create_application()
