import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from superwallet import __version__
from superwallet.core.config import get_settings
from superwallet.core.container import ApplicationContainer, get_container
from superwallet.core.log_config import configure_logging
from superwallet.infrastructure.database import dispose_engine, init_db
from superwallet.interfaces.http import create_api_router
from superwallet.interfaces.http.errors import register_exception_handlers

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await init_db()
    logger.info("Super Wallet API %s started (%s)", __version__, app.state.container.settings.environment)
    yield
    await dispose_engine()


def create_app(container: Optional[ApplicationContainer] = None) -> FastAPI:
    settings = container.settings if container is not None else get_settings()
    configure_logging(settings)

    app = FastAPI(
        title=settings.project_name,
        description="Crypto wallet, payments and Korean tax refund backend",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.container = container or get_container()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)
    app.include_router(create_api_router(settings.api_prefix))

    @app.get("/health", tags=["health"])
    async def health() -> dict:
        return {"status": "ok", "version": __version__}

    return app


app = create_app()


def run() -> None:
    import uvicorn

    settings = get_settings()
    uvicorn.run("superwallet.main:app", host=settings.host, port=settings.port, reload=settings.server.reload)


if __name__ == "__main__":
    run()
