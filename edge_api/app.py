from fastapi import FastAPI

from edge_api.core.config import get_settings
from edge_api.core.cors import EdgeCorsMiddleware
from edge_api.core.errors import install_error_handlers
from edge_api.core.logging_setup import configure_logging
from edge_api.routers import auth as auth_router
from edge_api.routers import cards as cards_router
from edge_api.routers import settings as settings_router
from edge_api.routers import support as support_router
from edge_api.routers import system as system_router
from edge_api.routers import transactions as transactions_router


def create_app() -> FastAPI:
    """Factory compatible with uvicorn/gunicorn (``--factory``)."""
    configure_logging()
    settings = get_settings()
    docs_url = None if settings.app_env == "prod" else "/docs"
    app = FastAPI(title="Fintech Admin Edge API", docs_url=docs_url, redoc_url=None)
    app.add_middleware(EdgeCorsMiddleware)
    install_error_handlers(app)

    app.include_router(auth_router.router)
    app.include_router(settings_router.router)
    app.include_router(transactions_router.router)
    app.include_router(support_router.router)
    app.include_router(cards_router.router)
    app.include_router(system_router.router)
    return app


app = create_app()
