"""
VegeFood Storefront - FastAPI Application

Serves the catalog, auth and cart endpoints under /api.
"""
import os

from dotenv import find_dotenv, load_dotenv

# Settings are read from os.environ, so .env has to be loaded before
# any vegefood module configures itself (logging reads LOG_LEVEL on import).
load_dotenv(find_dotenv(usecwd=True))

from fastapi import FastAPI, Request  # noqa: E402
from fastapi.middleware.cors import CORSMiddleware  # noqa: E402
from fastapi.responses import JSONResponse  # noqa: E402

from vegefood import __version__  # noqa: E402
from vegefood.errors import CatalogError  # noqa: E402
from vegefood.logging import get_logger  # noqa: E402
from vegefood.routers import router as api_router  # noqa: E402

logger = get_logger(__name__)


def create_app() -> FastAPI:
    # Picks up a .env created after import; existing variables win
    load_dotenv(find_dotenv(usecwd=True))

    app = FastAPI(
        title="VegeFood Storefront",
        version=__version__,
    )

    allowed_origins = os.environ.get("CORS_ORIGINS", "*").split(",")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[origin.strip() for origin in allowed_origins],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(CatalogError)
    async def catalog_error_handler(request: Request, exc: CatalogError):
        logger.error(f"Catalog error on {request.url.path}: {exc}")
        return JSONResponse(status_code=503, content={"detail": "Catalog unavailable"})

    @app.get("/api/health")
    async def health_check():
        return {"status": "ok", "version": __version__}

    app.include_router(api_router)
    return app


app = create_app()
