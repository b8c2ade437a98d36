import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from biblioteca.config import LOG_LEVEL
from biblioteca.database import dispose_engine
from biblioteca.middleware import RequestLoggingMiddleware
from biblioteca.routers import authors, books, health


def configure_logging(level: str = LOG_LEVEL) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    await dispose_engine()


def create_app() -> FastAPI:
    configure_logging()
    app = FastAPI(title="Biblioteca", version="0.1.0", lifespan=lifespan)
    app.add_middleware(RequestLoggingMiddleware)
    app.include_router(authors.router)
    app.include_router(books.router)
    app.include_router(health.router)
    return app


app = create_app()
