import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from blog_api import database
from blog_api.config import settings
from blog_api.exception_handlers import register_exception_handlers
from blog_api.middleware.logging import StructuredLoggingMiddleware
from blog_api.repositories import (
    InMemoryPostRepository,
    InMemoryStore,
    InMemoryTagRepository,
    PostRepository,
    SQLAlchemyPostRepository,
    SQLAlchemyTagRepository,
    TagRepository,
)
from blog_api.routes import posts, tags

logger = logging.getLogger(__name__)


def build_repositories(backend: str) -> tuple[PostRepository, TagRepository]:
    """Return the post and tag repositories for the configured backend."""
    if backend == "memory":
        store = InMemoryStore()
        return InMemoryPostRepository(store), InMemoryTagRepository(store)
    if backend == "database":
        return (
            SQLAlchemyPostRepository(database.AsyncSessionLocal),
            SQLAlchemyTagRepository(database.AsyncSessionLocal),
        )
    raise ValueError(f"Unknown repository backend: {backend!r}")


def create_app(
    post_repository: Optional[PostRepository] = None,
    tag_repository: Optional[TagRepository] = None,
) -> FastAPI:
    """
    Create the FastAPI application.

    Pass both repositories to wire the app against them (tests hand in the
    in-memory pair); otherwise settings.repository_backend decides.
    """
    if (post_repository is None) != (tag_repository is None):
        raise ValueError("post_repository and tag_repository must be given together")

    uses_database = post_repository is None
    if uses_database:
        post_repository, tag_repository = build_repositories(settings.repository_backend)
        uses_database = settings.repository_backend == "database"

    app = FastAPI(
        title=settings.app_name,
        description="Blog posts and tags backed by a relational store",
        debug=settings.debug,
        version=settings.app_version,
    )
    app.state.post_repository = post_repository
    app.state.tag_repository = tag_repository

    app.add_middleware(StructuredLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_methods=["*"],
        allow_headers=["Content-Type"],
    )

    register_exception_handlers(app)

    app.include_router(posts.router, tags=["Posts"])
    app.include_router(tags.router, tags=["Tags"])

    @app.get("/", tags=["Root"])
    async def root():
        return {"message": "Welcome to the Blog API"}

    if uses_database:
        @app.on_event("startup")
        async def startup_event():
            logger.info("Starting up the application...")
            await database.init_models()

        @app.on_event("shutdown")
        async def shutdown_event():
            logger.info("Shutting down the application...")
            await database.engine.dispose()

    if settings.debug:
        logger.info(f"Running in {settings.environment} mode")
        logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO)

    return app
