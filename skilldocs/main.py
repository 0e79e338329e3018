from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from skilldocs import __version__
from skilldocs.api.v1.middleware.error_handler import ErrorHandlerMiddleware
from skilldocs.api.v1.middleware.logging_middleware import LoggingMiddleware
from skilldocs.api.v1.router import v1_router
from skilldocs.config import settings
from skilldocs.utils.logging import get_logger, setup_logging


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(debug=settings.debug)
    logger = get_logger("startup")
    logger.info("Starting skill documentation service", version=__version__)

    from skilldocs.corpus.registry import SkillRegistry

    registry = SkillRegistry()
    registry.discover(*settings.skills_dirs)
    app.state.skills_registry = registry
    logger.info(
        "Skills registry initialized",
        skill_count=len(registry),
        load_failures=len(registry.failures),
    )

    yield

    logger.info("Shutting down")


def create_app() -> FastAPI:
    app = FastAPI(
        title="Skill Documentation Service",
        description="Browse and lint agent skill documents",
        version=__version__,
        lifespan=lifespan,
    )

    # Middleware is applied in reverse order -- outermost first.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )
    app.add_middleware(ErrorHandlerMiddleware)
    app.add_middleware(LoggingMiddleware)

    app.include_router(v1_router, prefix="/api/v1")

    return app


app = create_app()
