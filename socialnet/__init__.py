# Uvicorn application factory <https://www.uvicorn.org/#application-factories>
from contextlib import asynccontextmanager

from fastapi import FastAPI
from redis.exceptions import RedisError
from starlette.middleware.authentication import AuthenticationMiddleware

from socialnet.auth import SessionAuthBackend
from socialnet.logging import logger
from socialnet.middlewares.correlation_id import CorrelationIDMiddleware
from socialnet.middlewares.logging_context import LoggingContextMiddleware
from socialnet.middlewares.prometheus import PrometheusMiddleware
from socialnet.routing import collect_subrouters
from socialnet.settings import app_settings
from socialnet.storage.db import Database
from socialnet.storage.redis import close_redis
from socialnet.utils.error_handler import register_exception_handlers


async def startup(app: FastAPI) -> None:
    """
    Attach a store handle to the application and prepare the schema.

    A handle already present on ``app.state.db`` (e.g. one built by a
    test) is reused as is.
    """
    if getattr(app.state, "db", None) is None:
        app.state.db = Database.from_settings(app_settings)

    db: Database = app.state.db
    await db.wait_until_ready()
    if app_settings.DB_CREATE_TABLES:
        await db.create_tables()
        logger.info("Initialized database and tables")

    logger.info("Application startup complete")


async def shutdown(app: FastAPI) -> None:
    logger.info("Application shutdown initiated")

    try:
        await close_redis()
    except (RedisError, OSError) as ex:
        logger.error(f"Error closing Redis connection: {ex}")

    db: Database | None = getattr(app.state, "db", None)
    if db is not None:
        await db.dispose()

    logger.info("Application shutdown complete")


@asynccontextmanager
async def lifespan(app: FastAPI):
    await startup(app)
    yield
    await shutdown(app)


def application(database: Database | None = None) -> FastAPI:
    """
    Initializes and configures the FastAPI application.

    Args:
        database: Store handle to use. When omitted, one is built from
            settings during startup.

    The routers collected by ``collect_subrouters()`` are included and the
    following middleware is installed (outermost first):
    - `CorrelationIDMiddleware`: request correlation IDs.
    - `AuthenticationMiddleware`: session lookup via `SessionAuthBackend`.
    - `LoggingContextMiddleware`: endpoint/method/user in log records.
    - `PrometheusMiddleware`: HTTP request metrics.
    """
    app = FastAPI(
        title="socialnet",
        description="Social network API with cursor-paginated feeds",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.db = database

    register_exception_handlers(app)

    app.include_router(collect_subrouters())

    # Middlewares (execute in REVERSE order of registration)
    app.add_middleware(PrometheusMiddleware)
    app.add_middleware(LoggingContextMiddleware)
    app.add_middleware(AuthenticationMiddleware, backend=SessionAuthBackend())
    app.add_middleware(CorrelationIDMiddleware)

    return app
