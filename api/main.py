import asyncio
import logging
from contextlib import asynccontextmanager

import asyncpg
from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from companies import router as companies_router
from core import config, db, errors
from core.log import configure_logging
from industries import router as industries_router
from invoices import router as invoices_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = config.load_settings()
    configure_logging(settings.log_level)

    # One pool per process, shared by every request through `db.get_database`.
    database = db.Database(
        settings.database_url,
        min_size=settings.db_pool_min_size,
        max_size=settings.db_pool_max_size,
        command_timeout=settings.db_command_timeout_s,
    )
    await database.connect()
    app.state.database = database
    try:
        yield
    finally:
        app.state.database = None
        await database.close()


def create_app(*, cors_allow_origins: tuple[str, ...] = config.DEFAULT_CORS_ORIGINS) -> FastAPI:
    app = FastAPI(title="BizTime API", lifespan=lifespan)

    # Allow local frontend dev server to call this API from the browser.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(cors_allow_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    errors.register_exception_handlers(app)

    app.include_router(companies_router.router, tags=["companies"])
    app.include_router(invoices_router.router, tags=["invoices"])
    app.include_router(industries_router.router, tags=["industries"])

    @app.get("/health")
    async def health(database: db.Database = Depends(db.get_database)):
        try:
            await database.ping()
        except (asyncpg.PostgresError, OSError, asyncio.TimeoutError):
            logger.warning("health_check_failed", exc_info=True)
            return JSONResponse(
                status_code=503,
                content={"status": "degraded", "database": "unavailable"},
            )
        return {"status": "ok", "database": "ok"}

    @app.get("/")
    def root() -> dict:
        return {"message": "biztime api"}

    return app


app = create_app(cors_allow_origins=config.cors_allow_origins())
