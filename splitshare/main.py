import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from splitshare.api.v1.routes.balance import router as balance_router
from splitshare.api.v1.routes.expense import router as expense_router
from splitshare.api.v1.routes.group import router as group_router
from splitshare.api.v1.routes.system import router as system_router
from splitshare.core.config import Settings
from splitshare.core.db_check import wait_for_db
from splitshare.core.errors import AmountOutOfRangeError, NotFoundError, ValidationError
from splitshare.core.logging import configure_logging
from splitshare.db.session import build_engine, build_sessionmaker, create_tables

logger = logging.getLogger(__name__)


def register_exception_handlers(app: FastAPI):
    @app.exception_handler(ValidationError)
    async def validation_error(request: Request, exc: ValidationError):
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(NotFoundError)
    async def not_found(request: Request, exc: NotFoundError):
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(AmountOutOfRangeError)
    async def out_of_range(request: Request, exc: AmountOutOfRangeError):
        return JSONResponse(status_code=422, content={"detail": str(exc)})

    @app.exception_handler(RequestValidationError)
    async def bad_request(request: Request, exc: RequestValidationError):
        errors = [
            {"loc": list(e["loc"]), "msg": e["msg"], "type": e["type"]}
            for e in exc.errors()
        ]
        return JSONResponse(status_code=400, content={"detail": errors})


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or Settings()
    configure_logging(settings.LOG_LEVEL)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        engine = build_engine(settings.DATABASE_URL)
        await wait_for_db(engine, retries=settings.DB_CONNECT_RETRIES, delay=settings.DB_CONNECT_DELAY)
        await create_tables(engine)

        app.state.engine = engine
        app.state.session_factory = build_sessionmaker(engine)
        logger.info("Splitshare backend started (split mode: %s)", settings.SPLIT_MODE)
        try:
            yield
        finally:
            await engine.dispose()

    app = FastAPI(title="Splitshare Backend", lifespan=lifespan)
    app.state.settings = settings

    @app.get("/")
    async def root():
        return {"message": "Splitshare Backend is live"}

    app.include_router(system_router, prefix="/api/v1/system")
    app.include_router(group_router, prefix="/api/v1/groups")
    app.include_router(expense_router, prefix="/api/v1/expenses")
    app.include_router(balance_router, prefix="/api/v1/balances")

    register_exception_handlers(app)
    return app


def run():
    import uvicorn

    settings = Settings()
    uvicorn.run(create_app(settings), host=settings.HOST, port=settings.PORT, log_level=settings.LOG_LEVEL.lower())


if __name__ == "__main__":
    run()
