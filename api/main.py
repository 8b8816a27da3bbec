from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from companies import router as companies_router
from core import db, errors, observability, settings
from lookups import router as lookups_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    observability.setup_logging(settings.log_level(), settings.log_format())
    # One pool per process, handed to handlers through db.get_pool.
    app.state.pool = await db.create_pool()
    try:
        yield
    finally:
        await db.close_pool(app.state.pool)
        app.state.pool = None


def create_app() -> FastAPI:
    app = FastAPI(title="company-api", lifespan=lifespan)

    # Allow browser clients from the configured origins.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    errors.register_error_handlers(app)

    app.include_router(companies_router.router, prefix="/api", tags=["companies"])
    app.include_router(lookups_router.router, prefix="/api", tags=["lookups"])

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok"}

    return app


app = create_app()
