import logging
from contextlib import asynccontextmanager
from datetime import timedelta
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import Settings
from .db import build_engine, build_session_factory, init_db
from .errors import install_exception_handlers
from .limiter import configure_limiter, limiter
from .routers import admin, auth, bookings, hotels
from .security import TokenService
from .services.accounts import ensure_default_admin

logger = logging.getLogger("hotelbook.startup")


def _configure_logging(settings: Settings) -> None:
    level = logging.DEBUG if settings.DEBUG else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    # Align uvicorn loggers with our level
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        logging.getLogger(name).setLevel(level)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the application around one explicit ``Settings`` instance."""
    settings = settings or Settings()
    _configure_logging(settings)

    engine = build_engine(settings)
    session_factory = build_session_factory(engine)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Starting %s (DEBUG=%s)", settings.APP_NAME, settings.DEBUG)
        init_db(engine)
        db = session_factory()
        try:
            ensure_default_admin(db, settings)
        finally:
            db.close()
        logger.info("Startup tasks complete.")
        yield
        engine.dispose()

    app = FastAPI(
        title=settings.APP_NAME,
        version="0.1.0",
        description=f"{settings.APP_NAME}: hotel listings, accounts and bookings JSON API.",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = session_factory
    app.state.tokens = TokenService(settings.SECRET_KEY, ttl=timedelta(hours=settings.TOKEN_TTL_HOURS))

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.limiter = configure_limiter(settings)
    install_exception_handlers(app)

    app.include_router(hotels.router)
    app.include_router(auth.router)
    app.include_router(admin.router)
    app.include_router(bookings.router)

    @app.get("/healthz")
    @limiter.exempt
    def healthz():
        return {"status": "ok"}

    return app


app = create_app()
