# server/main.py

import logging
from contextlib import asynccontextmanager
import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

import config
from api import auth, manage
from core.errors import StorageError
from core.store import CredentialStore
from database import create_db_engine


logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

ROUTES = [
    ("GET", "/api/auth/health"),
    ("POST", "/api/auth/get-user-token"),
    ("GET", "/api/auth/create-db"),
]


def create_app(store: CredentialStore, seed_count: int = config.SEED_USER_COUNT) -> FastAPI:
    """
    Builds the application around an already constructed store.
    The store is initialized before the first request; if that fails the
    server does not start.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        store.initialize()
        logger.info("Database ready at %s", store.engine.url.render_as_string(hide_password=True))
        for method, path in ROUTES:
            logger.info("  %-4s %s", method, path)
        yield
        store.engine.dispose()

    app = FastAPI(lifespan=lifespan)
    app.state.store = store
    app.state.seed_count = seed_count

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(StorageError)
    async def storage_error_handler(request: Request, exc: StorageError):
        logger.error("Storage failure on %s %s", request.method, request.url.path, exc_info=exc)
        return PlainTextResponse("Internal server error", status_code=500)

    app.include_router(auth.router)
    app.include_router(manage.router)

    return app


app = create_app(CredentialStore(create_db_engine(config.DATABASE_URL)))


if __name__ == "__main__":
    logger.info("Starting mini auth server on http://%s:%d", config.HOST, config.PORT)
    uvicorn.run(app, host=config.HOST, port=config.PORT, log_config=None)
