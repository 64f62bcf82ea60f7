# server/main.py

import logging
from contextlib import asynccontextmanager
from datetime import timedelta
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from api import auth, users, symptoms
from config import Settings, configure_logging, get_settings
from core.errors import install_error_handlers
from core.security import TokenService
import database


logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    database.init_db()
    logger.info("Database ready")
    yield


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.LOG_LEVEL)
    database.configure_engine(settings.DATABASE_URL)

    app = FastAPI(title="Symptom Tracker API", lifespan=lifespan)
    app.state.token_service = TokenService(
        secret=settings.JWT_SECRET,
        algorithm=settings.JWT_ALGORITHM,
        ttl=timedelta(seconds=settings.TOKEN_TTL_SECONDS),
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.CLIENT_URL],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    install_error_handlers(app)

    app.include_router(auth.router)
    app.include_router(users.router)
    app.include_router(symptoms.router)

    @app.get("/", response_class=PlainTextResponse)
    def root():
        return "API is working"

    @app.get("/health")
    def health():
        return {"status": "ok"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=get_settings().PORT)
