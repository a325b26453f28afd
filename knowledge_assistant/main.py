"""
Application entrypoint.

Creates the FastAPI app, wires the routers, configures logging and CORS,
creates the database tables and the AI gateway at startup.

Run with ``uvicorn knowledge_assistant.main:app``.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from knowledge_assistant.api.ai_service import AIService
from knowledge_assistant.api.fast_api import chat_router, user_router
from knowledge_assistant.database.config.config import settings
from knowledge_assistant.database.core.db import init_db

logging.basicConfig(level=settings.LOG_LEVEL.upper(), format="[%(asctime)s] %(levelname)s - %(message)s")
logger = logging.getLogger("knowledge_assistant")


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    app.state.ai_service = AIService()
    logger.info("Startup complete: model=%s db=%s", settings.OPEN_AI_MODEL, settings.DB_DRIVER_NAME)
    yield


def create_app() -> FastAPI:
    app = FastAPI(title="Knowledge Assistant API", version="1.0.0", lifespan=lifespan)

    origins = [o.strip() for o in settings.FRONTEND_URL.split(",") if o.strip()]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(user_router)
    app.include_router(chat_router)

    @app.get("/health")
    def health():
        return {"status": "ok"}

    return app


app = create_app()
