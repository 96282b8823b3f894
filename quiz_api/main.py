# main.py
import logging
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from quiz_api.core.config import Settings, get_settings
from quiz_api.core.database import Base, create_db_engine, create_session_factory
from quiz_api.core.errors import register_exception_handlers
from quiz_api.routes.catalog import router as catalog_router
from quiz_api.routes.history import router as history_router
from quiz_api.routes.quiz import router as quiz_router
from quiz_api.services.feedback import FeedbackService

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    logging.basicConfig(level=settings.LOG_LEVEL)

    app = FastAPI(title=settings.PROJECT_NAME)

    engine = create_db_engine(settings)
    if settings.AUTO_CREATE_TABLES:
        Base.metadata.create_all(bind=engine)

    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)
    # One LLM client per process, shared by every request
    app.state.feedback_service = FeedbackService(settings)

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    @app.get("/")
    def read_root():
        return {"message": f"{settings.PROJECT_NAME} is running"}

    @app.get("/health")
    def health():
        return {"status": "ok"}

    app.include_router(quiz_router)
    app.include_router(history_router)
    app.include_router(catalog_router)

    logger.info(f"🚀 {settings.PROJECT_NAME} started ({settings.ENVIRONMENT})")
    return app


if __name__ == "__main__":
    # Development server
    uvicorn.run(
        "quiz_api.main:create_app",
        factory=True,
        host="127.0.0.1",
        port=8000,
        reload=True,
        log_level="info"
    )
