# file: main.py
from __future__ import annotations

import logging
from typing import Optional

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ai_service import make_ai_service
from config import Settings
from errors import ExternalServiceError
from models import ChatRequest, ChatResponse
from router import DialogueRouter
from session_store import SessionLocks, make_store
from ticket_service import make_ticket_service

# ──────────────────────────────────────────────────────────────────────────────
# .env + settings
load_dotenv()

logger = logging.getLogger(__name__)


def build_router(settings: Settings) -> DialogueRouter:
    return DialogueRouter(
        store=make_store(settings),
        tickets=make_ticket_service(settings),
        ai=make_ai_service(settings),
        locks=SessionLocks(),
        timeout=settings.SERVICE_TIMEOUT_SEC,
    )


def create_app(settings: Optional[Settings] = None, router: Optional[DialogueRouter] = None) -> FastAPI:
    settings = settings or Settings()
    logging.basicConfig(level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))

    app = FastAPI(title="Flight Booking Assistant")
    app.state.settings = settings
    app.state.router = router or build_router(settings)

    # --- CORS a partir do env ---
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.ALLOWED_ORIGINS or []),
        allow_origin_regex=settings.ALLOWED_ORIGIN_REGEX,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
        max_age=600,
    )

    # ──────────────────────────────────────────────────────────────────────────
    @app.post("/chat", response_model=ChatResponse, response_model_exclude_none=True)
    async def chat_endpoint(body: ChatRequest, request: Request):
        if len(body.message) > settings.MAX_MESSAGE_CHARS:
            return JSONResponse(status_code=413, content={"error": "Mensagem muito longa"})
        try:
            return await request.app.state.router.process_message(body.user_id, body.message, body.session_id)
        except ExternalServiceError:
            logger.exception("External service failed for user %s", body.user_id)
            return JSONResponse(status_code=502, content={"error": "Serviço externo indisponível"})
        except Exception:
            logger.exception("Chat turn failed for user %s", body.user_id)
            return JSONResponse(status_code=500, content={"error": "Erro interno"})

    # ──────────────────────────────────────────────────────────────────────────
    @app.get("/")
    def root():
        return {"status": "ok"}

    @app.get("/health")
    def health():
        return {"status": "ok"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    _settings = app.state.settings
    uvicorn.run(app, host=_settings.HOST, port=_settings.PORT, log_level=_settings.LOG_LEVEL.lower())
