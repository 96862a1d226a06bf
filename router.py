# router.py
from __future__ import annotations

import logging
import uuid
from typing import Optional

from constants import UI_TEXT
from errors import ContextCorruptedError, ExternalServiceError, SessionCorruptedError
from external import call_external
from flows import BookingFlows, TurnResult
from intents import IntentClassifier
from models import ChatResponse, Intent, SessionState
from session_store import BaseStore, SessionLocks

logger = logging.getLogger(__name__)

AI_SERVICE = "ai_service"


class DialogueRouter:
    """
    Ponto de entrada do motor de diálogo.

    Por turno: resolve/cria a sessão, carrega o estado (sob o lock da sessão),
    classifica o intent, despacha para o fluxo ou para o fallback de IA,
    grava o novo estado e devolve o envelope de resposta.
    """

    def __init__(
        self,
        store: BaseStore,
        tickets,
        ai,
        classifier: Optional[IntentClassifier] = None,
        locks: Optional[SessionLocks] = None,
        timeout: float = 10.0,
        flows: Optional[BookingFlows] = None,
    ):
        self.store = store
        self.ai = ai
        self.classifier = classifier or IntentClassifier()
        self.locks = locks or SessionLocks()
        self.timeout = timeout
        self.flows = flows or BookingFlows(tickets, timeout=timeout)
        self._handlers = {
            Intent.SEARCH_FLIGHTS: self.flows.search,
            Intent.BOOK_FLIGHT: self.flows.select_flight,
            Intent.WAITING_FOR_PASSENGER_COUNT: self.flows.passenger_count,
            Intent.WAITING_FOR_PASSENGER_DETAILS: self.flows.passenger_details,
            Intent.CONFIRM_RESERVATION: self.flows.confirm,
        }

    async def process_message(self, user_id: str, message: str, session_id: Optional[str] = None) -> ChatResponse:
        sid = session_id or str(uuid.uuid4())
        async with self.locks.hold(sid):
            result = await self._turn(sid, user_id, message)
            self.store.set(sid, result.state)
        logger.info("💬 session=%s user=%s -> %s", sid, user_id, result.state.describe())
        return ChatResponse(response=result.reply, session_id=sid, action_data=result.action_data)

    async def _turn(self, sid: str, user_id: str, message: str) -> TurnResult:
        try:
            state = self.store.get(sid) or SessionState()
        except SessionCorruptedError:
            logger.exception("Stored session %s is corrupted – resetting", sid)
            return TurnResult(UI_TEXT["context_lost"], SessionState())

        intent = self.classifier.classify(message, state.intent)
        logger.info("session=%s current=%s classified=%s", sid, state.intent.value, intent.value)

        if intent == Intent.GREETING:
            return TurnResult(UI_TEXT["greeting"], SessionState())
        if intent == Intent.HELP:
            return TurnResult(UI_TEXT["help"], SessionState())

        handler = self._handlers.get(intent)
        if handler is None:
            # ExternalServiceError do AI Service sobe para o chamador, sem gravar estado
            reply = await call_external(AI_SERVICE, self.ai.generate_response, message, timeout=self.timeout)
            return TurnResult(reply, SessionState())

        try:
            return await handler(message, state, user_id)
        except ContextCorruptedError:
            logger.exception("Context for session %s does not fit %s – resetting", sid, state.intent.value)
            return TurnResult(UI_TEXT["context_lost"], SessionState())
        except ExternalServiceError as exc:
            logger.error("❌ %s failed during %s for session %s: %s", exc.service, intent.value, sid, exc)
            return TurnResult(UI_TEXT["service_unavailable"], SessionState())
