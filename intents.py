import logging
import re
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

from models import Intent
from nlp_utils import (
    extract_flight_number,
    extract_search_params,
    has_integer_token,
    is_affirmative,
    is_negative,
    normalize_text,
)

logger = logging.getLogger(__name__)

# ---- Palavras-chave (sobre texto normalizado, sem acentos) ----
GREETING_RE = re.compile(r"\b(ola|oi|bom dia|boa tarde|boa noite)\b")
# "socorro" depois de "de"/"para" é a cidade (Socorro-SP), não pedido de ajuda
HELP_RE = re.compile(r"\b(ajuda|help|help me)\b|(?<!de )(?<!para )\bsocorro\b")
SEARCH_RE = re.compile(
    r"\b(busca\w*|pesquis\w*|procur\w*|achar|acha|encontra\w*)\s+(?:um\s+|uma\s+)?(voos?|passage\w*)\b"
)
BOOK_RE = re.compile(
    r"\b(reserv\w*|compr\w*)\s+(?:um\s+|uma\s+|o\s+|a\s+)?(voo\w*|passage\w*)\b"
)

# intents em que um fluxo de reserva está em andamento
BOOKING_IN_PROGRESS = frozenset({
    Intent.WAITING_FOR_PASSENGER_COUNT,
    Intent.WAITING_FOR_PASSENGER_DETAILS,
    Intent.CONFIRM_RESERVATION,
})


@dataclass(frozen=True)
class IntentRule:
    name: str
    predicate: Callable[[str, Intent], bool]
    intent: Intent


def _has_valid_route(message: str) -> bool:
    return extract_search_params(message).is_valid


def _has_flight_number(message: str) -> bool:
    return extract_flight_number(message) is not None


# A ordem importa: a primeira regra que casar vence.
DEFAULT_RULES: Sequence[IntentRule] = (
    IntentRule(
        "confirm_answer",
        lambda m, cur: cur == Intent.CONFIRM_RESERVATION and (is_affirmative(m) or is_negative(m)),
        Intent.CONFIRM_RESERVATION,
    ),
    IntentRule(
        "passenger_field",
        lambda m, cur: cur == Intent.WAITING_FOR_PASSENGER_DETAILS,
        Intent.WAITING_FOR_PASSENGER_DETAILS,
    ),
    IntentRule(
        "passenger_count",
        lambda m, cur: cur == Intent.WAITING_FOR_PASSENGER_COUNT and has_integer_token(m),
        Intent.WAITING_FOR_PASSENGER_COUNT,
    ),
    IntentRule("greeting", lambda m, cur: bool(GREETING_RE.search(normalize_text(m))), Intent.GREETING),
    IntentRule("help", lambda m, cur: bool(HELP_RE.search(normalize_text(m))), Intent.HELP),
    IntentRule(
        "search_keywords",
        lambda m, cur: bool(SEARCH_RE.search(normalize_text(m)))
        or (cur == Intent.WAITING_FOR_FLIGHT_DETAILS and _has_valid_route(m)),
        Intent.SEARCH_FLIGHTS,
    ),
    IntentRule(
        "book_keywords",
        lambda m, cur: bool(BOOK_RE.search(normalize_text(m)))
        or (cur == Intent.WAITING_FOR_FLIGHT_SELECTION and _has_flight_number(m)),
        Intent.BOOK_FLIGHT,
    ),
    IntentRule(
        "flight_number_reply",
        lambda m, cur: cur == Intent.WAITING_FOR_FLIGHT_SELECTION and _has_flight_number(m),
        Intent.BOOK_FLIGHT,
    ),
    IntentRule(
        "route_reply",
        lambda m, cur: cur == Intent.WAITING_FOR_FLIGHT_DETAILS and _has_valid_route(m),
        Intent.SEARCH_FLIGHTS,
    ),
    # frase completa "de X para Y em data" sem reserva em andamento
    IntentRule(
        "cold_route",
        lambda m, cur: cur not in BOOKING_IN_PROGRESS and _has_valid_route(m),
        Intent.SEARCH_FLIGHTS,
    ),
)


class IntentClassifier:
    """
    Classificador determinístico: lista ordenada de regras (predicado -> intent).
    Qualquer objeto com ``classify(message, current_intent)`` pode substituí-lo
    no DialogueRouter.
    """

    def __init__(self, rules: Optional[Sequence[IntentRule]] = None) -> None:
        self.rules: List[IntentRule] = list(rules if rules is not None else DEFAULT_RULES)

    def classify(self, message: str, current_intent: Intent = Intent.NONE) -> Intent:
        text = (message or "").strip().lower()
        for rule in self.rules:
            if rule.predicate(text, current_intent):
                logger.debug("rule %s matched -> %s", rule.name, rule.intent.value)
                return rule.intent
        return Intent.NONE
