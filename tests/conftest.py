# tests/conftest.py
import asyncio
import time
from datetime import datetime
from decimal import Decimal

import pytest

from intents import IntentClassifier
from models import Flight
from router import DialogueRouter
from session_store import MemoryStore, SessionLocks

# --- Fakes para os serviços externos ---


def make_flight(number="GO34094", origin="SÃO PAULO", destination="RIO DE JANEIRO",
                dep=datetime(2025, 5, 28, 8, 0), arr=datetime(2025, 5, 28, 9, 5),
                price="350.00", airline="GOL"):
    return Flight(
        flight_number=number, origin=origin, destination=destination,
        departure_time=dep, arrival_time=arr, price=Decimal(price), airline=airline,
    )


class FakeTicketService:
    def __init__(self, flights=None, seats=None, delay=0.0, fail=False, book_result=True):
        self.flights = list(flights) if flights is not None else [make_flight()]
        self.seats = dict(seats) if seats is not None else {"GO34094": 120}
        self.delay = delay
        self.fail = fail
        self.book_result = book_result
        self.bookings = []
        self.searches = []

    def _maybe_fail(self):
        if self.delay:
            time.sleep(self.delay)
        if self.fail:
            raise ConnectionError("ticket backend down")

    def search_flights(self, origin, destination, when):
        self._maybe_fail()
        self.searches.append((origin, destination, when))
        return [
            f for f in self.flights
            if f.origin.upper() == origin.upper()
            and f.destination.upper() == destination.upper()
            and f.departure_time.date() == when
        ]

    def search_all_flights(self):
        self._maybe_fail()
        return list(self.flights)

    def get_available_seats(self, flight_number):
        self._maybe_fail()
        return self.seats.get(flight_number, 0)

    def book_flight(self, flight_number, user_id, passengers):
        self._maybe_fail()
        self.bookings.append((flight_number, user_id, list(passengers)))
        return self.book_result


class FakeAiService:
    def __init__(self, reply="Resposta genérica", fail=False):
        self.reply = reply
        self.fail = fail
        self.calls = []

    def generate_response(self, message):
        self.calls.append(message)
        if self.fail:
            raise RuntimeError("llm down")
        return self.reply


# --- Dados de passageiro válidos ---

VALID_PASSENGER = ["Maria Silva", "12.345.678-9", "529.982.247-25", "01/01/1990"]
SEARCH_MESSAGE = "de São Paulo para Rio de Janeiro em 28/05/2025"


def run(coro):
    return asyncio.run(coro)


@pytest.fixture
def tickets():
    return FakeTicketService()


@pytest.fixture
def ai():
    return FakeAiService()


@pytest.fixture
def store():
    return MemoryStore(ttl_seconds=60)


@pytest.fixture
def router(store, tickets, ai):
    return DialogueRouter(
        store=store,
        tickets=tickets,
        ai=ai,
        classifier=IntentClassifier(),
        locks=SessionLocks(),
        timeout=2.0,
    )


@pytest.fixture
def chat(router):
    """Envia uma mensagem síncrona para a sessão 's1'."""
    def _send(message, session_id="s1", user_id="u1"):
        return run(router.process_message(user_id, message, session_id))
    return _send


def put_raw(store, sid, raw):
    """Grava um payload arbitrário no MemoryStore, sem passar pelo SessionState."""
    store._write(sid, raw)
