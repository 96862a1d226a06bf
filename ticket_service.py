# ticket_service.py
"""
Inventário de voos simulado, com controle de assentos por voo.

Usado quando nenhum TICKET_API_URL está configurado (dev/testes). A interface
é a mesma do TicketApiClient: search_flights, search_all_flights,
get_available_seats, book_flight.
"""
from __future__ import annotations

import logging
import threading
from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Dict, Iterable, List, Optional

from models import Flight, Passenger

logger = logging.getLogger(__name__)


def _seed_flights(now: datetime) -> List[Flight]:
    def f(number, origin, destination, dep, arr, price, airline):
        return Flight(
            flight_number=number, origin=origin, destination=destination,
            departure_time=dep, arrival_time=arr, price=Decimal(price), airline=airline,
        )

    return [
        f("AZ101", "GRU", "LIS", now + timedelta(days=7, hours=10), now + timedelta(days=7, hours=22), "1500.50", "Azul"),
        f("TP202", "GRU", "LIS", now + timedelta(days=7, hours=14), now + timedelta(days=8, hours=2), "1650.00", "TAP"),
        f("LA303", "GRU", "SCL", now + timedelta(days=10, hours=8), now + timedelta(days=10, hours=12), "800.75", "LATAM"),
        f("GO3404", "CGH", "SDU", now + timedelta(hours=9), now + timedelta(hours=10), "350.00", "GOL"),
        f("GO34094", "SÃO PAULO", "RIO DE JANEIRO", datetime(2025, 5, 28, 8, 0), datetime(2025, 5, 28, 9, 5), "350.00", "GOL"),
    ]


DEFAULT_SEATS = {
    "AZ101": 120,
    "TP202": 80,
    "LA303": 45,
    "GO3404": 0,
    "GO34094": 120,
}


class SimulatedTicketService:
    def __init__(self, flights: Optional[Iterable[Flight]] = None, seats: Optional[Dict[str, int]] = None):
        self._flights: List[Flight] = list(flights) if flights is not None else _seed_flights(datetime.now())
        self._seats: Dict[str, int] = {
            fl.flight_number.upper(): (seats or DEFAULT_SEATS).get(fl.flight_number, 0)
            for fl in self._flights
        }
        self._lock = threading.Lock()

    def search_flights(self, origin: str, destination: str, when: date) -> List[Flight]:
        logger.info("Simulated search %s -> %s on %s", origin, destination, when)
        o, d = (origin or "").strip().upper(), (destination or "").strip().upper()
        found = [
            fl for fl in self._flights
            if fl.origin.upper() == o
            and fl.destination.upper() == d
            and fl.departure_time.date() == when
        ]
        logger.info("Found %d flights matching criteria", len(found))
        return found

    def search_all_flights(self) -> List[Flight]:
        return list(self._flights)

    def get_available_seats(self, flight_number: str) -> int:
        with self._lock:
            return self._seats.get((flight_number or "").upper(), 0)

    def book_flight(self, flight_number: str, user_id: str, passengers: List[Passenger]) -> bool:
        key = (flight_number or "").upper()
        with self._lock:
            if key not in self._seats:
                logger.warning("Attempted to book non-existent flight %s", flight_number)
                return False
            if not passengers or len(passengers) > self._seats[key]:
                logger.warning(
                    "Not enough seats on %s: requested=%d available=%d",
                    key, len(passengers or []), self._seats[key],
                )
                return False
            self._seats[key] -= len(passengers)
        logger.info("✅ Flight %s booked for user %s (%d passengers)", key, user_id, len(passengers))
        return True


def make_ticket_service(settings):
    url = getattr(settings, "TICKET_API_URL", None)
    if url:
        from api_clients import TicketApiClient

        # timeout HTTP igual ao limite de call_external
        return TicketApiClient(url, timeout=getattr(settings, "SERVICE_TIMEOUT_SEC", 10.0))
    return SimulatedTicketService()
