# file: models.py
from __future__ import annotations

import datetime as dt
import uuid
from decimal import Decimal
from enum import Enum
from typing import Annotated, Any, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


# ──────────────────────────────────────────────────────────────────────────────
# Estados da conversa

class Intent(str, Enum):
    NONE = "None"
    GREETING = "Greeting"
    HELP = "Help"
    SEARCH_FLIGHTS = "SearchFlights"
    BOOK_FLIGHT = "BookFlight"
    WAITING_FOR_FLIGHT_DETAILS = "WaitingForFlightDetails"
    WAITING_FOR_FLIGHT_SELECTION = "WaitingForFlightSelection"
    WAITING_FOR_PASSENGER_COUNT = "WaitingForPassengerCount"
    WAITING_FOR_PASSENGER_DETAILS = "WaitingForPassengerDetails"
    CONFIRM_RESERVATION = "ConfirmReservation"


class PassengerStep(str, Enum):
    NONE = "None"
    NAME = "Name"
    RG = "RG"
    CPF = "CPF"
    BIRTH_DATE = "BirthDate"
    COMPLETE = "Complete"

    def next(self) -> "PassengerStep":
        steps = list(PassengerStep)
        idx = steps.index(self)
        return steps[min(idx + 1, len(steps) - 1)]


# ──────────────────────────────────────────────────────────────────────────────
# Domínio

class Flight(BaseModel):
    model_config = ConfigDict(frozen=True)

    flight_number: str
    origin: str
    destination: str
    departure_time: dt.datetime
    arrival_time: dt.datetime
    price: Decimal
    airline: str


class Passenger(BaseModel):
    # parcial enquanto a coleta está em andamento
    name: str = ""
    rg: str = ""
    cpf: str = ""
    birth_date: Optional[dt.date] = None


class Reservation(BaseModel):
    reservation_id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    flight_number: str
    flight_details: Flight
    user_id: str
    passengers: List[Passenger] = Field(default_factory=list)
    created_at: dt.datetime = Field(default_factory=lambda: dt.datetime.now(dt.timezone.utc))
    confirmed: bool = False


class SearchParams(BaseModel):
    origin: Optional[str] = None
    destination: Optional[str] = None
    date: Optional[dt.date] = None

    @property
    def is_valid(self) -> bool:
        return bool(
            (self.origin or "").strip()
            and (self.destination or "").strip()
            and self.date is not None
        )


# ──────────────────────────────────────────────────────────────────────────────
# Contexto da sessão (union com tag "kind")

class SearchContext(BaseModel):
    kind: Literal["search"] = "search"
    flights: List[Flight] = Field(default_factory=list)
    search_params: SearchParams = Field(default_factory=SearchParams)


class BookingContext(BaseModel):
    kind: Literal["booking"] = "booking"
    flight_number: str
    flight_details: Flight
    passenger_count: int = 0
    passengers: List[Passenger] = Field(default_factory=list)
    current_passenger_index: int = 0
    current_step: PassengerStep = PassengerStep.NONE
    current_passenger: Passenger = Field(default_factory=Passenger)


SessionContext = Annotated[Union[SearchContext, BookingContext], Field(discriminator="kind")]


class SessionState(BaseModel):
    intent: Intent = Intent.NONE
    context: Optional[SessionContext] = None

    def describe(self) -> str:
        return f"Intent: {self.intent.value}, Context: {'Present' if self.context else 'Empty'}"


# ──────────────────────────────────────────────────────────────────────────────
# Envelope de entrada/saída

class ChatRequest(BaseModel):
    user_id: str = Field(min_length=1)
    message: str = Field(min_length=1)
    session_id: Optional[str] = None


class ChatResponse(BaseModel):
    response: str
    session_id: str
    action_data: Optional[Any] = None
