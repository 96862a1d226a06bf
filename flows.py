# flows.py
"""
Handlers dos sub-fluxos de reserva: busca, seleção do voo, quantidade de
passageiros, coleta dos dados de cada passageiro e confirmação.

Cada handler recebe o SessionState do turno e devolve um TurnResult com a
resposta, o novo estado (sempre um objeto novo) e o action_data opcional.

Falhas do Ticket Service sobem como ExternalServiceError e contexto
incompatível com o intent sobe como ContextMismatchError; o DialogueRouter
trata os dois.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Callable, Optional

from constants import UI_TEXT
from errors import ContextMismatchError
from external import call_external
from models import (
    BookingContext,
    Intent,
    Passenger,
    PassengerStep,
    Reservation,
    SearchContext,
    SessionState,
)
from nlp_utils import extract_flight_number, extract_passenger_count, extract_search_params, is_affirmative, is_negative
from response_formatters import format_booking_summary, format_flights, format_reservation
from validators import parse_birth_date, validate_birth_date, validate_cpf, validate_name, validate_rg

logger = logging.getLogger(__name__)

TICKET_SERVICE = "ticket_service"


@dataclass
class TurnResult:
    reply: str
    state: SessionState
    action_data: Optional[Any] = None


def _reset(reply: str, action_data: Any = None) -> TurnResult:
    return TurnResult(reply, SessionState(), action_data)


def _booking_context(state: SessionState) -> BookingContext:
    if not isinstance(state.context, BookingContext):
        raise ContextMismatchError(f"{state.intent.value} expects a booking context")
    return state.context


class BookingFlows:
    def __init__(self, tickets, timeout: float = 10.0, today: Optional[Callable[[], date]] = None):
        self.tickets = tickets
        self.timeout = timeout
        self._today = today or date.today

    async def _ticket(self, fn, *args):
        return await call_external(TICKET_SERVICE, fn, *args, timeout=self.timeout)

    # ──────────────────────────────────────────────────────────────────────
    # SearchFlights

    async def search(self, message: str, state: SessionState, user_id: str) -> TurnResult:
        params = extract_search_params(message)
        if not params.is_valid:
            return TurnResult(
                UI_TEXT["ask_search_details"],
                SessionState(intent=Intent.WAITING_FOR_FLIGHT_DETAILS, context=state.context),
            )

        flights = await self._ticket(self.tickets.search_flights, params.origin, params.destination, params.date)
        if not flights:
            return _reset(
                UI_TEXT["no_flights"].format(
                    origin=params.origin, destination=params.destination, date=f"{params.date:%d/%m/%Y}"
                )
            )

        seats = {}
        for fl in flights:
            seats[fl.flight_number] = await self._ticket(self.tickets.get_available_seats, fl.flight_number)

        ctx = SearchContext(flights=list(flights), search_params=params)
        action = {
            "flights": [
                {**fl.model_dump(mode="json"), "available_seats": seats[fl.flight_number]} for fl in flights
            ],
            "search_params": params.model_dump(mode="json"),
        }
        return TurnResult(
            format_flights(params, ctx.flights, seats),
            SessionState(intent=Intent.WAITING_FOR_FLIGHT_SELECTION, context=ctx),
            action,
        )

    # ──────────────────────────────────────────────────────────────────────
    # BookFlight

    async def select_flight(self, message: str, state: SessionState, user_id: str) -> TurnResult:
        if state.intent != Intent.WAITING_FOR_FLIGHT_SELECTION:
            return TurnResult(UI_TEXT["search_first"], SessionState(intent=Intent.WAITING_FOR_FLIGHT_DETAILS))
        if not isinstance(state.context, SearchContext):
            raise ContextMismatchError("flight selection expects a search context")

        number = extract_flight_number(message)
        if not number:
            return TurnResult(UI_TEXT["ask_flight_number"], state)

        all_flights = await self._ticket(self.tickets.search_all_flights)
        flight = next((fl for fl in all_flights if fl.flight_number.upper() == number), None)
        if flight is None:
            return TurnResult(UI_TEXT["flight_not_found"].format(flight_number=number), state)

        seats = await self._ticket(self.tickets.get_available_seats, flight.flight_number)
        if seats <= 0:
            logger.info("Flight %s has no seats left", flight.flight_number)
            return _reset(UI_TEXT["flight_full"].format(flight_number=flight.flight_number))

        ctx = BookingContext(flight_number=flight.flight_number, flight_details=flight)
        reply = UI_TEXT["ask_passenger_count"].format(
            flight_number=flight.flight_number,
            origin=flight.origin,
            destination=flight.destination,
            seats=seats,
        )
        return TurnResult(
            reply,
            SessionState(intent=Intent.WAITING_FOR_PASSENGER_COUNT, context=ctx),
            {"flight": flight.model_dump(mode="json"), "available_seats": seats},
        )

    # ──────────────────────────────────────────────────────────────────────
    # WaitingForPassengerCount

    async def passenger_count(self, message: str, state: SessionState, user_id: str) -> TurnResult:
        ctx = _booking_context(state)

        count = extract_passenger_count(message)
        if count is None or count <= 0:
            return TurnResult(UI_TEXT["invalid_passenger_count"], state)

        seats = await self._ticket(self.tickets.get_available_seats, ctx.flight_number)
        if count > seats:
            return TurnResult(
                UI_TEXT["too_many_passengers"].format(seats=seats, flight_number=ctx.flight_number),
                state,
            )

        new_ctx = BookingContext(
            flight_number=ctx.flight_number,
            flight_details=ctx.flight_details,
            passenger_count=count,
            passengers=[],
            current_passenger_index=0,
            current_step=PassengerStep.NAME,
            current_passenger=Passenger(),
        )
        return TurnResult(
            UI_TEXT["ask_name"].format(n=1),
            SessionState(intent=Intent.WAITING_FOR_PASSENGER_DETAILS, context=new_ctx),
        )

    # ──────────────────────────────────────────────────────────────────────
    # WaitingForPassengerDetails

    async def passenger_details(self, message: str, state: SessionState, user_id: str) -> TurnResult:
        ctx = _booking_context(state)
        if ctx.passenger_count <= 0 or ctx.current_passenger_index >= ctx.passenger_count:
            raise ContextMismatchError("passenger cursor out of range")

        value = (message or "").strip()
        n = ctx.current_passenger_index + 1
        step = ctx.current_step
        current = ctx.current_passenger

        def advance(passenger: Passenger, next_prompt: str) -> TurnResult:
            new_ctx = ctx.model_copy(update={"current_passenger": passenger, "current_step": step.next()})
            return TurnResult(
                next_prompt.format(n=n),
                SessionState(intent=Intent.WAITING_FOR_PASSENGER_DETAILS, context=new_ctx),
            )

        if step == PassengerStep.NAME:
            if not validate_name(value):
                return TurnResult(UI_TEXT["invalid_name"].format(n=n), state)
            return advance(current.model_copy(update={"name": value}), UI_TEXT["ask_rg"])

        if step == PassengerStep.RG:
            if not validate_rg(value):
                return TurnResult(UI_TEXT["invalid_rg"].format(n=n), state)
            return advance(current.model_copy(update={"rg": value}), UI_TEXT["ask_cpf"])

        if step == PassengerStep.CPF:
            if not validate_cpf(value):
                return TurnResult(UI_TEXT["invalid_cpf"].format(n=n), state)
            return advance(current.model_copy(update={"cpf": value}), UI_TEXT["ask_birth_date"])

        if step == PassengerStep.BIRTH_DATE:
            born = parse_birth_date(value)
            if born is None:
                return TurnResult(UI_TEXT["invalid_birth_date_format"], state)
            if not validate_birth_date(born, self._today()):
                return TurnResult(UI_TEXT["invalid_birth_date"].format(n=n), state)
            return self._passenger_complete(ctx, current.model_copy(update={"birth_date": born}))

        raise ContextMismatchError(f"unexpected passenger step {step.value}")

    def _passenger_complete(self, ctx: BookingContext, passenger: Passenger) -> TurnResult:
        passengers = [*ctx.passengers, passenger]
        index = ctx.current_passenger_index + 1
        done = UI_TEXT["passenger_done"].format(n=index)

        if index < ctx.passenger_count:
            new_ctx = ctx.model_copy(update={
                "passengers": passengers,
                "current_passenger_index": index,
                "current_step": PassengerStep.NAME,
                "current_passenger": Passenger(),
            })
            return TurnResult(
                f"{done}\n{UI_TEXT['ask_name'].format(n=index + 1)}",
                SessionState(intent=Intent.WAITING_FOR_PASSENGER_DETAILS, context=new_ctx),
            )

        new_ctx = ctx.model_copy(update={
            "passengers": passengers,
            "current_passenger_index": index,
            "current_step": PassengerStep.COMPLETE,
            "current_passenger": Passenger(),
        })
        total = ctx.flight_details.price * len(passengers)
        return TurnResult(
            f"{done}\n{format_booking_summary(new_ctx)}",
            SessionState(intent=Intent.CONFIRM_RESERVATION, context=new_ctx),
            {
                "flight": ctx.flight_details.model_dump(mode="json"),
                "passenger_count": len(passengers),
                "total_price": str(total),
            },
        )

    # ──────────────────────────────────────────────────────────────────────
    # ConfirmReservation

    async def confirm(self, message: str, state: SessionState, user_id: str) -> TurnResult:
        ctx = _booking_context(state)
        if ctx.current_step != PassengerStep.COMPLETE or len(ctx.passengers) != ctx.passenger_count:
            raise ContextMismatchError("confirmation before the passenger roster is complete")

        yes, no = is_affirmative(message), is_negative(message)
        if yes == no:
            return TurnResult(UI_TEXT["confirm_reprompt"], state)
        if no:
            logger.info("Booking of %s cancelled by %s", ctx.flight_number, user_id)
            return _reset(UI_TEXT["booking_cancelled"])

        booked = await self._ticket(self.tickets.book_flight, ctx.flight_number, user_id, list(ctx.passengers))
        if not booked:
            logger.warning("Ticket service refused booking of %s for %s", ctx.flight_number, user_id)
            return _reset(UI_TEXT["booking_failed"].format(flight_number=ctx.flight_number))

        reservation = Reservation(
            flight_number=ctx.flight_number,
            flight_details=ctx.flight_details,
            user_id=user_id,
            passengers=list(ctx.passengers),
            confirmed=True,
        )
        logger.info("✅ Reservation %s confirmed (%s, %d pax)", reservation.reservation_id, ctx.flight_number, len(ctx.passengers))
        return _reset(format_reservation(reservation), reservation.model_dump(mode="json"))
